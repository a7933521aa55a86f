"""Directory mounting.

Walks a directory tree and turns every regular file into an endpoint:

    public/index.html       -> /
    public/about.html       -> /about.html
    public/docs/index.md    -> /docs
    public/docs/guide.md    -> /docs/guide.md

Security: every entry is resolved (following symlinks) and checked to be
inside the resolved root. Entries that escape the root are skipped, and
each resolved directory is visited at most once so symlink cycles end.
"""

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from cappa._internal.types import Handler
from cappa.errors import ConfigurationError
from cappa.routing.paths import (
    extension_of,
    is_index_file,
    join_route,
    normalize_route,
    route_for_file,
)
from cappa.routing.table import ExtensionTable
from cappa.static.files import StaticFile

logger = logging.getLogger("cappa.static")


@dataclass(frozen=True, slots=True)
class MountedFile:
    """A file discovered under a mount, and the route it is served at."""

    route: str
    path: Path


def resolve_root(directory: str | Path) -> Path:
    """Resolve a mount directory, raising ``ConfigurationError`` if unusable."""
    root = Path(directory).resolve()
    if not root.is_dir():
        msg = f"Cannot mount {str(directory)!r}: not a directory."
        raise ConfigurationError(msg)
    return root


def walk_directory(
    directory: str | Path,
    route: str = "/",
    *,
    index_name: str = "index",
    include_hidden: bool = False,
) -> Iterator[MountedFile]:
    """Yield a ``MountedFile`` for every servable file under *directory*.

    Entries are visited in sorted name order, so when two files collapse
    onto the same route (``index.html`` and ``index.md``) the later one
    consistently wins.
    """
    root = resolve_root(directory)
    yield from _walk(root, root, normalize_route(route), index_name, include_hidden, {root})


def _walk(
    root: Path,
    current: Path,
    route: str,
    index_name: str,
    include_hidden: bool,
    visited: set[Path],
) -> Iterator[MountedFile]:
    for entry in sorted(current.iterdir(), key=lambda p: p.name):
        if not include_hidden and entry.name.startswith("."):
            continue

        try:
            resolved = entry.resolve()
        except (OSError, RuntimeError, ValueError) as exc:
            logger.debug("Skipping %s: cannot resolve (%s)", entry, exc)
            continue
        if not resolved.is_relative_to(root):
            logger.debug("Skipping %s: resolves outside %s", entry, root)
            continue

        if resolved.is_dir():
            if resolved in visited:
                logger.debug("Skipping %s: directory already mounted", entry)
                continue
            visited.add(resolved)
            yield from _walk(
                root,
                entry,
                join_route(route, entry.name),
                index_name,
                include_hidden,
                visited,
            )
        elif resolved.is_file():
            yield MountedFile(route_for_file(route, entry.name, index_name), resolved)


def build_handler(
    mounted: MountedFile,
    extensions: ExtensionTable,
    *,
    cache_control: str | None = None,
) -> Handler:
    """Handler for a mounted file: its extension factory, else ``StaticFile``."""
    factory = extensions.get(extension_of(mounted.path.name))
    if factory is not None:
        return factory(mounted.path)
    return StaticFile(mounted.path, cache_control=cache_control)


def find_file(
    root: Path,
    mount_route: str,
    request_path: str,
    *,
    index_name: str = "index",
    include_hidden: bool = False,
) -> Path | None:
    """Map a request path onto a regular file inside a mount, if any.

    Used for extension fallback dispatch. Returns ``None`` when the path is
    outside the mount route, escapes *root*, names an index file (those are
    only served at their directory route), or is not a regular file.
    """
    path = normalize_route(request_path)
    prefix = normalize_route(mount_route)
    if prefix == "/":
        relative = path[1:]
    elif path.startswith(prefix + "/"):
        relative = path[len(prefix) + 1 :]
    else:
        return None

    if not relative:
        return None
    if not include_hidden and any(part.startswith(".") for part in relative.split("/")):
        return None
    if is_index_file(relative.rsplit("/", 1)[-1], index_name):
        return None
    try:
        candidate = (root / relative).resolve()
    except (OSError, RuntimeError, ValueError):
        return None
    if not candidate.is_relative_to(root) or not candidate.is_file():
        return None
    return candidate


@dataclass(frozen=True, slots=True)
class Mount:
    """A directory registered with ``App.mount_directory``."""

    root: Path
    route: str = "/"
    index_name: str = "index"
    include_hidden: bool = False
    cache_control: str | None = None

    def files(self) -> Iterator[MountedFile]:
        """Walk the mounted directory."""
        return walk_directory(
            self.root,
            self.route,
            index_name=self.index_name,
            include_hidden=self.include_hidden,
        )
