"""Endpoint and extension tables.

Both are plain string-keyed dicts populated during setup and frozen
before the first request, after which they are only read. Re-registering
a key replaces the previous entry and logs a warning.
"""

import logging
from typing import Generic, TypeVar

from cappa._internal.types import Handler, HandlerFactory
from cappa.routing.paths import normalize_extension, normalize_route

logger = logging.getLogger("cappa.app")

V = TypeVar("V")


class _FreezableTable(Generic[V]):
    """String-keyed table that refuses writes once frozen."""

    __slots__ = ("_entries", "_frozen")

    kind = "entry"

    def __init__(self) -> None:
        self._entries: dict[str, V] = {}
        self._frozen = False

    def _normalize(self, key: str) -> str:
        return key

    def add(self, key: str, value: V) -> str:
        """Store *value* under the normalized *key* and return that key."""
        if self._frozen:
            msg = f"Cannot register {self.kind} {key!r} after the app has started serving."
            raise RuntimeError(msg)
        normalized = self._normalize(key)
        if normalized in self._entries:
            logger.warning("Overwriting %s %r", self.kind, normalized)
        self._entries[normalized] = value
        return normalized

    def get(self, key: str) -> V | None:
        """Look up *key* after normalization; ``None`` when absent."""
        return self._entries.get(self._normalize(key))

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get(key) is not None

    def __len__(self) -> int:
        return len(self._entries)


class EndpointTable(_FreezableTable[Handler]):
    """Exact-match map from normalized route to handler.

    Usage::

        table = EndpointTable()
        table.add("/docs/", handler)
        table.get("/docs")  # -> handler
    """

    __slots__ = ()

    kind = "endpoint"

    def _normalize(self, key: str) -> str:
        return normalize_route(key)

    @property
    def routes(self) -> list[str]:
        """Registered routes in registration order."""
        return list(self._entries)


class ExtensionTable(_FreezableTable[HandlerFactory]):
    """Map from lowercase, dot-prefixed extension to handler factory."""

    __slots__ = ()

    kind = "extension handler"

    def _normalize(self, key: str) -> str:
        return normalize_extension(key)

    def get(self, key: str) -> HandlerFactory | None:
        # Request paths without an extension simply miss.
        if not key.strip().lstrip("."):
            return None
        return super().get(key)

    @property
    def extensions(self) -> list[str]:
        return list(self._entries)
