"""Application configuration.

AppConfig is a frozen dataclass: immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(port=3000, debug=True)
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False

    # Reload (development only)
    reload: bool = False
    reload_dirs: tuple[str, ...] = ()  # Extra directories to watch alongside cwd

    workers: int = 1

    # Static mounts
    index_name: str = "index"  # "index.*" files collapse onto their directory route
