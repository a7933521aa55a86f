"""Static content: directory mounting and the default file responder."""

from cappa.static.files import StaticFile
from cappa.static.mount import Mount, MountedFile, walk_directory

__all__ = ["Mount", "MountedFile", "StaticFile", "walk_directory"]
