"""Shared type aliases used across cappa modules."""

from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeAlias

# Endpoint handler: user-defined function, optionally taking the request
Handler: TypeAlias = Callable[..., Any]

# Extension handler factory: builds a handler for one file on disk
HandlerFactory: TypeAlias = Callable[[Path], Handler]

# Error handler: receives (request, error?) and returns a response value
ErrorHandler: TypeAlias = Callable[..., Any]
