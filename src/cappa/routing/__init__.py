"""Routing: exact-match endpoint and extension tables.

Routes are registered during setup and frozen before the first request.
"""

from cappa.routing.paths import join_route, normalize_route, route_for_file
from cappa.routing.table import EndpointTable, ExtensionTable

__all__ = [
    "EndpointTable",
    "ExtensionTable",
    "join_route",
    "normalize_route",
    "route_for_file",
]
