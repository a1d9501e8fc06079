"""Routing — exact-match route table keyed by (method, path).

Routes are registered during setup and the table is frozen before
the first request is served.
"""

from tern.routing.route import HTTPMethod, Route
from tern.routing.table import RouteTable

__all__ = ["HTTPMethod", "Route", "RouteTable"]
