"""Public interface for the cross-chain routing adapter."""

from __future__ import annotations

from .client import RoutingAPIError, RoutingClient
from .translator import from_base_units, to_base_units, translate_option, translate_route

__all__ = [
    "RoutingAPIError",
    "RoutingClient",
    "from_base_units",
    "to_base_units",
    "translate_option",
    "translate_route",
]
