"""Public interface for the claim relay adapter."""

from __future__ import annotations

from .client import ClaimAPIError, ClaimClient
from .schema import LinkDetailsPayload

__all__ = ["ClaimAPIError", "ClaimClient", "LinkDetailsPayload"]
