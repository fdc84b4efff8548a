"""Domain port definitions for adapters."""

from __future__ import annotations

from .banking import BankingPartner
from .claiming import ClaimService
from .identity import IdentityService
from .routing import RouteService
from .storage import KeyValueStore, SettlementHistory

__all__ = [
    "BankingPartner",
    "ClaimService",
    "IdentityService",
    "KeyValueStore",
    "RouteService",
    "SettlementHistory",
]
