"""Public interface for the identity service adapter."""

from __future__ import annotations

from .client import IdentityAPIError, IdentityClient, translate_account, translate_user

__all__ = ["IdentityAPIError", "IdentityClient", "translate_account", "translate_user"]
