"""Port for the identity/KYC service that knows the user's linked bank accounts."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from offramp.domain.model import UserContext


@runtime_checkable
class IdentityService(Protocol):
    def get_user_context(self, session_token: str) -> UserContext: ...
