"""Port for the on-chain claim relay."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from offramp.domain.model import PaymentLink


@runtime_checkable
class ClaimService(Protocol):
    def claim_direct(self, address: str, link: str) -> str: ...

    def claim_cross_chain(
        self,
        address: str,
        link: str,
        *,
        destination_chain_id: str,
        destination_token: str,
    ) -> str: ...

    def get_link_details(self, link: str) -> PaymentLink: ...
