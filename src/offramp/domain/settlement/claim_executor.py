"""Execute the on-chain claim of a payment link."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from offramp.domain.errors import ClaimExecutionFailure

if TYPE_CHECKING:
    from offramp.domain.model import LiquidationAddress, PaymentLink, RouteDecision
    from offramp.domain.ports import ClaimService

log = getLogger(__name__)


@dataclass(slots=True)
class LinkClaimExecutor:
    """Claims a link to a liquidation address, directly or via a cross-chain claim.

    Claiming is irrevocable, so the executor makes exactly one claim call per
    link and refuses to claim a link it has already claimed.
    """

    claims: ClaimService
    _claimed: dict[str, str] = field(default_factory=dict)

    def claim(
        self,
        decision: RouteDecision,
        liquidation_address: LiquidationAddress,
        link: PaymentLink,
    ) -> str:
        previous = self._claimed.get(link.link)
        if previous is not None:
            raise ClaimExecutionFailure(
                "This link was already claimed in this attempt", transaction_hash=previous
            )

        try:
            if decision.bridging_required:
                log.info(
                    "Claiming link cross-chain to %s on chain %s",
                    liquidation_address.address,
                    decision.destination_chain_id,
                )
                tx_hash = self.claims.claim_cross_chain(
                    liquidation_address.address,
                    link.link,
                    destination_chain_id=decision.destination_chain_id,
                    destination_token=decision.destination_token_address,
                )
            else:
                log.info("Claiming link to %s", liquidation_address.address)
                tx_hash = self.claims.claim_direct(liquidation_address.address, link.link)
        except ClaimExecutionFailure:
            raise
        except Exception as exc:
            log.exception("Claim call failed")
            raise ClaimExecutionFailure() from exc

        if not tx_hash or not tx_hash.strip():
            raise ClaimExecutionFailure("Claim service returned no transaction hash")

        self._claimed[link.link] = tx_hash
        log.info("Claim transaction %s", tx_hash)
        return tx_hash
