"""Decide where claimed funds settle and whether they need bridging first."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Final

from offramp.domain.assets import (
    OPTIMISM_CHAIN_ID,
    PARTNER_CHAINS,
    USDC_OPTIMISM,
    is_testnet_chain,
    partner_chain_name,
    partner_token_name,
)
from offramp.domain.errors import RouteUnavailable
from offramp.domain.model import RouteDecision

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from offramp.domain.model import BridgeRoute, CrossChainOption, PaymentLink
    from offramp.domain.ports import RouteService

log = getLogger(__name__)

MIN_CROSS_CHAIN_VERSION: Final[str] = "v4.2"
EXCLUDED_BRIDGE_CHAINS: Final[frozenset[str]] = frozenset({"1"})

FALLBACK_CHAIN_ID: Final[str] = OPTIMISM_CHAIN_ID
FALLBACK_TOKEN_ADDRESS: Final[str] = USDC_OPTIMISM


@dataclass(slots=True)
class RouteResolver:
    """Map a link's (chain, token) onto a partner-supported settlement asset.

    Links already denominated in a partner asset settle directly. Anything else
    is bridged to USDC on Optimism; the fallback is fixed and does not depend on
    which cross-chain options the venue advertises, the options only gate
    whether bridging is possible at all.
    """

    route_service: RouteService

    def resolve(self, link: PaymentLink) -> RouteDecision:
        token_name = partner_token_name(link.chain_id, link.token_address)
        chain_name = partner_chain_name(link.chain_id)
        if token_name is not None and chain_name is not None:
            log.info("Link on %s/%s settles directly", chain_name, token_name)
            return RouteDecision(
                token_name=token_name,
                chain_name=chain_name,
                destination_chain_id=str(link.chain_id),
                destination_token_address=link.token_address,
            )

        options = self._eligible_options(link)
        if not options:
            raise RouteUnavailable()
        if not self._supports_cross_chain(link.contract_version):
            log.info(
                "Link contract %s is older than %s", link.contract_version, MIN_CROSS_CHAIN_VERSION
            )
            raise RouteUnavailable()

        route = self._route_to_fallback(link)
        fallback_token = partner_token_name(FALLBACK_CHAIN_ID, FALLBACK_TOKEN_ADDRESS)
        fallback_chain = partner_chain_name(FALLBACK_CHAIN_ID)
        if fallback_token is None or fallback_chain is None:
            raise RouteUnavailable("Settlement asset is not supported by the banking partner")

        log.info(
            "Bridging link from chain %s to %s/%s", link.chain_id, fallback_chain, fallback_token
        )
        return RouteDecision(
            token_name=fallback_token,
            chain_name=fallback_chain,
            destination_chain_id=FALLBACK_CHAIN_ID,
            destination_token_address=FALLBACK_TOKEN_ADDRESS,
            bridging_required=True,
            options=options,
            route=route,
        )

    def _eligible_options(self, link: PaymentLink) -> tuple[CrossChainOption, ...]:
        token_type = 0 if link.is_native_token else 1
        try:
            raw_options = self.route_service.get_options(
                str(link.chain_id), token_type, is_testnet=is_testnet_chain(link.chain_id)
            )
        except Exception:  # noqa: BLE001
            log.warning("Fetching cross-chain options for chain %s failed", link.chain_id, exc_info=True)
            return ()
        eligible = [
            option
            for option in raw_options
            if str(option.chain_id) not in EXCLUDED_BRIDGE_CHAINS
        ]
        return tuple(sort_options(eligible, source_chain_id=str(link.chain_id)))

    def _supports_cross_chain(self, contract_version: str) -> bool:
        try:
            return self.route_service.compare_versions(MIN_CROSS_CHAIN_VERSION, contract_version)
        except ValueError:
            log.warning("Cannot compare contract version %r", contract_version)
            return False

    def _route_to_fallback(self, link: PaymentLink) -> BridgeRoute:
        try:
            route = self.route_service.compute_route(
                source_token=link.token_address.lower(),
                source_chain_id=str(link.chain_id),
                destination_token=FALLBACK_TOKEN_ADDRESS,
                destination_chain_id=FALLBACK_CHAIN_ID,
                decimals=link.token_decimals,
                amount=link.token_amount,
                sender=link.sender_address,
            )
        except Exception as exc:
            raise RouteUnavailable() from exc
        if route is None:
            raise RouteUnavailable()
        return route


def sort_options(
    options: Iterable[CrossChainOption],
    *,
    source_chain_id: str,
    preferred: Sequence[str] = tuple(PARTNER_CHAINS),
) -> list[CrossChainOption]:
    """Source chain first, then partner-supported chains in table order, then the rest."""

    rank = {chain_id: index for index, chain_id in enumerate(preferred)}

    def key(option: CrossChainOption) -> tuple[int, int]:
        chain_id = str(option.chain_id)
        if chain_id == source_chain_id:
            return (0, 0)
        if chain_id in rank:
            return (1, rank[chain_id])
        return (2, 0)

    return sorted(options, key=key)
