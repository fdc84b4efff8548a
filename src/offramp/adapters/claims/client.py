"""HTTP client for the gasless claim relay."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import BaseModel, ValidationError

from offramp.adapters.http_resilience import ClientSession
from offramp.config.claims import ClaimConfig, get_claim_config
from offramp.domain.model import PaymentLink

from .schema import ClaimResponse, CrossChainClaimRequest, DirectClaimRequest, LinkDetailsPayload

if TYPE_CHECKING:
    from collections.abc import Callable

    import httpx

    from offramp.adapters.http_resilience import ResilientClient
    from offramp.config.http_resilience import ResilienceConfig

log = getLogger(__name__)


class ClaimAPIError(RuntimeError):
    """Raised when the claim relay rejects a claim or answers unexpectedly."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ClaimClient:
    """Claims payment links through the relay, which pays the gas.

    Claim requests are sent once; the resilience configuration never retries
    POST requests, so a timeout surfaces as an error instead of a second claim.
    """

    def __init__(
        self,
        *,
        config: ClaimConfig | None = None,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config or get_claim_config()
        self._session = ClientSession(self._config.resilience, client_factory)

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> ClaimClient:
        return self

    def __exit__(self, *_exc: object) -> None:
        self.close()

    def claim_direct(self, address: str, link: str) -> str:
        request = DirectClaimRequest(address=address, link=link)
        return self._session.run(self._claim_async, "claim", request)

    def claim_cross_chain(
        self,
        address: str,
        link: str,
        *,
        destination_chain_id: str,
        destination_token: str,
    ) -> str:
        request = CrossChainClaimRequest(
            address=address,
            link=link,
            destination_chain_id=destination_chain_id,
            destination_token=destination_token,
        )
        return self._session.run(self._claim_async, "claim-x-chain", request)

    def get_link_details(self, link: str) -> PaymentLink:
        payload = self._session.run(self._link_details_async, link)
        return PaymentLink(
            link=payload.link,
            chain_id=payload.chain_id,
            token_address=payload.token_address,
            token_amount=payload.token_amount,
            token_decimals=payload.token_decimals,
            sender_address=payload.sender_address,
            contract_version=payload.contract_version,
            token_symbol=payload.token_symbol,
            claimed=payload.claimed,
        )

    async def _claim_async(self, client: ResilientClient, path: str, request: BaseModel) -> str:
        response = await client.post(
            path, json=request.model_dump(by_alias=True), headers=self._headers()
        )
        self._raise_for_error(response)
        try:
            claim = ClaimResponse.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise ClaimAPIError("Unexpected claim response payload") from exc
        if not claim.tx_hash:
            raise ClaimAPIError("Claim response carried no transaction hash")
        return claim.tx_hash

    async def _link_details_async(self, client: ResilientClient, link: str) -> LinkDetailsPayload:
        response = await client.get("links", params={"link": link}, headers=self._headers())
        self._raise_for_error(response)
        try:
            return LinkDetailsPayload.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise ClaimAPIError("Unexpected link details payload") from exc

    def _headers(self) -> dict[str, str]:
        return {"api-key": self._config.api_key}

    @staticmethod
    def _raise_for_error(response: httpx.Response) -> None:
        if response.is_error:
            log.error("Claim relay answered %s: %s", response.status_code, response.text[:200])
            raise ClaimAPIError(
                f"Claim relay answered {response.status_code}", status_code=response.status_code
            )


if TYPE_CHECKING:
    from offramp.domain.ports import ClaimService

    _claim_check: ClaimService = ClaimClient()
