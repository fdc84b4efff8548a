"""HTTP client for the banking partner API."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING
from uuid import NAMESPACE_URL, uuid5

import httpx
from pydantic import ValidationError

from offramp.adapters.http_resilience import ClientSession
from offramp.config.banking import BankingConfig, get_banking_config

from .schema import (
    CreateLiquidationAddressRequest,
    ErrorResponse,
    LiquidationAddressList,
    LiquidationAddressPayload,
)
from .translator import build_cashout_submission, translate_liquidation_address

if TYPE_CHECKING:
    from collections.abc import Callable

    from offramp.adapters.http_resilience import ResilientClient
    from offramp.config.http_resilience import ResilienceConfig
    from offramp.domain.model import LiquidationAddress, SettlementRecord

log = getLogger(__name__)


class BankingAPIError(RuntimeError):
    """Raised when the banking partner rejects a request or answers unexpectedly."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def idempotency_key(customer_id: str, chain: str, currency: str, external_account_id: str) -> str:
    """Stable key for creating the address of one (chain, currency, account) triple."""
    name = f"liquidation:{customer_id}:{chain.lower()}:{currency.lower()}:{external_account_id}"
    return str(uuid5(NAMESPACE_URL, name))


class BankingClient:
    """Low-level HTTP client for liquidation addresses and cash-out submissions."""

    def __init__(
        self,
        *,
        config: BankingConfig | None = None,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config or get_banking_config()
        self._session = ClientSession(self._config.resilience, client_factory)

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> BankingClient:
        return self

    def __exit__(self, *_exc: object) -> None:
        self.close()

    def list_liquidation_addresses(self, customer_id: str) -> list[LiquidationAddress]:
        payloads = self._session.run(self._list_async, customer_id)
        return [translate_liquidation_address(payload) for payload in payloads]

    def create_liquidation_address(
        self,
        customer_id: str,
        *,
        chain: str,
        currency: str,
        external_account_id: str,
        rail: str,
        settlement_currency: str,
    ) -> LiquidationAddress:
        body = CreateLiquidationAddressRequest(
            chain=chain,
            currency=currency,
            external_account_id=external_account_id,
            destination_payment_rail=rail,
            destination_currency=settlement_currency,
        )
        key = idempotency_key(customer_id, chain, currency, external_account_id)
        payload = self._session.run(self._create_async, customer_id, body, key)
        return translate_liquidation_address(payload)

    def submit_settlement(self, record: SettlementRecord) -> None:
        self._session.run(self._submit_async, record)

    async def _list_async(
        self, client: ResilientClient, customer_id: str
    ) -> list[LiquidationAddressPayload]:
        response = await client.get(
            f"customers/{customer_id}/liquidation_addresses",
            headers=self._headers(),
        )
        payload = self._json(response)
        try:
            return LiquidationAddressList.model_validate(payload).data
        except ValidationError as exc:
            raise BankingAPIError("Unexpected liquidation address listing") from exc

    async def _create_async(
        self,
        client: ResilientClient,
        customer_id: str,
        body: CreateLiquidationAddressRequest,
        key: str,
    ) -> LiquidationAddressPayload:
        response = await client.post(
            f"customers/{customer_id}/liquidation_addresses",
            json=body.model_dump(),
            headers=self._headers(idempotency=key),
        )
        payload = self._json(response)
        try:
            return LiquidationAddressPayload.model_validate(payload)
        except ValidationError as exc:
            raise BankingAPIError("Unexpected liquidation address payload") from exc

    async def _submit_async(self, client: ResilientClient, record: SettlementRecord) -> None:
        submission = build_cashout_submission(record)
        response = await client.post(
            "cashouts",
            json=submission.model_dump(by_alias=True, exclude_none=True),
            headers=self._headers(),
        )
        self._json(response)

    def _headers(self, *, idempotency: str | None = None) -> dict[str, str]:
        headers = {"Api-Key": self._config.api_key, "Accept": "application/json"}
        if idempotency is not None:
            headers["Idempotency-Key"] = idempotency
        return headers

    def _json(self, response: httpx.Response) -> object:
        if response.is_error:
            message = f"Banking partner answered {response.status_code}"
            try:
                error = ErrorResponse.model_validate(response.json())
                message = f"{message}: {error.message}"
            except (ValueError, ValidationError):
                pass
            log.error(message)
            raise BankingAPIError(message, status_code=response.status_code)
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise BankingAPIError("Banking partner returned invalid JSON") from exc


if TYPE_CHECKING:
    from offramp.domain.ports import BankingPartner

    _banking_check: BankingPartner = BankingClient()
