"""Pydantic models describing the banking partner API payloads."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from decimal import Decimal
from typing import cast

from pydantic import BaseModel, ConfigDict, Field, field_serializer, model_validator


class BankingBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class LiquidationAddressPayload(BankingBaseModel):
    id: str
    address: str
    chain: str
    currency: str
    external_account_id: str
    customer_id: str | None = None
    destination_payment_rail: str | None = None
    destination_currency: str | None = None


class LiquidationAddressList(BankingBaseModel):
    count: int | None = None
    data: list[LiquidationAddressPayload] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _accept_bare_list(cls, value: object) -> object:
        # some deployments answer with the bare array instead of an envelope
        if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
            items = cast(Sequence[object], value)
            return {"count": len(items), "data": list(items)}
        return value


class CreateLiquidationAddressRequest(BankingBaseModel):
    chain: str
    currency: str
    external_account_id: str
    destination_payment_rail: str
    destination_currency: str


class CashoutSubmission(BankingBaseModel):
    link: str
    bridge_customer_id: str = Field(serialization_alias="bridgeCustomerId")
    liquidation_address_id: str = Field(serialization_alias="liquidationAddressId")
    cashout_transaction_hash: str = Field(serialization_alias="cashoutTransactionHash")
    external_account_id: str = Field(serialization_alias="externalAccountId")
    chain_id: str = Field(serialization_alias="chainId")
    token_name: str = Field(serialization_alias="tokenName")
    usd_value: Decimal | None = Field(default=None, serialization_alias="usdValue")
    fee: Decimal | None = None

    @field_serializer("usd_value", "fee")
    def _decimal_as_string(self, value: Decimal | None) -> str | None:
        return None if value is None else str(value)


class ErrorResponse(BankingBaseModel):
    code: str | None = None
    message: str = "Unknown banking partner error"

    @model_validator(mode="before")
    @classmethod
    def _flatten_error(cls, value: object) -> object:
        if isinstance(value, Mapping):
            mapping_value = cast(Mapping[str, object], value)
            nested = mapping_value.get("error")
            if isinstance(nested, Mapping):
                return nested
            if isinstance(nested, str) and "message" not in mapping_value:
                return {"message": nested}
        return value
