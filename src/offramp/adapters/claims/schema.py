"""Pydantic models describing the claim relay API payloads."""

from __future__ import annotations

from decimal import Decimal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class ClaimBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class LinkDetailsPayload(ClaimBaseModel):
    link: str
    chain_id: str = Field(alias="chainId")
    token_address: str = Field(alias="tokenAddress")
    token_amount: Decimal = Field(alias="tokenAmount")
    token_decimals: int = Field(alias="tokenDecimals")
    sender_address: str = Field(alias="senderAddress")
    contract_version: str = Field(alias="contractVersion")
    token_symbol: str | None = Field(default=None, alias="tokenSymbol")
    claimed: bool = False

    @field_validator("chain_id", mode="before")
    @classmethod
    def _stringify_chain_id(cls, value: object) -> object:
        return str(value) if isinstance(value, int) else value


class DirectClaimRequest(ClaimBaseModel):
    address: str
    link: str


class CrossChainClaimRequest(ClaimBaseModel):
    address: str
    link: str
    destination_chain_id: str = Field(serialization_alias="destinationChainId")
    destination_token: str = Field(serialization_alias="destinationToken")


class ClaimResponse(ClaimBaseModel):
    tx_hash: str | None = Field(
        default=None, validation_alias=AliasChoices("txHash", "transactionHash", "hash")
    )
