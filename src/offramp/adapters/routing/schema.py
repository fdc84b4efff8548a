"""Pydantic models describing the cross-chain routing API payloads."""

from __future__ import annotations

from collections.abc import Mapping
from typing import cast

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class RoutingBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class TokenPayload(RoutingBaseModel):
    address: str
    symbol: str | None = None
    decimals: int | None = None


class ChainOptionPayload(RoutingBaseModel):
    chain_id: str = Field(validation_alias=AliasChoices("chainId", "chain_id"))
    name: str | None = Field(
        default=None, validation_alias=AliasChoices("axelarChainName", "chainName", "name")
    )
    tokens: list[TokenPayload] = Field(default_factory=list)

    @field_validator("chain_id", mode="before")
    @classmethod
    def _stringify_chain_id(cls, value: object) -> object:
        return str(value) if isinstance(value, int) else value


class ChainOptionsResponse(RoutingBaseModel):
    chains: list[ChainOptionPayload] = Field(default_factory=list)


class RouteRequest(RoutingBaseModel):
    from_token: str = Field(serialization_alias="fromToken")
    from_chain: str = Field(serialization_alias="fromChain")
    to_token: str = Field(serialization_alias="toToken")
    to_chain: str = Field(serialization_alias="toChain")
    from_amount: str = Field(serialization_alias="fromAmount")
    from_address: str = Field(serialization_alias="fromAddress")
    to_address: str = Field(serialization_alias="toAddress")


class RouteEstimate(RoutingBaseModel):
    to_amount: str | None = Field(default=None, validation_alias=AliasChoices("toAmount", "to_amount"))
    to_amount_min: str | None = Field(
        default=None, validation_alias=AliasChoices("toAmountMin", "to_amount_min")
    )


class RoutePayload(RoutingBaseModel):
    estimate: RouteEstimate | None = None
    raw: dict[str, object] = Field(default_factory=dict, exclude=True)


class RouteResponse(RoutingBaseModel):
    route: RoutePayload | None = None

    @field_validator("route", mode="before")
    @classmethod
    def _keep_raw(cls, value: object) -> object:
        if isinstance(value, Mapping):
            data = dict(cast(Mapping[str, object], value))
            return {**data, "raw": data}
        return value
