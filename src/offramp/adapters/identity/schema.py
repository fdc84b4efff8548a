"""Pydantic models describing the identity service payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class IdentityBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class AccountPayload(IdentityBaseModel):
    account_id: str | None = None
    account_identifier: str
    account_type: str
    bridge_account_id: str | None = None


class UserPayload(IdentityBaseModel):
    user_id: str = Field(alias="userId")
    bridge_customer_id: str | None = None
    full_name: str | None = None
    email: str | None = None


class UserResponse(IdentityBaseModel):
    user: UserPayload
    accounts: list[AccountPayload] = Field(default_factory=list)
