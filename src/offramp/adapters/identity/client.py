"""HTTP client for the identity service."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import ValidationError

from offramp.adapters.http_resilience import ClientSession
from offramp.config.identity import IdentityConfig, get_identity_config
from offramp.domain.model import Account, AccountKind, UserContext

from .schema import AccountPayload, UserResponse

if TYPE_CHECKING:
    from collections.abc import Callable

    from offramp.adapters.http_resilience import ResilientClient
    from offramp.config.http_resilience import ResilienceConfig

log = getLogger(__name__)


class IdentityAPIError(RuntimeError):
    """Raised when the identity service cannot provide the user context."""


def translate_account(payload: AccountPayload) -> Account | None:
    try:
        kind = AccountKind(payload.account_type.lower())
    except ValueError:
        log.warning("Ignoring account %s of unknown type %r", payload.account_id, payload.account_type)
        return None
    return Account(
        identifier=payload.account_identifier,
        kind=kind,
        external_account_id=payload.bridge_account_id,
        account_id=payload.account_id,
    )


def translate_user(response: UserResponse) -> UserContext:
    accounts = tuple(
        account
        for account in (translate_account(payload) for payload in response.accounts)
        if account is not None
    )
    return UserContext(
        user_id=response.user.user_id,
        customer_id=response.user.bridge_customer_id,
        accounts=accounts,
        full_name=response.user.full_name,
        email=response.user.email,
    )


class IdentityClient:
    def __init__(
        self,
        *,
        config: IdentityConfig | None = None,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config or get_identity_config()
        self._session = ClientSession(self._config.resilience, client_factory)

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> IdentityClient:
        return self

    def __exit__(self, *_exc: object) -> None:
        self.close()

    def get_user_context(self, session_token: str) -> UserContext:
        return translate_user(self._session.run(self._fetch_user_async, session_token))

    async def _fetch_user_async(self, client: ResilientClient, session_token: str) -> UserResponse:
        response = await client.get(
            "users/me", headers={"Authorization": f"Bearer {session_token}"}
        )
        if response.is_error:
            raise IdentityAPIError(f"Identity service answered {response.status_code}")
        try:
            return UserResponse.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise IdentityAPIError("Unexpected user payload") from exc


if TYPE_CHECKING:
    from offramp.domain.ports import IdentityService

    _identity_check: IdentityService = IdentityClient()
