"""Bank accounts and the user context handed over by the identity service."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from offramp.domain.model.enums import AccountKind

_WHITESPACE = re.compile(r"\s+")


def normalize_account_identifier(value: str) -> str:
    """Canonical form of a free-form IBAN / account number.

    Two identifiers denote the same account exactly when their normalized forms
    are equal. The same function is applied when accounts are built and when a
    recipient typed by the user is looked up.
    """

    return _WHITESPACE.sub("", value).casefold()


@dataclass(frozen=True, kw_only=True)
class Account:
    """A bank account linked at the banking partner."""

    identifier: str
    kind: AccountKind
    external_account_id: str | None = None
    account_id: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "identifier", normalize_account_identifier(self.identifier))

    def matches(self, recipient: str) -> bool:
        return self.identifier == normalize_account_identifier(recipient)


@dataclass(frozen=True, kw_only=True)
class UserContext:
    user_id: str
    customer_id: str | None = None
    accounts: tuple[Account, ...] = field(default_factory=tuple)
    full_name: str | None = None
    email: str | None = None

    def find_account(self, recipient: str) -> Account | None:
        for account in self.accounts:
            if account.matches(recipient):
                return account
        return None
