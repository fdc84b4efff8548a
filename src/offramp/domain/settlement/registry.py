"""Resolve or provision the partner deposit address for a bank account."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from offramp.domain.errors import AddressProvisioningFailure
from offramp.domain.model import AccountKind, FiatCurrency, PaymentRail

if TYPE_CHECKING:
    from offramp.domain.model import LiquidationAddress
    from offramp.domain.ports import BankingPartner

log = getLogger(__name__)

type AddressKey = tuple[str, str, str, str]


def rail_for(kind: AccountKind | str) -> tuple[PaymentRail, FiatCurrency]:
    """IBAN accounts are paid out over SEPA in EUR, everything else over ACH in USD."""
    if kind == AccountKind.IBAN:
        return PaymentRail.SEPA, FiatCurrency.EUR
    return PaymentRail.ACH, FiatCurrency.USD


def address_key(
    customer_id: str, chain: str, currency: str, external_account_id: str
) -> AddressKey:
    return (customer_id, chain.lower(), currency.lower(), external_account_id)


@dataclass(slots=True)
class LiquidationAddressRegistry:
    """Idempotent resolve-or-create over the partner's liquidation addresses.

    The partner books every address as its own ledger entry, so a second
    address for the same (chain, currency, external account) must never be
    created. ``find`` is a pure query, ``create`` is guarded by it and by the
    addresses this registry already resolved.
    """

    banking: BankingPartner
    _resolved: dict[AddressKey, LiquidationAddress] = field(default_factory=dict)

    def resolve_or_create(
        self,
        customer_id: str,
        chain_name: str,
        currency_name: str,
        external_account_id: str,
        account_kind: AccountKind | str,
    ) -> LiquidationAddress:
        key = address_key(customer_id, chain_name, currency_name, external_account_id)
        cached = self._resolved.get(key)
        if cached is not None:
            return cached

        existing = self.find(customer_id, chain_name, currency_name, external_account_id)
        if existing is not None:
            log.info("Reusing liquidation address %s", existing.id)
            self._resolved[key] = existing
            return existing

        created = self.create(
            customer_id, chain_name, currency_name, external_account_id, account_kind
        )
        self._resolved[key] = created
        return created

    def find(
        self,
        customer_id: str,
        chain_name: str,
        currency_name: str,
        external_account_id: str,
    ) -> LiquidationAddress | None:
        try:
            addresses = self.banking.list_liquidation_addresses(customer_id)
        except Exception as exc:
            log.exception("Listing liquidation addresses for %s failed", customer_id)
            raise AddressProvisioningFailure() from exc

        wanted = address_key(customer_id, chain_name, currency_name, external_account_id)[1:]
        for address in addresses:
            if address.natural_key == wanted:
                return address
        return None

    def create(
        self,
        customer_id: str,
        chain_name: str,
        currency_name: str,
        external_account_id: str,
        account_kind: AccountKind | str,
    ) -> LiquidationAddress:
        key = address_key(customer_id, chain_name, currency_name, external_account_id)
        if key in self._resolved:
            raise AddressProvisioningFailure(
                "A liquidation address for this bank account already exists"
            )

        rail, settlement_currency = rail_for(account_kind)
        log.info(
            "Creating liquidation address on %s/%s paying out via %s",
            chain_name,
            currency_name,
            rail,
        )
        try:
            return self.banking.create_liquidation_address(
                customer_id,
                chain=chain_name,
                currency=currency_name,
                external_account_id=external_account_id,
                rail=rail.value,
                settlement_currency=settlement_currency.value,
            )
        except Exception as exc:
            log.exception("Creating liquidation address for %s failed", customer_id)
            raise AddressProvisioningFailure() from exc
