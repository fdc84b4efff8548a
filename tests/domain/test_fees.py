from __future__ import annotations

from decimal import Decimal

import pytest

from offramp.domain.fees import fee_for, format_amount, round_for_display, total_received
from offramp.domain.model import AccountKind


def test_fee_per_account_kind() -> None:
    assert fee_for(AccountKind.IBAN) == Decimal("1")
    assert fee_for(AccountKind.US) == Decimal("0.5")
    assert fee_for("iban") == Decimal("1")


@pytest.mark.parametrize(
    ("usd", "kind", "expected"),
    [
        ("25", AccountKind.IBAN, "24.000000"),
        ("25", AccountKind.US, "24.500000"),
        ("10.1234565", AccountKind.US, "9.623457"),
        ("1.0000004", AccountKind.IBAN, "0.000000"),
    ],
)
def test_total_received(usd: str, kind: AccountKind, expected: str) -> None:
    assert total_received(Decimal(usd), kind) == Decimal(expected)


def test_round_for_display_uses_half_up() -> None:
    assert round_for_display(Decimal("0.0000005")) == Decimal("0.000001")
    assert round_for_display(Decimal("0.0000004")) == Decimal("0.000000")


def test_format_amount_strips_trailing_zeros() -> None:
    assert format_amount(Decimal("24.500000")) == "24.5"
    assert format_amount(Decimal("3")) == "3"
    assert format_amount(Decimal("0.0000001")) == "0"
    assert format_amount(Decimal("1.23456789")) == "1.234568"
