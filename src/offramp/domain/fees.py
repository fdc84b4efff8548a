"""Cash-out fees charged per payment rail."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Final

from offramp.domain.model.enums import AccountKind

SEPA_FEE_USD: Final[Decimal] = Decimal("1")
ACH_FEE_USD: Final[Decimal] = Decimal("0.5")
DISPLAY_FRACTION_DIGITS: Final[int] = 6

_DISPLAY_QUANTUM: Final[Decimal] = Decimal(1).scaleb(-DISPLAY_FRACTION_DIGITS)


def fee_for(kind: AccountKind | str) -> Decimal:
    """SEPA transfers (IBAN accounts) cost $1, every other rail $0.50."""
    return SEPA_FEE_USD if kind == AccountKind.IBAN else ACH_FEE_USD


def round_for_display(value: Decimal) -> Decimal:
    return value.quantize(_DISPLAY_QUANTUM, rounding=ROUND_HALF_UP)


def total_received(usd_value: Decimal, kind: AccountKind | str) -> Decimal:
    return round_for_display(usd_value - fee_for(kind))


def format_amount(value: Decimal) -> str:
    """Render with at most six fraction digits and no trailing zeros."""
    text = f"{round_for_display(value):f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return "0" if text in {"-0", ""} else text
