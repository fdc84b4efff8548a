from __future__ import annotations

import argparse
import logging
import sys
from datetime import timedelta
from decimal import Decimal, InvalidOperation
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from offramp.app import (
    find_settlement,
    list_settlement_history,
    list_stale_recovery_entries,
    reconcile_recovery_entries,
    resubmit_settlement,
    settle_cashout,
)
from offramp.config import configure_logging
from offramp.config.env import optional_env_var
from offramp.domain.fees import format_amount

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from offramp.domain.model import SettlementRecord

log = logging.getLogger(__name__)

SESSION_TOKEN_ENV = "OFFRAMP_SESSION_TOKEN"
# 128 + SIGINT, the shell convention for a process stopped by Ctrl+C
INTERRUPTED_EXIT_CODE = 130


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Cash out payment links to a bank account")
    subparsers = parser.add_subparsers(dest="command", required=True)

    settle = subparsers.add_parser("settle", help="Claim a payment link and settle it to a bank")
    settle.add_argument("link", type=str, help="Payment link to cash out")
    settle.add_argument(
        "--recipient",
        type=str,
        required=True,
        help="IBAN or US account number of the destination bank account",
    )
    settle.add_argument(
        "--usd-value",
        type=str,
        help="USD value of the link, used for the fee and reported to the bank",
    )
    settle.add_argument(
        "--session-token",
        type=str,
        help=f"Identity session token (defaults to ${SESSION_TOKEN_ENV})",
    )

    recover = subparsers.add_parser(
        "recover",
        help="List cash-outs interrupted between claim and confirmation",
    )
    recover.add_argument(
        "--max-age-minutes",
        type=float,
        help="Only report entries older than this (defaults to config)",
    )
    recover.add_argument(
        "--check",
        action="store_true",
        help="Look up whether each link has been claimed",
    )

    history = subparsers.add_parser("history", help="Show locally recorded settlements")
    history.add_argument(
        "--limit",
        type=int,
        default=20,
        help="Number of settlements to show (default: %(default)s)",
    )

    resubmit = subparsers.add_parser(
        "resubmit",
        help="Submit a recorded settlement to the bank again",
    )
    resubmit.add_argument("transaction_hash", type=str, help="Claim transaction hash")

    return parser.parse_args(list(argv))


def _parse_usd_value(value: str | None) -> Decimal | None:
    if value is None:
        return None
    try:
        amount = Decimal(value.strip())
    except InvalidOperation as exc:
        raise ValueError(f"Invalid USD value: {value}") from exc
    if not amount.is_finite() or amount < 0:
        raise ValueError(f"USD value must be a non-negative number: {value}")
    return amount


def _parse_max_age(minutes: float | None) -> timedelta | None:
    if minutes is None:
        return None
    if minutes < 0:
        raise ValueError("Max age must be non-negative")
    return timedelta(minutes=minutes)


def _validate(args: argparse.Namespace) -> None:
    if args.command == "settle":
        args.usd_value = _parse_usd_value(args.usd_value)
        args.session_token = args.session_token or optional_env_var(SESSION_TOKEN_ENV)
        if not args.session_token:
            raise ValueError(f"Missing --session-token (or ${SESSION_TOKEN_ENV})")
    elif args.command == "recover":
        args.max_age = _parse_max_age(args.max_age_minutes)
    elif args.command == "history" and args.limit <= 0:
        raise ValueError("Limit must be positive")


def _run_settle(args: argparse.Namespace) -> int:
    status = settle_cashout(
        args.link,
        session_token=args.session_token,
        recipient=args.recipient,
        usd_value=args.usd_value,
    )
    if status.succeeded:
        log.info("Cash-out complete: tx=%s", status.transaction_hash)
        if status.record is not None:
            _log_amounts(status.record)
        return 0
    log.error("Cash-out failed (%s): %s", status.error_kind, status.error_message)
    if status.claim_obtained:
        log.error("Claim transaction %s; resubmit with `offramp resubmit`", status.transaction_hash)
    elif status.reclaim_available:
        log.error("Funds were not claimed; the link can still be reclaimed: %s", status.link)
    return 1


def _run_recover(args: argparse.Namespace) -> int:
    if args.check:
        reports = reconcile_recovery_entries(max_age=args.max_age)
        for report in reports:
            log.warning(
                "Attempt %s (%s, created %s): %s",
                report.entry.attempt_id,
                report.entry.link,
                report.entry.created_at.isoformat(),
                report.error or report.advice,
            )
        log.info("%d stale recovery entries", len(reports))
        return 0

    entries = list_stale_recovery_entries(args.max_age)
    for entry in entries:
        log.warning(
            "Attempt %s (%s, created %s): claim may have succeeded without confirmation; "
            "check on-chain status before resubmitting",
            entry.attempt_id,
            entry.link,
            entry.created_at.isoformat(),
        )
    log.info("%d stale recovery entries", len(entries))
    return 0


def _amount_or_dash(value: Decimal | None) -> str:
    return "-" if value is None else format_amount(value)


def _log_amounts(record: SettlementRecord) -> None:
    if record.received_amount is None:
        log.info("Fee: $%s", format_amount(record.fee))
        return
    log.info(
        "Fee: $%s, you will receive: $%s",
        format_amount(record.fee),
        format_amount(record.received_amount),
    )


def _run_history(args: argparse.Namespace) -> int:
    for record in list_settlement_history(args.limit):
        log.info(
            "%s tx=%s %s on %s usd=%s fee=%s received=%s",
            record.created_at.isoformat(timespec="seconds"),
            record.transaction_hash,
            record.destination_currency,
            record.liquidation_address.chain,
            _amount_or_dash(record.usd_value),
            format_amount(record.fee),
            _amount_or_dash(record.received_amount),
        )
    return 0


def _run_resubmit(args: argparse.Namespace) -> int:
    record = find_settlement(args.transaction_hash)
    if record is None:
        log.error("No settlement recorded for transaction %s", args.transaction_hash)
        return 1
    resubmit_settlement(record)
    log.info("Resubmitted settlement for tx %s", record.transaction_hash)
    return 0


_COMMANDS = {
    "settle": _run_settle,
    "recover": _run_recover,
    "history": _run_history,
    "resubmit": _run_resubmit,
}


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    configure_logging()
    parsed_args: argparse.Namespace
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
        _validate(parsed_args)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        exit_code = _COMMANDS[parsed_args.command](parsed_args)
    except Exception:
        log.exception("Fatal error during %s", parsed_args.command)
        sys.exit(1)
    if exit_code:
        sys.exit(exit_code)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C); an interrupted claim may leave a recovery entry behind."""
    log.warning(
        "Interrupted by user (Ctrl+C); a cash-out in progress may have left a recovery entry, "
        "check it with `offramp recover`"
    )
    sys.exit(INTERRUPTED_EXIT_CODE)


def run() -> None:
    """Console script entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
