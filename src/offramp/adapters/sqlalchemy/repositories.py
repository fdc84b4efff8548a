"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from datetime import UTC, datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import delete, insert, select, update

from offramp.domain.model import LiquidationAddress, SettlementRecord

from .mappings import key_value_table, settlement_table

if TYPE_CHECKING:
    from sqlalchemy import Row
    from sqlalchemy.orm import Session


class SqlAlchemyKeyValueRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, key: str) -> str | None:
        stmt = select(key_value_table.c.value).where(key_value_table.c["key"] == key)
        return self.session.execute(stmt).scalar_one_or_none()

    def put(self, key: str, value: str) -> None:
        now = datetime.now(UTC)
        if self.get(key) is None:
            self.session.execute(
                insert(key_value_table).values(key=key, value=value, updated_at=now)
            )
            return
        self.session.execute(
            update(key_value_table)
            .where(key_value_table.c["key"] == key)
            .values(value=value, updated_at=now)
        )

    def remove(self, key: str) -> None:
        self.session.execute(delete(key_value_table).where(key_value_table.c["key"] == key))

    def keys(self, prefix: str = "") -> list[str]:
        stmt = select(key_value_table.c["key"]).order_by(key_value_table.c["key"])
        if prefix:
            stmt = stmt.where(key_value_table.c["key"].startswith(prefix, autoescape=True))
        return list(self.session.execute(stmt).scalars())


class SqlAlchemySettlementRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, record: SettlementRecord) -> None:
        if self.exists(link=record.link, transaction_hash=record.transaction_hash):
            return
        address = record.liquidation_address
        self.session.execute(
            insert(settlement_table).values(
                link=record.link,
                transaction_hash=record.transaction_hash,
                liquidation_address_id=address.id,
                liquidation_address=address.address,
                liquidation_chain=address.chain,
                liquidation_currency=address.currency,
                customer_id=record.customer_id,
                external_account_id=record.external_account_id,
                destination_chain_id=record.destination_chain_id,
                destination_currency=record.destination_currency,
                usd_value=_text_or_none(record.usd_value),
                fee=str(record.fee),
                received_amount=_text_or_none(record.received_amount),
                user_id=record.user_id,
                account_identifier=record.account_identifier,
                account_id=record.account_id,
                created_at=record.created_at,
            )
        )

    def exists(self, *, link: str, transaction_hash: str) -> bool:
        stmt = (
            select(settlement_table.c.id)
            .where(settlement_table.c.link == link)
            .where(settlement_table.c.transaction_hash == transaction_hash)
        )
        return self.session.execute(stmt).scalar_one_or_none() is not None

    def list(self, *, limit: int | None = None) -> list[SettlementRecord]:
        stmt = select(settlement_table).order_by(
            settlement_table.c.created_at.desc(), settlement_table.c.id.desc()
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        return [_record_from_row(row) for row in self.session.execute(stmt)]


def _record_from_row(row: Row[tuple[object, ...]]) -> SettlementRecord:
    data = row._mapping  # noqa: SLF001
    return SettlementRecord(
        link=data["link"],
        transaction_hash=data["transaction_hash"],
        liquidation_address=LiquidationAddress(
            id=data["liquidation_address_id"],
            address=data["liquidation_address"],
            chain=data["liquidation_chain"],
            currency=data["liquidation_currency"],
            external_account_id=data["external_account_id"],
        ),
        customer_id=data["customer_id"],
        external_account_id=data["external_account_id"],
        destination_chain_id=data["destination_chain_id"],
        destination_currency=data["destination_currency"],
        usd_value=_decimal_or_none(data["usd_value"]),
        fee=Decimal(data["fee"]),
        received_amount=_decimal_or_none(data["received_amount"]),
        user_id=data["user_id"],
        account_identifier=data["account_identifier"],
        account_id=data["account_id"],
        created_at=data["created_at"],
    )


def _text_or_none(value: Decimal | None) -> str | None:
    return None if value is None else str(value)


def _decimal_or_none(value: str | None) -> Decimal | None:
    return None if value is None else Decimal(value)
