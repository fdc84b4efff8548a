"""SQLAlchemy table metadata for locally persisted settlement state."""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import (
    Column,
    DateTime,
    Dialect,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    TypeDecorator,
    UniqueConstraint,
    func,
)


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


metadata = MetaData(
    naming_convention={
        "ix": "ix_%(table_name)s_%(column_0_name)s",
        "uq": "uq_%(table_name)s_%(column_0_name)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
        "pk": "pk_%(table_name)s",
    }
)

key_value_table = Table(
    "key_value",
    metadata,
    Column("key", String(255), primary_key=True),
    Column("value", Text, nullable=False),
    Column("updated_at", UTCDateTime(), nullable=False, server_default=func.now()),
)

# Decimal amounts are stored as strings: SQLite has no exact numeric type.
settlement_table = Table(
    "settlement",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("link", Text, nullable=False),
    Column("transaction_hash", String(128), nullable=False),
    Column("liquidation_address_id", String(64), nullable=False),
    Column("liquidation_address", String(128), nullable=False),
    Column("liquidation_chain", String(32), nullable=False),
    Column("liquidation_currency", String(16), nullable=False),
    Column("customer_id", String(64), nullable=False),
    Column("external_account_id", String(64), nullable=False),
    Column("destination_chain_id", String(16), nullable=False),
    Column("destination_currency", String(16), nullable=False),
    Column("usd_value", String(40), nullable=True),
    Column("fee", String(40), nullable=False),
    Column("received_amount", String(40), nullable=True),
    Column("user_id", String(64), nullable=True),
    Column("account_identifier", String(64), nullable=True),
    Column("account_id", String(64), nullable=True),
    Column("created_at", UTCDateTime(), nullable=False),
    UniqueConstraint("link", "transaction_hash"),
)
