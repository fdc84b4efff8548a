"""Domain primitives: scalar aliases shared across entities."""

from __future__ import annotations

type ChainId = str
type TokenAddress = str
type TransactionHash = str
type AttemptId = str

NATIVE_TOKEN_ADDRESSES: frozenset[str] = frozenset(
    {
        "0x0000000000000000000000000000000000000000",
        "0xeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeee",
    }
)
