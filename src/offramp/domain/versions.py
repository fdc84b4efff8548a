"""Link contract version comparison ("v4.2" style tags)."""

from __future__ import annotations

import re

_VERSION = re.compile(r"^\s*v?(\d+(?:\.\d+)*)\s*$", re.IGNORECASE)


def parse_contract_version(value: str) -> tuple[int, ...]:
    match = _VERSION.match(value)
    if match is None:
        raise ValueError(f"Unrecognised contract version: {value!r}")
    return tuple(int(part) for part in match.group(1).split("."))


def version_at_least(min_version: str, actual_version: str) -> bool:
    minimum = parse_contract_version(min_version)
    actual = parse_contract_version(actual_version)
    width = max(len(minimum), len(actual))
    return actual + (0,) * (width - len(actual)) >= minimum + (0,) * (width - len(minimum))
