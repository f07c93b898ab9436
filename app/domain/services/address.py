from __future__ import annotations

import re

from web3 import Web3


ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

_ADDRESS_PATTERN = re.compile(r"^0x[a-fA-F0-9]{40}$")


def normalize_address(value: str) -> str:
    return value.strip().lower()


def same_address(left: str, right: str) -> bool:
    return normalize_address(left) == normalize_address(right)


def is_zero_address(value: str | None) -> bool:
    if not value:
        return True
    return same_address(value, ZERO_ADDRESS)


def is_valid_address(value: str) -> bool:
    """Hex address check; mixed-case input must carry a valid EIP-55 checksum."""
    candidate = value.strip()
    if not _ADDRESS_PATTERN.match(candidate):
        return False
    return Web3.is_address(candidate)


def to_checksum(value: str) -> str:
    return Web3.to_checksum_address(normalize_address(value))
