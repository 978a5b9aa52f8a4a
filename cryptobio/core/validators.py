"""
Shared input normalization for usernames, wallet addresses and tip amounts
"""

import re
from typing import Iterable, List, Optional

ADDRESS_PATTERN = re.compile(r"^0x[a-fA-F0-9]{40}$")
USERNAME_PATTERN = re.compile(r"^[a-z0-9_]{3,20}$")
USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 20

_USERNAME_STRIP = re.compile(r"[^a-z0-9_]")
_LEADING_INT = re.compile(r"\s*([-+]?\d+)")


def is_valid_address(address: Optional[str]) -> bool:
    return bool(address) and ADDRESS_PATTERN.match(address) is not None


def normalize_address(address: str) -> str:
    return address.strip().lower()


def sanitize_username(raw: str) -> str:
    """Lowercase and drop every character outside [a-z0-9_], capped at the max length."""
    return _USERNAME_STRIP.sub("", raw.lower())[:USERNAME_MAX_LENGTH]


def is_valid_username(username: str) -> bool:
    return USERNAME_PATTERN.match(username) is not None


def parse_tip_amount(raw) -> int:
    """Coerce form input to an integer amount; anything unparseable becomes 0."""
    if isinstance(raw, bool):
        return 0
    if isinstance(raw, int):
        return raw
    match = _LEADING_INT.match(str(raw))
    if match is None:
        return 0
    return int(match.group(1))


def filter_tip_amounts(amounts: Iterable[int]) -> List[int]:
    return [a for a in amounts if a > 0]
