"""Phone cell splitting and dialable-number normalization."""
import re
from typing import List

SEPARATORS = re.compile(r"[,/&\n|]+")
MIN_NUMBER_LENGTH = 4


def segment_phones(raw: str) -> List[str]:
    """Split a phone cell holding several numbers into individual numbers.

    Pieces of three characters or fewer are treated as noise and dropped.
    """

    if not raw:
        return []
    pieces = (piece.strip() for piece in SEPARATORS.split(raw))
    return [piece for piece in pieces if len(piece) >= MIN_NUMBER_LENGTH]


def normalize_phone(phone: str) -> str:
    """Return ``+`` followed by digits only, converting a ``00`` prefix."""

    kept = re.sub(r"[^0-9+]", "", phone or "")
    digits = kept.replace("+", "")
    if kept.startswith("+"):
        return "+" + digits
    if digits.startswith("00"):
        return "+" + digits[2:]
    return "+" + digits


def dial_digits(phone: str) -> str:
    """Digits-only form used inside chat deep links."""

    return normalize_phone(phone)[1:]
