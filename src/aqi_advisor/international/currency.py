"""Rupee amount parsing and canonical formatting."""
from __future__ import annotations

import math
import re

CANONICAL_SYMBOL = "₹"

# Symbols and codes removed before a value is re-marked with the rupee symbol.
# Compound dollar markers (US$, C$, A$) go first so no prefix letter is left
_CURRENCY_MARKERS = re.compile(
    r"\b[A-Z]{1,2}\$|[₹$€£¥]|\bRs\.?|\brupees?\b|\b(?:INR|USD|EUR|GBP|JPY)\b", re.IGNORECASE
)

_MULTIPLIERS = {
    "crore": 10_000_000,
    "crores": 10_000_000,
    "cr": 10_000_000,
    "lakh": 100_000,
    "lakhs": 100_000,
    "lac": 100_000,
    "million": 1_000_000,
    "mn": 1_000_000,
    "k": 1_000,
}

_AMOUNT = re.compile(r"^(-)?(\d+(?:\.\d+)?)\s*([a-z]+)?\.?$", re.IGNORECASE)
_FIRST_NUMBER = re.compile(r"-?\d+(?:\.\d+)?")


def _finite(value) -> float | None:
    """``float(value)``, or ``None`` for NaN, infinities and overflowing integers."""
    try:
        number = float(value)
    except OverflowError:
        return None
    return number if math.isfinite(number) else None


def strip_currency_markers(value: str) -> str:
    """Remove every currency symbol and ISO code, collapsing whitespace."""
    return re.sub(r"\s+", " ", _CURRENCY_MARKERS.sub("", value)).strip()


def parse_amount(value) -> float | None:
    """Parse a monetary amount to a float, or ``None`` if it is not a number.

    Handles:
    - Indian and US grouping: "₹50,00,000", "$5,000,000"
    - Currency symbols and codes anywhere: "INR 5000", "5000 USD", "Rs. 5000"
    - Indian and metric multipliers: "₹1.2 crore", "50 lakh", "2.5 million", "40k"
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return _finite(value)

    cleaned = strip_currency_markers(str(value))
    # "₹50,000/-" is a common Indian way of writing a round amount
    cleaned = cleaned.replace(",", "").replace(" ", "").removesuffix("/-")
    if not cleaned:
        return None

    match = _AMOUNT.match(cleaned)
    if not match:
        return None
    sign, number, unit = match.groups()
    amount = _finite(number)
    if amount is None:
        return None
    if unit:
        multiplier = _MULTIPLIERS.get(unit.lower())
        if multiplier is None:
            return None
        amount = _finite(amount * multiplier)
        if amount is None:
            return None
    return -amount if sign else amount


def coerce_count(value) -> float | None:
    """Lenient number coercion for counts such as "7,500 trees" or "1.2 lakh".

    Falls back to the first number in the text when the value is not a clean
    amount.
    """
    amount = parse_amount(value)
    if amount is not None:
        return amount
    if not isinstance(value, str):
        return None
    found = _FIRST_NUMBER.search(value.replace(",", ""))
    return _finite(found.group()) if found else None


def format_indian_grouping(value: float) -> str:
    """Group digits the Indian way: last three, then pairs ("50,00,000")."""
    negative = value < 0
    value = round(abs(value), 2)
    if float(value).is_integer():
        integer_part, fraction = str(int(value)), ""
    else:
        integer_part, fraction = f"{value:.2f}".split(".")
        fraction = "." + fraction

    if len(integer_part) > 3:
        head, tail = integer_part[:-3], integer_part[-3:]
        pairs = []
        while len(head) > 2:
            pairs.insert(0, head[-2:])
            head = head[:-2]
        if head:
            pairs.insert(0, head)
        integer_part = ",".join(pairs + [tail])

    return ("-" if negative else "") + integer_part + fraction


def format_rupees(value: float) -> str:
    return f"{CANONICAL_SYMBOL}{format_indian_grouping(value)}"


def normalize_currency(value) -> str:
    """Return ``value`` with exactly one rupee symbol and Indian digit grouping.

    No exchange-rate conversion happens: ``"$5000"`` becomes ``"₹5,000"``.
    Re-normalising the result returns it unchanged.
    """
    if value is None or isinstance(value, bool):
        return "N/A"
    text = str(value).strip()
    if not text or text.upper() == "N/A":
        return "N/A"

    amount = parse_amount(value)
    if amount is not None:
        return format_rupees(amount)
    if isinstance(value, (int, float)):
        # NaN, infinity or an integer too large for a float
        return "N/A"

    cleaned = strip_currency_markers(text)
    if not cleaned or cleaned.upper() == "N/A":
        return "N/A"
    return f"{CANONICAL_SYMBOL}{cleaned}"
