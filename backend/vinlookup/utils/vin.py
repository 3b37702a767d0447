"""
VIN validation and CSV token handling.

Only syntactic checks are done here: 17 characters from the VIN alphabet
(no I, O or Q). Check-digit verification is intentionally not performed.
"""

import re
from dataclasses import dataclass

_VIN_RE = re.compile(r"^[A-HJ-NPR-Z0-9]{17}$")

# Commas and newlines both separate tokens in uploaded CSV text
_TOKEN_SPLIT_RE = re.compile(r"[\r\n,]+")

VIN_LENGTH = 17


class VinCode(str):
    """A normalized VIN that has passed validation. Only built by check_vin()."""

    __slots__ = ()


@dataclass(frozen=True)
class InvalidVin:
    raw: str
    reason: str


def normalize_vin(raw: str | None) -> str:
    """Trim whitespace and upper-case a candidate VIN."""
    if not isinstance(raw, str):
        return ""
    return raw.strip().upper()


def validate_vin(vin: str) -> str | None:
    """Validate a normalized VIN string. Returns error message or None if valid."""
    if not vin or len(vin) != VIN_LENGTH:
        return "VIN must be exactly 17 characters"
    if not _VIN_RE.match(vin):
        return "VIN contains invalid characters (I, O, Q not allowed)"
    return None


def check_vin(raw: str | None) -> VinCode | InvalidVin:
    """
    Normalize and validate a candidate VIN.

    Never raises: returns a VinCode on success, otherwise an InvalidVin
    carrying the normalized input and the reason it was rejected.
    """
    vin = normalize_vin(raw)
    error = validate_vin(vin)
    if error:
        return InvalidVin(raw=vin, reason=error)
    return VinCode(vin)


def split_tokens(raw_text: str) -> list[str]:
    """Split CSV text on runs of commas/newlines into trimmed, upper-cased, non-empty tokens."""
    tokens = (normalize_vin(t) for t in _TOKEN_SPLIT_RE.split(raw_text or ""))
    return [t for t in tokens if t]


def summarize_invalid(invalid: list[str], limit: int = 5) -> str | None:
    """Build the single aggregated error shown for rejected tokens."""
    if not invalid:
        return None
    suffix = "..." if len(invalid) > limit else ""
    return f"Invalid VINs: {', '.join(invalid[:limit])}{suffix}"
