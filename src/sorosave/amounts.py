"""Fixed-point amount codec.

Token amounts live on the ledger as integers in base units with an implied
decimal scale (7 for Stellar assets). Conversions here use integer
arithmetic only.
"""

from __future__ import annotations

from sorosave.errors import InvalidFormatError

DEFAULT_SCALE = 7
STROOPS_PER_XLM = 10**DEFAULT_SCALE


def _check_scale(scale: int) -> None:
    if scale < 0:
        raise ValueError(f"scale must be non-negative, got {scale}")


def to_display(base_units: int, scale: int = DEFAULT_SCALE) -> str:
    """Render base units as a decimal string.

    ``to_display(12345678)`` -> ``"1.2345678"``; whole amounts drop the
    fraction entirely (``to_display(10000000)`` -> ``"1"``).
    """
    _check_scale(scale)
    sign = "-" if base_units < 0 else ""
    whole, fractional = divmod(abs(base_units), 10**scale)
    if fractional == 0:
        return f"{sign}{whole}"
    digits = str(fractional).zfill(scale).rstrip("0")
    return f"{sign}{whole}.{digits}"


def from_display(text: str, scale: int = DEFAULT_SCALE) -> int:
    """Parse a decimal string into base units.

    Fractional digits beyond ``scale`` are truncated, not rounded. An empty
    whole part reads as zero, so ``".5"`` and ``""`` parse.
    """
    _check_scale(scale)
    raw = text.strip()
    whole_text, dot, fraction_text = raw.partition(".")

    sign = whole_text[:1] if whole_text[:1] in ("+", "-") else ""
    digits = whole_text[len(sign):]
    # a bare sign is not a number
    if (sign and not digits) or (digits and not digits.isdecimal()):
        raise InvalidFormatError(f"Invalid amount: {text!r}")
    if dot and fraction_text and not fraction_text.isdecimal():
        raise InvalidFormatError(f"Invalid fractional part in amount: {text!r}")

    value = int(digits or "0") * 10**scale
    fraction_text = fraction_text.ljust(scale, "0")[:scale]
    if fraction_text:
        value += int(fraction_text)
    return -value if sign == "-" else value
