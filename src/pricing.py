"""Fixed-point rate scaling."""
from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal, localcontext

from .exceptions import OracleDecodeError

RATE_DECIMALS = 18
DISPLAY_DECIMALS = 2

# Enough digits for a uint256 rate without context rounding.
_PRECISION = 96

_INTEGER_RE = re.compile(r"^[+-]?[0-9]+$")


def scale_rate(rate: str, decimals: int = RATE_DECIMALS) -> Decimal:
    """Convert an oracle rate (base-10 integer string scaled by 10**decimals)."""
    text = rate.strip() if isinstance(rate, str) else ""
    if not _INTEGER_RE.match(text):
        raise OracleDecodeError(f"Rate is not a base-10 integer: {rate!r}")
    raw = int(text)
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        return Decimal(raw).scaleb(-decimals)


def format_price(price: Decimal, places: int = DISPLAY_DECIMALS) -> str:
    """Render ``price`` with exactly ``places`` fractional digits, rounding half up."""
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        quantized = price.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)
    return f"{quantized:f}"


def format_rate(
    rate: str, decimals: int = RATE_DECIMALS, places: int = DISPLAY_DECIMALS
) -> str:
    """Scale ``rate`` and format it for display.

    >>> format_rate("1230000000000000000")
    '1.23'
    """
    return format_price(scale_rate(rate, decimals), places)
