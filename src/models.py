"""Data models — all frozen (immutable)."""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

ERROR_SENTINEL = "Error"


@dataclass(frozen=True)
class PriceQuery:
    """One oracle-tracked symbol, e.g. ``SHD``."""

    oracle_key: str


@dataclass(frozen=True)
class RawPrice:
    """Price as returned by the oracle contract.

    ``rate`` is a base-10 integer string scaled by 10**18.
    """

    oracle_key: str
    rate: str
    last_updated_base: int | None = None
    last_updated_quote: int | None = None


class PriceStatus(str, Enum):
    OK = "ok"
    KEY_MISSING = "key_missing"
    TRANSPORT_ERROR = "transport_error"


@dataclass(frozen=True)
class PriceResult:
    """Outcome of a price lookup for a single oracle key."""

    oracle_key: str
    status: PriceStatus
    price: Decimal | None = None
    formatted: str | None = None
    error: str = ""

    @property
    def ok(self) -> bool:
        return self.status is PriceStatus.OK

    @property
    def display(self) -> str:
        """Formatted price, or ``"Error"`` when no usable value exists."""
        if self.ok and self.formatted is not None:
            return self.formatted
        return ERROR_SENTINEL
