"""
Pure domain entities (POPOs).
No dependency on Django or the ORM.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal, ROUND_HALF_UP

CENTS = Decimal("0.01")


@dataclass(frozen=True)
class RatePair:
    """
    Ordered currency pair used as a cache key.
    (USD, EUR) and (EUR, USD) are distinct pairs.
    """

    source_currency: str
    exchanged_currency: str

    def __str__(self):
        return f"{self.source_currency}:{self.exchanged_currency}"


@dataclass(frozen=True)
class CacheEntry:

    rate: Decimal
    expires_at: datetime

    def is_fresh(self, now: datetime) -> bool:
        return now < self.expires_at

    @classmethod
    def create(cls, rate: Decimal, fetched_at: datetime, ttl: timedelta) -> "CacheEntry":
        if ttl <= timedelta(0):
            raise ValueError(f"ttl must be positive, got {ttl}")
        return cls(rate=rate, expires_at=fetched_at + ttl)


@dataclass(frozen=True)
class FetchedRate:
    """Mid rate returned by a rate source for one pair."""

    rate: Decimal
    fetched_at: datetime
    rate_date: str = ""


@dataclass(frozen=True)
class Money:

    amount: Decimal
    currency: str

    def __post_init__(self):
        if not isinstance(self.amount, Decimal):
            raise TypeError(f"amount must be a Decimal, got {type(self.amount).__name__}")


def round_money(amount: Decimal) -> Decimal:
    """Round to cents, half away from zero."""
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)
