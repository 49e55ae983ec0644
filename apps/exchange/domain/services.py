"""
Domain services - Core business logic.
Resolves exchange rates through the TTL cache and converts amounts.
"""

from decimal import Decimal
from typing import Optional

import structlog

from apps.exchange.domain.context import FetchContext
from apps.exchange.domain.exceptions import ExchangeRateError
from apps.exchange.domain.interfaces import BaseRateSource
from apps.exchange.domain.models import Money, RatePair, round_money
from apps.exchange.infrastructure.cache import RateCache

logger = structlog.get_logger(__name__)


class ConversionEngine:
    """
    Domain service that converts amounts using cached exchange rates.

    Lookup strategy:
    1. Serve the rate from the cache while it is fresh
    2. Otherwise fetch it from the rate source (no cache lock held)
    3. Store the fetched rate with a new expiry and return it

    Errors from the rate source propagate unchanged and nothing is cached
    for a failed fetch. Concurrent misses on the same pair may each fetch;
    the last store wins.
    """

    def __init__(self, cache: RateCache, source: BaseRateSource):
        self.cache = cache
        self.source = source

    def get_rate(
        self,
        source_currency: str,
        exchanged_currency: str,
        context: Optional[FetchContext] = None,
    ) -> Decimal:
        """
        Get the exchange rate for a pair, refreshing it on miss or expiry.

        Args:
            source_currency: Base currency (e.g. "USD")
            exchanged_currency: Target currency (e.g. "EUR")
            context: Optional cancellation / deadline signal for the fetch

        Returns:
            Exchange rate as Decimal

        Example:
            >>> rate = engine.get_rate("USD", "EUR")
            >>> converted = Decimal("100") * rate
        """
        pair = RatePair(source_currency, exchanged_currency)

        entry = self.cache.lookup(pair)
        if entry is not None:
            logger.debug(
                "exchange_rate_cache_hit",
                pair=str(pair),
                rate=str(entry.rate),
                expires_at=entry.expires_at.isoformat(),
            )
            return entry.rate

        logger.debug("exchange_rate_cache_miss", pair=str(pair))

        fetched = self.source.fetch(source_currency, exchanged_currency, context)
        entry = self.cache.store(pair, fetched.rate, fetched.fetched_at)

        logger.info(
            "exchange_rate_fetched_and_cached",
            pair=str(pair),
            rate=str(fetched.rate),
            date=fetched.rate_date,
            expires_at=entry.expires_at.isoformat(),
            cache_ttl=self.cache.ttl.total_seconds(),
        )
        return fetched.rate

    def convert(
        self,
        amount: Decimal,
        source_currency: str,
        exchanged_currency: str,
        context: Optional[FetchContext] = None,
    ) -> Decimal:
        """
        Convert an amount from one currency to another.

        Returns:
            amount × rate rounded to 2 decimal places (half up)

        Example:
            >>> engine.convert(Decimal("10.00"), "USD", "EUR")  # rate 0.92
            Decimal('9.20')
        """
        logger.debug(
            "converting_amount",
            amount=str(amount),
            source_currency=source_currency,
            exchanged_currency=exchanged_currency,
        )

        try:
            rate = self.get_rate(source_currency, exchanged_currency, context)
        except ExchangeRateError as e:
            logger.error(
                "failed_to_get_exchange_rate_for_conversion",
                amount=str(amount),
                source_currency=source_currency,
                exchanged_currency=exchanged_currency,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise

        converted = round_money(amount * rate)

        logger.info(
            "amount_converted_successfully",
            amount=str(amount),
            source_currency=source_currency,
            exchanged_currency=exchanged_currency,
            rate=str(rate),
            converted=str(converted),
        )
        return converted

    def convert_amount(
        self,
        money: Money,
        exchanged_currency: str,
        context: Optional[FetchContext] = None,
    ) -> Money:
        """Convert Money into exchanged_currency."""
        converted = self.convert(money.amount, money.currency, exchanged_currency, context)
        return Money(amount=converted, currency=exchanged_currency)

    def clear_cache(self) -> None:
        """Drop every cached rate."""
        logger.info("clearing_all_cached_exchange_rates")
        self.cache.clear()
        logger.info("cache_cleared_successfully")

    def clear_cache_for_pair(self, source_currency: str, exchanged_currency: str) -> None:
        """Drop the cached rate for one ordered pair."""
        self.cache.invalidate(RatePair(source_currency, exchanged_currency))
        logger.info(
            "cache_cleared_for_currency_pair",
            source_currency=source_currency,
            exchanged_currency=exchanged_currency,
        )
