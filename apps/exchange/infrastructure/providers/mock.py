"""
Mock rate source for development and tests.
Generates deterministic but realistic exchange rates without network access.
"""

import random
from decimal import Decimal
from typing import Optional

import structlog

from apps.exchange.domain.context import FetchContext
from apps.exchange.domain.exceptions import FetchCancelledError, InvalidInputError, UpstreamError
from apps.exchange.domain.interfaces import BaseRateSource, Clock
from apps.exchange.domain.models import FetchedRate
from apps.exchange.infrastructure.clock import SystemClock

logger = structlog.get_logger(__name__)


class MockRateSource(BaseRateSource):
    """
    Mock source that derives cross rates from fixed USD-based rates.
    Useful for:
    - Running the app without reaching the rate provider
    - Tests that need plausible numbers
    """

    # Base rates relative to USD (approximate real-world values)
    BASE_RATES = {
        "USD": Decimal("1.0"),
        "EUR": Decimal("0.92"),
        "GBP": Decimal("0.79"),
        "CHF": Decimal("0.88"),
        "JPY": Decimal("151.5"),
        "RSD": Decimal("107.8"),
    }

    def __init__(self, clock: Optional[Clock] = None):
        self.clock = clock or SystemClock()

    def fetch(
        self,
        source_currency: str,
        exchanged_currency: str,
        context: Optional[FetchContext] = None,
    ) -> FetchedRate:
        """
        Generate a mock rate with a small variation seeded by pair and day.

        Raises:
            InvalidInputError: a currency code is empty
            UpstreamError: the pair is not in BASE_RATES (status 404)
        """
        pair = {"source_currency": source_currency, "exchanged_currency": exchanged_currency}

        if not source_currency or not exchanged_currency:
            raise InvalidInputError("currency codes must not be empty", **pair)
        if context is not None and context.done():
            raise FetchCancelledError("fetch cancelled before the request was sent", **pair)

        source_rate = self.BASE_RATES.get(source_currency)
        target_rate = self.BASE_RATES.get(exchanged_currency)

        if source_rate is None or target_rate is None:
            logger.warning("mock_source_unsupported_pair", **pair)
            raise UpstreamError(
                f"unsupported currency pair {source_currency}/{exchanged_currency}",
                status_code=404,
                body="unsupported currency pair",
                **pair,
            )

        fetched_at = self.clock.now()
        base_rate = target_rate / source_rate

        if source_currency == exchanged_currency:
            variation = Decimal("1")
        else:
            # Small variation (±2%), reproducible for a given pair and day
            rng = random.Random(f"{source_currency}{exchanged_currency}{fetched_at.date()}")
            variation = Decimal(str(rng.uniform(0.98, 1.02)))
        mock_rate = (base_rate * variation).quantize(Decimal("0.000001"))

        return FetchedRate(rate=mock_rate, fetched_at=fetched_at, rate_date=fetched_at.date().isoformat())
