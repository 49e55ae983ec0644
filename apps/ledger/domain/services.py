"""
Folds per-currency balances into a single reporting total.
"""

from decimal import Decimal
from typing import Mapping, Optional

import structlog

from apps.exchange.domain.context import FetchContext
from apps.exchange.domain.exceptions import ExchangeRateError
from apps.exchange.domain.models import Money
from apps.exchange.domain.services import ConversionEngine

logger = structlog.get_logger(__name__)


class BalanceAggregator:
    """
    Converts each currency subtotal into the target currency and sums them.

    Every term is rounded to cents by the engine before it is added, so the
    total is a sum of rounded amounts. The first failed conversion aborts
    the aggregation; there is no partial total.
    """

    def __init__(self, engine: ConversionEngine):
        self.engine = engine

    def aggregate(
        self,
        balances: Mapping[str, Decimal],
        target_currency: str,
        context: Optional[FetchContext] = None,
    ) -> Money:
        total = Decimal("0.00")

        for currency, balance in balances.items():
            try:
                converted = self.engine.convert(balance, currency, target_currency, context)
            except ExchangeRateError:
                logger.warning(
                    "balance_aggregation_aborted",
                    from_currency=currency,
                    to_currency=target_currency,
                    balance=str(balance),
                )
                raise
            total += converted

        return Money(amount=total, currency=target_currency)
