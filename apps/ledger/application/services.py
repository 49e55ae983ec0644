from dataclasses import dataclass
from typing import Optional

from django.conf import settings

from apps.exchange.domain.context import FetchContext
from apps.exchange.domain.models import Money
from apps.exchange.domain.services import ConversionEngine
from apps.ledger.domain.formatting import format_money
from apps.ledger.domain.services import BalanceAggregator
from apps.ledger.infrastructure.persistence.repositories import AccountRepository, ProfileRepository


@dataclass
class BalanceTotalDTO:
    """Dashboard total for one user."""
    currency: str
    total: Money
    currencies_held: int

    def to_dict(self) -> dict:
        return {
            "currency": self.currency,
            "total": str(self.total.amount),
            "formatted_total": format_money(self.total),
            "currencies_held": self.currencies_held,
        }


class BalanceService:
    """Application service behind the dashboard total."""

    def __init__(self, engine: ConversionEngine):
        self.aggregator = BalanceAggregator(engine)

    def total_for_user(self, user_id: int, context: Optional[FetchContext] = None) -> BalanceTotalDTO:
        currency = ProfileRepository.get_preferred_currency(user_id) or settings.LEDGER_DEFAULT_CURRENCY
        balances = AccountRepository.balances_by_currency(user_id)

        total = self.aggregator.aggregate(balances, currency, context)

        return BalanceTotalDTO(currency=currency, total=total, currencies_held=len(balances))
