from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from apps.exchange.domain.context import FetchContext
from apps.exchange.domain.models import FetchedRate


class BaseRateSource(ABC):
    @abstractmethod
    def fetch(
        self,
        source_currency: str,
        exchanged_currency: str,
        context: Optional[FetchContext] = None,
    ) -> FetchedRate:
        pass


class Clock(ABC):
    @abstractmethod
    def now(self) -> datetime:
        pass
