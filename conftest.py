import threading
import time
from collections import Counter
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from apps.exchange.domain.interfaces import BaseRateSource, Clock
from apps.exchange.domain.models import FetchedRate
from apps.exchange.domain.services import ConversionEngine
from apps.exchange.infrastructure.cache import RateCache


class FakeClock(Clock):
    """Clock that only moves when told to."""

    def __init__(self, start: datetime):
        self._now = start

    def now(self) -> datetime:
        return self._now

    def advance(self, **kwargs) -> None:
        self._now += timedelta(**kwargs)


class StubRateSource(BaseRateSource):
    """
    In-memory rate source that counts fetches per pair.
    Set rates[(from, to)] to a Decimal, or errors[(from, to)] to an exception.
    """

    def __init__(self, clock: Clock):
        self.clock = clock
        self.rates = {}
        self.errors = {}
        self.calls = Counter()
        self.contexts = []
        self.delay = 0.0
        self._lock = threading.Lock()

    def fetch(self, source_currency, exchanged_currency, context=None) -> FetchedRate:
        pair = (source_currency, exchanged_currency)
        with self._lock:
            self.calls[pair] += 1
            self.contexts.append(context)

        if self.delay:
            time.sleep(self.delay)

        if pair in self.errors:
            raise self.errors[pair]

        return FetchedRate(rate=self.rates[pair], fetched_at=self.clock.now(), rate_date="2024-05-21")

    @property
    def total_calls(self) -> int:
        return sum(self.calls.values())


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 5, 21, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def rate_source(clock):
    source = StubRateSource(clock)
    source.rates.update({
        ("USD", "EUR"): Decimal("0.92"),
        ("EUR", "USD"): Decimal("1.10"),
        ("USD", "USD"): Decimal("1"),
        ("USD", "GBP"): Decimal("0.79"),
        ("GBP", "USD"): Decimal("1.27"),
    })
    return source


@pytest.fixture
def rate_cache(clock):
    return RateCache(ttl=timedelta(hours=1), shards=4, clock=clock)


@pytest.fixture
def engine(rate_cache, rate_source):
    return ConversionEngine(cache=rate_cache, source=rate_source)


@pytest.fixture
def installed_engine(engine, monkeypatch):
    """Swap the process-wide engine for the stubbed one."""
    from django.apps import apps

    monkeypatch.setattr(apps.get_app_config("exchange"), "engine", engine)
    return engine


@pytest.fixture
def api_client():
    from rest_framework.test import APIClient

    return APIClient()
