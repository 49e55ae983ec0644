"""
Wiring for the process-wide ConversionEngine.
The engine is built once in ExchangeConfig.ready() and handed out from there.
"""

from datetime import timedelta
from typing import Optional

from django.apps import apps
from django.conf import settings

from apps.exchange.domain.interfaces import Clock
from apps.exchange.domain.services import ConversionEngine
from apps.exchange.infrastructure.cache import RateCache
from apps.exchange.infrastructure.clock import SystemClock
from apps.exchange.infrastructure.providers.registry import get_source_instance


def build_conversion_engine(clock: Optional[Clock] = None) -> ConversionEngine:
    """Build a ConversionEngine with its own empty cache from Django settings."""
    clock = clock or SystemClock()
    cache = RateCache(
        ttl=timedelta(seconds=settings.EXCHANGE_RATE_CACHE_TTL),
        shards=settings.EXCHANGE_RATE_CACHE_SHARDS,
        clock=clock,
    )
    source = get_source_instance(settings.EXCHANGE_RATE_SOURCE, clock)
    return ConversionEngine(cache=cache, source=source)


def get_conversion_engine() -> ConversionEngine:
    return apps.get_app_config("exchange").engine
