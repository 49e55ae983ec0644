"""
Source Registry - Maps the EXCHANGE_RATE_SOURCE setting to rate source classes.
"""

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from apps.exchange.domain.interfaces import BaseRateSource, Clock
from apps.exchange.infrastructure.providers.hexarate import HexaRateSource
from apps.exchange.infrastructure.providers.mock import MockRateSource


HEXARATE = "hexarate"
MOCK = "mock"

# Registry: Maps source name to the corresponding adapter class
SOURCE_REGISTRY: dict[str, type[BaseRateSource]] = {
    HEXARATE: HexaRateSource,
    MOCK: MockRateSource,
}


def get_source_instance(source_name: str, clock: Clock) -> BaseRateSource:
    """
    Build the rate source registered under source_name.

    Raises:
        ImproperlyConfigured: if the name is not registered
    """
    source_class = SOURCE_REGISTRY.get(source_name)

    if source_class is None:
        raise ImproperlyConfigured(
            f"Unknown EXCHANGE_RATE_SOURCE '{source_name}'. "
            f"Choose one of: {', '.join(sorted(SOURCE_REGISTRY))}"
        )

    if source_class is HexaRateSource:
        return HexaRateSource(
            base_url=settings.EXCHANGE_RATE_BASE_URL,
            timeout=settings.EXCHANGE_RATE_TIMEOUT,
            clock=clock,
        )

    return source_class(clock=clock)
