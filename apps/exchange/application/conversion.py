from typing import Optional

from apps.exchange.application.dto import ConversionRequestDTO, ConversionResultDTO
from apps.exchange.domain.context import FetchContext
from apps.exchange.domain.services import ConversionEngine


def convert_request(
    engine: ConversionEngine,
    request: ConversionRequestDTO,
    context: Optional[FetchContext] = None,
) -> ConversionResultDTO:
    """Convert a request and report the rate that was applied."""
    converted_amount = engine.convert(
        request.amount, request.source_currency, request.exchanged_currency, context
    )
    # Served from the cache entry the conversion just used
    rate = engine.get_rate(request.source_currency, request.exchanged_currency, context)

    return ConversionResultDTO(
        source_currency=request.source_currency,
        exchanged_currency=request.exchanged_currency,
        amount=request.amount,
        rate=rate,
        converted_amount=converted_amount,
    )
