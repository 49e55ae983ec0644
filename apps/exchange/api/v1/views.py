"""
ViewSets for the exchange API v1.
Conversion for clients, cache invalidation for operators.
"""

import structlog
from django.conf import settings
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAdminUser
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from apps.exchange.api.v1.serializers import CachePairQuerySerializer, ConversionQuerySerializer
from apps.exchange.application.conversion import convert_request
from apps.exchange.application.dto import ConversionRequestDTO
from apps.exchange.application.engine import get_conversion_engine
from apps.exchange.domain.context import FetchContext
from apps.exchange.domain.exceptions import ExchangeRateError

logger = structlog.get_logger(__name__)

GENERIC_FAILURE = "Failed, please refresh!"


@extend_schema(tags=['Rates'])
class ExchangeRateViewSet(viewsets.ViewSet):

    @extend_schema(
        parameters=[
            OpenApiParameter("source_currency", OpenApiTypes.STR, required=True, description="Source currency code (e.g. EUR)"),
            OpenApiParameter("exchanged_currency", OpenApiTypes.STR, required=True, description="Target currency code (e.g. USD)"),
            OpenApiParameter("amount", OpenApiTypes.DECIMAL, required=True, description="Amount to convert"),
        ],
        description="Convert amount from one currency to another using the latest cached rate"
    )
    @action(detail=False, methods=['get'], url_path='convert')
    def convert(self, request):
        query = ConversionQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return Response(query.errors, status=status.HTTP_400_BAD_REQUEST)

        conversion = ConversionRequestDTO(**query.validated_data)
        context = FetchContext.with_timeout(settings.EXCHANGE_RATE_TIMEOUT)

        try:
            result = convert_request(get_conversion_engine(), conversion, context)
        except ExchangeRateError as e:
            logger.warning(
                "failed_to_convert_currency",
                source_currency=conversion.source_currency,
                exchanged_currency=conversion.exchanged_currency,
                amount=str(conversion.amount),
                error=str(e),
                error_type=type(e).__name__,
            )
            return Response({"error": GENERIC_FAILURE}, status=status.HTTP_502_BAD_GATEWAY)

        return Response(result.to_dict())

    @extend_schema(
        parameters=[
            OpenApiParameter("source_currency", OpenApiTypes.STR, description="Source currency of the pair to clear"),
            OpenApiParameter("exchanged_currency", OpenApiTypes.STR, description="Target currency of the pair to clear"),
        ],
        description="Clear cached rates. Without parameters the whole cache is cleared.",
        responses={204: None},
    )
    @action(detail=False, methods=['delete'], url_path='cache', permission_classes=[IsAdminUser])
    def clear_cache(self, request):
        query = CachePairQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return Response(query.errors, status=status.HTTP_400_BAD_REQUEST)

        engine = get_conversion_engine()
        if query.validated_data:
            engine.clear_cache_for_pair(
                query.validated_data["source_currency"],
                query.validated_data["exchanged_currency"],
            )
        else:
            engine.clear_cache()

        return Response(status=status.HTTP_204_NO_CONTENT)
