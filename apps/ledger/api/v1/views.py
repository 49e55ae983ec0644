import structlog
from django.conf import settings
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_spectacular.utils import extend_schema

from apps.exchange.application.engine import get_conversion_engine
from apps.exchange.domain.context import FetchContext
from apps.exchange.domain.exceptions import ExchangeRateError
from apps.ledger.application.services import BalanceService

logger = structlog.get_logger(__name__)

GENERIC_FAILURE = "Failed, please refresh!"


@extend_schema(tags=['Dashboard'])
class DashboardView(APIView):

    permission_classes = [IsAuthenticated]

    @extend_schema(description="Total of all active account balances in the user's preferred currency")
    def get(self, request):
        service = BalanceService(get_conversion_engine())
        context = FetchContext.with_timeout(settings.EXCHANGE_RATE_TIMEOUT)

        try:
            result = service.total_for_user(request.user.id, context)
        except ExchangeRateError as e:
            logger.warning(
                "failed_to_convert_currency",
                user_id=request.user.id,
                from_currency=e.source_currency,
                to_currency=e.exchanged_currency,
                error=str(e),
                error_type=type(e).__name__,
            )
            return Response({"error": GENERIC_FAILURE}, status=status.HTTP_502_BAD_GATEWAY)

        return Response(result.to_dict())
