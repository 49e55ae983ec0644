import threading
from decimal import Decimal, InvalidOperation
from typing import Optional

import requests
import structlog

from apps.exchange.domain.context import FetchContext
from apps.exchange.domain.exceptions import (
    DecodeError,
    FetchCancelledError,
    InvalidInputError,
    NetworkError,
    UpstreamError,
)
from apps.exchange.domain.interfaces import BaseRateSource, Clock
from apps.exchange.domain.models import FetchedRate
from apps.exchange.infrastructure.clock import SystemClock

logger = structlog.get_logger(__name__)

HEXARATE_URL = "https://hexarate.paikama.co/api/rates"


class HexaRateSource(BaseRateSource):
    """
    Hexarate API rate source.
    Uses the /{from}/{to}/latest endpoint to fetch the current mid rate.

    Each blocking HTTP call runs on its own daemon thread so the caller can stop
    waiting as soon as its FetchContext is cancelled or its deadline passes.
    """

    def __init__(
        self,
        base_url: str = HEXARATE_URL,
        timeout: float = 10,
        clock: Optional[Clock] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.clock = clock or SystemClock()

    def fetch(
        self,
        source_currency: str,
        exchanged_currency: str,
        context: Optional[FetchContext] = None,
    ) -> FetchedRate:
        """
        Fetch the latest mid rate for a currency pair.

        Args:
            source_currency: Base currency code (e.g. USD)
            exchanged_currency: Target currency code (e.g. EUR)
            context: Optional cancellation / deadline signal

        Returns:
            FetchedRate with the Decimal mid rate and the fetch time

        Raises:
            InvalidInputError: a currency code is empty
            NetworkError: transport failure, cancellation or deadline
            UpstreamError: non-200 answer
            DecodeError: 200 answer without a usable mid rate
        """
        pair = {"source_currency": source_currency, "exchanged_currency": exchanged_currency}

        if not source_currency or not exchanged_currency:
            logger.error("empty_currency_codes", **pair)
            raise InvalidInputError("currency codes must not be empty", **pair)

        context = context or FetchContext()
        if context.done():
            raise FetchCancelledError("fetch cancelled before the request was sent", **pair)

        # Format: https://hexarate.paikama.co/api/rates/USD/EUR/latest
        url = f"{self.base_url}/{source_currency}/{exchanged_currency}/latest"

        timeout = self.timeout
        remaining = context.remaining()
        if remaining is not None:
            timeout = min(timeout, remaining)

        logger.debug("making_http_request_to_exchange_api", url=url, **pair)
        response = self._get(url, timeout, context, pair)

        if response.status_code != 200:
            body = response.text
            logger.error(
                "exchange_api_returned_non_ok_status",
                status_code=response.status_code,
                body=body,
                url=url,
            )
            raise UpstreamError(
                f"exchange api error: status={response.status_code} body={body}",
                status_code=response.status_code,
                body=body,
                **pair,
            )

        # Response format: {"data": {"mid": 0.92, "date": "2024-05-21T00:00:00Z"}}
        try:
            data = response.json(parse_float=Decimal)["data"]
            rate = self._to_rate(data["mid"])
            rate_date = str(data.get("date", ""))
        except (ValueError, KeyError, TypeError, AttributeError, InvalidOperation) as e:
            logger.error("failed_to_decode_api_response", url=url, error=str(e))
            raise DecodeError(f"invalid response from exchange api: {e!r}", **pair) from e

        return FetchedRate(rate=rate, fetched_at=self.clock.now(), rate_date=rate_date)

    def _get(self, url: str, timeout: float, context: FetchContext, pair: dict) -> requests.Response:
        call = _PendingRequest(url, timeout)
        unsubscribe = context.on_cancel(call.finished.set)
        try:
            call.start(name=f"rate-fetch-{pair['source_currency']}-{pair['exchanged_currency']}")
            call.finished.wait(context.remaining())
        finally:
            unsubscribe()

        if not call.done:
            # The thread finishes on its own (bounded by timeout); its result is dropped
            reason = "cancelled" if context.cancelled else "deadline exceeded"
            logger.warning("exchange_rate_fetch_abandoned", url=url, reason=reason)
            raise FetchCancelledError(f"fetch {reason}", **pair)

        if isinstance(call.error, requests.exceptions.RequestException):
            logger.error("http_request_failed", url=url, error=str(call.error))
            raise NetworkError(f"request to exchange api failed: {call.error}", **pair) from call.error
        if call.error is not None:
            raise call.error
        return call.response

    @staticmethod
    def _to_rate(mid) -> Decimal:
        if isinstance(mid, bool) or not isinstance(mid, (int, float, Decimal)):
            raise TypeError(f"mid must be a number, got {mid!r}")

        rate = Decimal(str(mid)) if isinstance(mid, float) else Decimal(mid)
        if not rate.is_finite() or rate <= 0:
            raise ValueError(f"mid must be a positive number, got {mid!r}")
        return rate


class _PendingRequest:
    """One outbound GET running on its own daemon thread."""

    def __init__(self, url: str, timeout: float):
        self.url = url
        self.timeout = timeout
        self.finished = threading.Event()
        self.done = False
        self.response: Optional[requests.Response] = None
        self.error: Optional[Exception] = None

    def start(self, name: str) -> None:
        threading.Thread(target=self._run, name=name, daemon=True).start()

    def _run(self) -> None:
        try:
            self.response = requests.get(self.url, timeout=self.timeout)
        except Exception as e:
            # Re-raised on the calling thread
            self.error = e
        finally:
            self.done = True
            self.finished.set()
