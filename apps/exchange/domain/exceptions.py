"""
Errors raised while resolving exchange rates.
None of them are retried internally; callers decide what to do.
"""


class ExchangeRateError(Exception):
    """Base class for every rate lookup / conversion failure."""

    def __init__(self, message: str, source_currency: str = "", exchanged_currency: str = ""):
        super().__init__(message)
        self.source_currency = source_currency
        self.exchanged_currency = exchanged_currency


class InvalidInputError(ExchangeRateError):
    """A currency code was empty."""


class NetworkError(ExchangeRateError):
    """The rate provider could not be reached (timeout, DNS, refused connection)."""


class FetchCancelledError(NetworkError):
    """The caller cancelled the fetch or its deadline passed."""


class UpstreamError(ExchangeRateError):
    """The rate provider answered with a non-200 status."""

    def __init__(
        self,
        message: str,
        status_code: int,
        body: str,
        source_currency: str = "",
        exchanged_currency: str = "",
    ):
        super().__init__(message, source_currency, exchanged_currency)
        self.status_code = status_code
        self.body = body


class DecodeError(ExchangeRateError):
    """The rate provider answered 200 with a body we could not understand."""
