import pytest
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal
from unittest.mock import Mock

from apps.exchange.domain.context import FetchContext
from apps.exchange.domain.exceptions import InvalidInputError, NetworkError, UpstreamError
from apps.exchange.domain.models import Money, RatePair
from apps.exchange.domain.services import ConversionEngine
from apps.exchange.infrastructure.providers.hexarate import HexaRateSource


class TestConversionEngine:
    """Tests for ConversionEngine domain service."""

    def test_first_convert_fetches_once_then_serves_cache(self, engine, rate_source):
        """
        Test that the first conversion fetches and a second one within the TTL does not.
        """
        first = engine.convert(Decimal("10.00"), "USD", "EUR")
        second = engine.convert(Decimal("10.00"), "USD", "EUR")

        assert first == second == Decimal("9.20")
        assert rate_source.calls[("USD", "EUR")] == 1

    def test_refetch_after_ttl(self, engine, rate_source, rate_cache, clock):
        engine.convert(Decimal("10.00"), "USD", "EUR")
        clock.advance(hours=1, seconds=1)
        rate_source.rates[("USD", "EUR")] = Decimal("0.95")

        assert RatePair("USD", "EUR") in rate_cache
        assert engine.convert(Decimal("10.00"), "USD", "EUR") == Decimal("9.50")
        assert rate_source.calls[("USD", "EUR")] == 2

    def test_no_refetch_just_before_ttl(self, engine, rate_source, clock):
        engine.get_rate("USD", "EUR")
        clock.advance(minutes=59)

        engine.get_rate("USD", "EUR")

        assert rate_source.calls[("USD", "EUR")] == 1

    def test_clear_cache_for_pair_leaves_other_pairs(self, engine, rate_source):
        for pair in [("USD", "EUR"), ("EUR", "USD"), ("USD", "GBP")]:
            engine.get_rate(*pair)

        engine.clear_cache_for_pair("USD", "EUR")
        for pair in [("USD", "EUR"), ("EUR", "USD"), ("USD", "GBP")]:
            engine.get_rate(*pair)

        assert rate_source.calls[("USD", "EUR")] == 2
        assert rate_source.calls[("EUR", "USD")] == 1
        assert rate_source.calls[("USD", "GBP")] == 1

    def test_clear_cache_refetches_every_pair(self, engine, rate_source):
        pairs = [("USD", "EUR"), ("EUR", "USD"), ("USD", "GBP")]
        for pair in pairs:
            engine.get_rate(*pair)

        engine.clear_cache()
        for pair in pairs:
            engine.get_rate(*pair)

        assert all(rate_source.calls[pair] == 2 for pair in pairs)

    @pytest.mark.parametrize("amount,rate,expected", [
        (Decimal("33.335"), Decimal("1.00"), Decimal("33.34")),
        (Decimal("10.00"), Decimal("0.92"), Decimal("9.20")),
        (Decimal("-33.335"), Decimal("1.00"), Decimal("-33.34")),
        (Decimal("0.004"), Decimal("1"), Decimal("0.00")),
    ])
    def test_convert_rounds_half_up_to_cents(self, engine, rate_source, amount, rate, expected):
        rate_source.rates[("USD", "EUR")] = rate

        assert engine.convert(amount, "USD", "EUR") == expected

    def test_identical_currencies_still_go_through_source(self, engine, rate_source):
        assert engine.convert(Decimal("12.345"), "USD", "USD") == Decimal("12.35")
        assert rate_source.calls[("USD", "USD")] == 1

    def test_convert_amount_returns_money(self, engine):
        result = engine.convert_amount(Money(Decimal("100.00"), "EUR"), "USD")

        assert result == Money(Decimal("110.00"), "USD")

    def test_context_is_passed_to_source(self, engine, rate_source):
        context = FetchContext()

        engine.convert(Decimal("1"), "USD", "EUR", context)

        assert rate_source.contexts == [context]

    def test_source_error_propagates_and_nothing_is_cached(self, engine, rate_source, rate_cache):
        error = NetworkError("connection refused", "USD", "EUR")
        rate_source.errors[("USD", "EUR")] = error

        with pytest.raises(NetworkError) as exc_info:
            engine.convert(Decimal("10.00"), "USD", "EUR")

        assert exc_info.value is error
        assert RatePair("USD", "EUR") not in rate_cache
        assert rate_source.calls[("USD", "EUR")] == 1

    def test_failed_fetch_is_not_retried_until_next_call(self, engine, rate_source):
        rate_source.errors[("USD", "EUR")] = NetworkError("timeout")

        for _ in range(2):
            with pytest.raises(NetworkError):
                engine.get_rate("USD", "EUR")

        assert rate_source.calls[("USD", "EUR")] == 2

    def test_upstream_503_leaves_cache_unchanged(self, rate_cache, clock, mocker):
        """
        Test an HTTP 503 from the provider surfaces as UpstreamError with no cache entry.
        """
        response = Mock()
        response.status_code = 503
        response.text = "upstream overloaded"
        mocker.patch("requests.get", return_value=response)
        source = HexaRateSource(base_url="https://rates.test/api/rates", clock=clock)
        engine = ConversionEngine(cache=rate_cache, source=source)

        with pytest.raises(UpstreamError) as exc_info:
            engine.convert(Decimal("10.00"), "USD", "EUR")

        assert exc_info.value.status_code == 503
        assert len(rate_cache) == 0

    def test_empty_currency_raises_invalid_input(self, rate_cache, clock, mocker):
        get = mocker.patch("requests.get")
        source = HexaRateSource(clock=clock)
        engine = ConversionEngine(cache=rate_cache, source=source)

        with pytest.raises(InvalidInputError):
            engine.convert(Decimal("10.00"), "", "EUR")

        get.assert_not_called()
        assert len(rate_cache) == 0

    def test_concurrent_converts_for_uncached_pair(self, engine, rate_source, rate_cache):
        """
        Test that many simultaneous conversions of an uncached pair all succeed
        and leave exactly one valid entry behind.
        """
        rate_source.delay = 0.01

        with ThreadPoolExecutor(max_workers=16) as executor:
            results = list(executor.map(
                lambda _: engine.convert(Decimal("10.00"), "USD", "EUR"),
                range(64),
            ))

        assert set(results) == {Decimal("9.20")}
        assert len(rate_cache) == 1
        assert rate_cache.lookup(RatePair("USD", "EUR")).rate == Decimal("0.92")
        assert 1 <= rate_source.calls[("USD", "EUR")] <= 64
