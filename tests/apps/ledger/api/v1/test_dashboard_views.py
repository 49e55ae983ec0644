import pytest
from decimal import Decimal

from django.contrib.auth import get_user_model
from rest_framework import status

from apps.exchange.domain.exceptions import UpstreamError
from apps.ledger.infrastructure.persistence.models import Account, AccountType, Currency, Profile


DASHBOARD_URL = "/api/v1/ledger/dashboard/"


@pytest.fixture
def user(db):
    user = get_user_model().objects.create_user(username="ana", password="secret")
    for currency, balance in [(Currency.USD, "60.00"), (Currency.USD, "40.00"), (Currency.EUR, "50.00")]:
        Account.objects.create(
            user=user,
            name=f"{currency} savings",
            account_type=AccountType.SAVINGS,
            balance=Decimal(balance),
            currency=currency,
        )
    return user


@pytest.mark.django_db
class TestDashboardView:
    """Tests for GET /api/v1/ledger/dashboard/."""

    def test_dashboard_requires_login(self, api_client, installed_engine):
        response = api_client.get(DASHBOARD_URL)

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_dashboard_total_in_preferred_currency(self, api_client, installed_engine, rate_source, user):
        Profile.objects.create(user=user, currency=Currency.USD)
        api_client.force_authenticate(user)

        response = api_client.get(DASHBOARD_URL)

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {
            "currency": "USD",
            "total": "155.00",
            "formatted_total": "$155.00",
            "currencies_held": 2,
        }
        assert rate_source.calls[("USD", "USD")] == 1
        assert rate_source.calls[("EUR", "USD")] == 1

    def test_dashboard_defaults_to_configured_currency(self, api_client, installed_engine, rate_source, user, settings):
        settings.LEDGER_DEFAULT_CURRENCY = "EUR"
        rate_source.rates[("EUR", "EUR")] = Decimal("1")
        api_client.force_authenticate(user)

        response = api_client.get(DASHBOARD_URL)

        assert response.status_code == status.HTTP_200_OK
        # 100.00 USD * 0.92 + 50.00 EUR
        assert response.data["total"] == "142.00"
        assert response.data["formatted_total"] == "€142.00"

    def test_dashboard_conversion_failure(self, api_client, installed_engine, rate_source, user):
        Profile.objects.create(user=user, currency=Currency.USD)
        rate_source.errors[("EUR", "USD")] = UpstreamError(
            "exchange api error: status=503 body=maintenance window",
            status_code=503,
            body="maintenance window",
            source_currency="EUR",
            exchanged_currency="USD",
        )
        api_client.force_authenticate(user)

        response = api_client.get(DASHBOARD_URL)

        assert response.status_code == status.HTTP_502_BAD_GATEWAY
        assert response.data == {"error": "Failed, please refresh!"}
        assert "maintenance" not in response.content.decode()

    def test_dashboard_without_accounts(self, api_client, installed_engine, rate_source, db):
        lonely = get_user_model().objects.create_user(username="solo", password="secret")
        api_client.force_authenticate(lonely)

        response = api_client.get(DASHBOARD_URL)

        assert response.status_code == status.HTTP_200_OK
        assert response.data["total"] == "0.00"
        assert response.data["currencies_held"] == 0
        assert rate_source.total_calls == 0
