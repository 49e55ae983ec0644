"""
Ledger accounts and user currency preferences.
Stored with the Django ORM; the domain layer only sees plain values.
"""

from django.conf import settings
from django.db import models


class BaseModel(models.Model):

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class Currency(models.TextChoices):

    EUR = "EUR", "Euro"
    USD = "USD", "US Dollar"
    RSD = "RSD", "Serbian Dinar"
    GBP = "GBP", "British Pound"
    JPY = "JPY", "Japanese Yen"
    CHF = "CHF", "Swiss Franc"


class AccountType(models.TextChoices):

    CHECKING = "checking", "Checking"
    SAVINGS = "savings", "Savings"
    CASH = "cash", "Cash"


class Account(BaseModel):

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        related_name="accounts",
        on_delete=models.CASCADE,
    )
    name = models.CharField(max_length=100)
    account_type = models.CharField(max_length=20, choices=AccountType.choices)
    balance = models.DecimalField(max_digits=18, decimal_places=2, default=0)
    color = models.CharField(max_length=20, default="blue")
    currency = models.CharField(max_length=3, choices=Currency.choices)
    allows_negative_balance = models.BooleanField(default=False)
    is_active = models.BooleanField(
        default=True,
        help_text="Inactive accounts are soft-deleted and excluded from totals.",
    )

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.name} ({self.currency}) | {self.balance}"


class Profile(BaseModel):

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        related_name="ledger_profile",
        on_delete=models.CASCADE,
    )
    currency = models.CharField(
        max_length=3,
        choices=Currency.choices,
        help_text="Currency the dashboard total is reported in.",
    )

    def __str__(self):
        return f"{self.user} ({self.currency})"
