"""
Repository pattern implementation.
Abstracts database access to decouple domain logic from persistence.
"""

from decimal import Decimal
from typing import Dict, Optional

from django.db.models import Sum

from apps.ledger.infrastructure.persistence.models import Account, Profile


class AccountRepository:
    """Repository for Account aggregate."""

    @staticmethod
    def balances_by_currency(user_id: int) -> Dict[str, Decimal]:
        """Sum active account balances per currency."""
        rows = (
            Account.objects
            .filter(user_id=user_id, is_active=True)
            .values("currency")
            .annotate(total=Sum("balance"))
            .order_by("currency")
        )
        return {row["currency"]: row["total"] for row in rows}


class ProfileRepository:
    """Repository for Profile aggregate."""

    @staticmethod
    def get_preferred_currency(user_id: int) -> Optional[str]:
        profile = Profile.objects.filter(user_id=user_id).first()
        return profile.currency if profile else None
