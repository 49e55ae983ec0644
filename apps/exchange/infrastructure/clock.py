from datetime import datetime

from django.utils import timezone

from apps.exchange.domain.interfaces import Clock


class SystemClock(Clock):
    """Wall clock, timezone-aware."""

    def now(self) -> datetime:
        return timezone.now()
