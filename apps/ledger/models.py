# Django discovers models through <app>.models
from apps.ledger.infrastructure.persistence.models import Account, Profile  # noqa: F401
