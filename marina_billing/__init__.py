"""Marina boat inventory and billing toolkit."""
from marina_billing.application.use_cases import MarinaContext, MarinaSession
from marina_billing.domain.services import BillingService
from marina_billing.domain.store import BoatStore
from marina_billing.infrastructure.repositories.text_repository import TextFileBoatRepository

__all__ = [
    "MarinaContext",
    "MarinaSession",
    "BillingService",
    "BoatStore",
    "TextFileBoatRepository",
]
