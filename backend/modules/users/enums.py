"""Enumerations shared by the users module's models and rules."""

from enum import Enum


class ProviderType(str, Enum):
    """Authentication providers a credential can belong to."""

    EMAIL = "email"
    GOOGLE = "google"
    MICROSOFT = "microsoft"
    APPLE = "apple"


OAUTH_PROVIDERS = frozenset({ProviderType.GOOGLE, ProviderType.MICROSOFT, ProviderType.APPLE})


class SubscriptionStatus(str, Enum):
    """Derived subscription state of a user. Never stored."""

    TRIAL = "trial"
    SUBSCRIBED = "subscribed"
    EXPIRED = "expired"
