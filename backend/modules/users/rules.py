"""
Derived account predicates.

Every function here is pure: it reads a user or credential snapshot (and
the user's loaded credentials) plus an optional ``now`` and returns a
value. The entity properties in models.py delegate to these so the same
rules can be evaluated against any point in time, without a database.
"""

import math
from datetime import datetime, timedelta
from typing import Iterable, Optional, TYPE_CHECKING

from shared.models import utcnow

from .enums import OAUTH_PROVIDERS, ProviderType, SubscriptionStatus

if TYPE_CHECKING:
    from .models import User, UserCredential


# -------------------------------------------------------------------------
# Credentials
# -------------------------------------------------------------------------


def is_credential_expired(credential: "UserCredential", now: Optional[datetime] = None) -> bool:
    """A credential without expires_at never expires."""
    if credential.expires_at is None:
        return False
    return (now or utcnow()) > credential.expires_at


def is_credential_valid(credential: "UserCredential", now: Optional[datetime] = None) -> bool:
    return (
        credential.is_verified
        and not is_credential_expired(credential, now)
        and not credential.audit.is_deleted
    )


def is_oauth_provider(provider_type: ProviderType) -> bool:
    return provider_type in OAUTH_PROVIDERS


def credential_display_name(credential: "UserCredential") -> str:
    """Label shown to the user when listing their sign-in methods."""
    if credential.provider_type == ProviderType.EMAIL:
        return f"Email ({credential.provider_id})"
    if credential.provider_type == ProviderType.GOOGLE:
        return "Google Account"
    if credential.provider_type == ProviderType.MICROSOFT:
        return "Microsoft Account"
    if credential.provider_type == ProviderType.APPLE:
        return "Apple ID"
    return str(credential.provider_type)


def has_valid_credentials(
    credentials: Iterable["UserCredential"],
    now: Optional[datetime] = None,
) -> bool:
    """True when at least one credential is verified and unexpired."""
    return any(
        cred.is_verified and not is_credential_expired(cred, now) for cred in credentials
    )


def primary_credential(credentials: Iterable["UserCredential"]) -> Optional["UserCredential"]:
    """First credential that is both primary and verified."""
    return next((c for c in credentials if c.is_primary and c.is_verified), None)


def credential_by_provider(
    credentials: Iterable["UserCredential"],
    provider_type: ProviderType,
) -> Optional["UserCredential"]:
    """First credential of the provider, verified or not."""
    return next((c for c in credentials if c.provider_type == provider_type), None)


def has_provider(credentials: Iterable["UserCredential"], provider_type: ProviderType) -> bool:
    return any(c.provider_type == provider_type and c.is_verified for c in credentials)


# -------------------------------------------------------------------------
# Users
# -------------------------------------------------------------------------


def full_name(user: "User") -> str:
    if not user.first_name and not user.last_name:
        return ""
    return f"{user.first_name or ''} {user.last_name or ''}".strip()


def display_name(user: "User") -> str:
    return full_name(user) or user.email.split("@")[0]


def is_trial_expired(user: "User", now: Optional[datetime] = None) -> bool:
    return (now or utcnow()) > user.trial_ends_at


def trial_days_remaining(user: "User", now: Optional[datetime] = None) -> int:
    """Whole days left in the trial, rounded up; -1 for subscribers."""
    if user.is_subscribed:
        return -1
    remaining = user.trial_ends_at - (now or utcnow())
    return max(0, math.ceil(remaining / timedelta(days=1)))


def subscription_status(user: "User", now: Optional[datetime] = None) -> SubscriptionStatus:
    if user.is_subscribed:
        return SubscriptionStatus.SUBSCRIBED
    if is_trial_expired(user, now):
        return SubscriptionStatus.EXPIRED
    return SubscriptionStatus.TRIAL


def is_authenticated(user: "User", now: Optional[datetime] = None) -> bool:
    return (
        user.is_active
        and not user.audit.is_deleted
        and user.email_verified
        and has_valid_credentials(user.credentials, now)
    )


def can_create_quote(user: "User", now: Optional[datetime] = None) -> bool:
    """Authenticated users may quote while subscribed or inside their trial."""
    return is_authenticated(user, now) and (
        user.is_subscribed or not is_trial_expired(user, now)
    )
