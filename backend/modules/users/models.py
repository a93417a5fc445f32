"""
Users module data models.

User and UserCredential are the two persisted entities of the account
domain. Both embed an AuditTrail by composition. Derived values are
exposed as properties that delegate to the pure functions in rules.py;
state changes go through the named business actions below.
"""

from datetime import datetime, timedelta
from typing import Any, Optional

from pydantic import BaseModel, Field

from shared.models import AuditTrail, UTCDateTime, utcnow

from . import rules
from .enums import ProviderType, SubscriptionStatus


TRIAL_PERIOD_DAYS = 30
UNSUBSCRIBE_GRACE_DAYS = 7


def _default_trial_end() -> datetime:
    return utcnow() + timedelta(days=TRIAL_PERIOD_DAYS)


class UserCredential(BaseModel):
    """
    One authentication method bound to a user.

    provider_id is the email address for the email provider and the
    external account id for OAuth providers; credential_data is the
    password hash or the OAuth token material respectively.
    """

    model_config = {"validate_assignment": True}

    audit: AuditTrail = Field(default_factory=AuditTrail)

    user_id: str = Field(..., description="Owning user ID (back-reference)")
    provider_type: ProviderType = Field(..., description="Authentication provider")
    provider_id: str = Field(..., max_length=255, description="Provider account identifier")
    credential_data: str = Field(..., description="Password hash or token material")
    is_primary: bool = Field(default=False, description="Preferred sign-in method")
    is_verified: bool = Field(default=False, description="Whether the method is verified")
    last_used_at: Optional[UTCDateTime] = Field(None, description="Last successful use")
    expires_at: Optional[UTCDateTime] = Field(None, description="Expiry for OAuth tokens")
    metadata: Optional[dict[str, Any]] = Field(None, description="Provider-specific data")

    # -------------------------------------------------------------------------
    # Derived values
    # -------------------------------------------------------------------------

    @property
    def id(self) -> str:
        return self.audit.id

    @property
    def is_deleted(self) -> bool:
        return self.audit.is_deleted

    @property
    def is_expired(self) -> bool:
        return rules.is_credential_expired(self)

    @property
    def is_valid(self) -> bool:
        return rules.is_credential_valid(self)

    @property
    def display_name(self) -> str:
        return rules.credential_display_name(self)

    @property
    def is_oauth_provider(self) -> bool:
        return rules.is_oauth_provider(self.provider_type)

    # -------------------------------------------------------------------------
    # Business actions
    # -------------------------------------------------------------------------

    def soft_delete(self, actor_id: Optional[str] = None) -> None:
        self.audit.soft_delete(actor_id)

    def restore(self) -> None:
        self.audit.restore()

    def mark_as_used(self, actor_id: Optional[str] = None) -> None:
        self.last_used_at = utcnow()
        self._touch(actor_id)

    def verify(self, actor_id: Optional[str] = None) -> None:
        self.is_verified = True
        self._touch(actor_id)

    def unverify(self, actor_id: Optional[str] = None) -> None:
        self.is_verified = False
        self._touch(actor_id)

    def set_primary(self, actor_id: Optional[str] = None) -> None:
        self.is_primary = True
        self._touch(actor_id)

    def unset_primary(self, actor_id: Optional[str] = None) -> None:
        self.is_primary = False
        self._touch(actor_id)

    def update_credential_data(self, new_data: str, actor_id: Optional[str] = None) -> None:
        self.credential_data = new_data
        self._touch(actor_id)

    def set_expiration(self, expires_at: datetime, actor_id: Optional[str] = None) -> None:
        self.expires_at = expires_at
        self._touch(actor_id)

    def extend_expiration(self, hours: float, actor_id: Optional[str] = None) -> None:
        """Push expiry out by ``hours``, counting from now if none is set."""
        base = self.expires_at if self.expires_at is not None else utcnow()
        self.expires_at = base + timedelta(hours=hours)
        self._touch(actor_id)

    def update_metadata(self, metadata: dict[str, Any], actor_id: Optional[str] = None) -> None:
        """Shallow-merge into the existing metadata; incoming keys win."""
        self.metadata = {**(self.metadata or {}), **metadata}
        self._touch(actor_id)

    def _touch(self, actor_id: Optional[str]) -> None:
        if actor_id:
            self.audit.set_updated_by(actor_id)


class User(BaseModel):
    """
    A Contraqo account.

    Subscription state is the is_subscribed flag plus trial_ends_at; the
    trial/subscribed/expired status is always derived from those two.
    ``credentials`` holds whatever credentials were loaded with the user
    and is not a column of the users table.
    """

    model_config = {"validate_assignment": True}

    audit: AuditTrail = Field(default_factory=AuditTrail)

    email: str = Field(..., max_length=255, description="Unique email address")
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    phone: Optional[str] = Field(None, max_length=20)
    email_verified: bool = False
    is_active: bool = True
    trial_ends_at: UTCDateTime = Field(default_factory=_default_trial_end)
    is_subscribed: bool = False

    credentials: list[UserCredential] = Field(default_factory=list)

    # -------------------------------------------------------------------------
    # Derived values
    # -------------------------------------------------------------------------

    @property
    def id(self) -> str:
        return self.audit.id

    @property
    def is_deleted(self) -> bool:
        return self.audit.is_deleted

    @property
    def full_name(self) -> str:
        return rules.full_name(self)

    @property
    def display_name(self) -> str:
        return rules.display_name(self)

    @property
    def is_trial_expired(self) -> bool:
        return rules.is_trial_expired(self)

    @property
    def trial_days_remaining(self) -> int:
        return rules.trial_days_remaining(self)

    @property
    def subscription_status(self) -> SubscriptionStatus:
        return rules.subscription_status(self)

    @property
    def has_valid_credentials(self) -> bool:
        return rules.has_valid_credentials(self.credentials)

    @property
    def is_authenticated(self) -> bool:
        return rules.is_authenticated(self)

    @property
    def can_create_quote(self) -> bool:
        return rules.can_create_quote(self)

    def get_primary_credential(self) -> Optional[UserCredential]:
        return rules.primary_credential(self.credentials)

    def get_credential_by_provider(self, provider_type: ProviderType) -> Optional[UserCredential]:
        return rules.credential_by_provider(self.credentials, provider_type)

    def has_provider(self, provider_type: ProviderType) -> bool:
        return rules.has_provider(self.credentials, provider_type)

    # -------------------------------------------------------------------------
    # Business actions
    # -------------------------------------------------------------------------

    def subscribe(self, actor_id: Optional[str] = None) -> None:
        self.is_subscribed = True
        self._touch(actor_id)

    def unsubscribe(self, actor_id: Optional[str] = None) -> None:
        """End the subscription, leaving a short grace trial from now."""
        self.is_subscribed = False
        self.trial_ends_at = utcnow() + timedelta(days=UNSUBSCRIBE_GRACE_DAYS)
        self._touch(actor_id)

    def verify_email(self, actor_id: str) -> None:
        self.email_verified = True
        self._touch(actor_id)

    def deactivate(self, actor_id: Optional[str] = None) -> None:
        self.is_active = False
        self.soft_delete(actor_id)

    def reactivate(self) -> None:
        self.is_active = True
        self.restore()

    def extend_trial(self, days: float, actor_id: Optional[str] = None) -> None:
        """Lengthen the trial. Subscribers are left untouched."""
        if self.is_subscribed:
            return
        self.trial_ends_at = self.trial_ends_at + timedelta(days=days)
        self._touch(actor_id)

    def soft_delete(self, actor_id: Optional[str] = None) -> None:
        self.audit.soft_delete(actor_id)
        self.is_active = False

    def restore(self) -> None:
        self.audit.restore()
        self.is_active = True

    def _touch(self, actor_id: Optional[str]) -> None:
        if actor_id:
            self.audit.set_updated_by(actor_id)
