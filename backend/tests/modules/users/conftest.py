"""
Pytest fixtures for users module tests.

The builder fixtures return unsaved entities; the repository fixtures are
the in-memory implementations wired together the way the seeder uses them.
"""

import pytest
from datetime import timedelta

from shared.models import utcnow
from modules.users.enums import ProviderType
from modules.users.models import User, UserCredential
from modules.users.repository import InMemoryCredentialRepository, InMemoryUserRepository


@pytest.fixture
def make_credential():
    """Builder for a verified, primary, non-expiring email credential."""

    def build(user_id: str = "user-1", **overrides) -> UserCredential:
        fields = {
            "user_id": user_id,
            "provider_type": ProviderType.EMAIL,
            "provider_id": "owner@example.com",
            "credential_data": "$2b$04$hashhashhashhashhashhash",
            "is_primary": True,
            "is_verified": True,
        }
        fields.update(overrides)
        return UserCredential(**fields)

    return build


@pytest.fixture
def make_user():
    """Builder for an active, verified user in the middle of a trial."""

    def build(**overrides) -> User:
        fields = {
            "email": "owner@example.com",
            "first_name": "Maria",
            "last_name": "Garcia",
            "email_verified": True,
            "trial_ends_at": utcnow() + timedelta(days=10),
        }
        fields.update(overrides)
        return User(**fields)

    return build


@pytest.fixture
def authenticated_user(make_user, make_credential) -> User:
    """A user who passes every authorization check."""
    user = make_user()
    user.credentials = [make_credential(user.id)]
    return user


@pytest.fixture
def credential_repo() -> InMemoryCredentialRepository:
    return InMemoryCredentialRepository()


@pytest.fixture
def user_repo(credential_repo) -> InMemoryUserRepository:
    return InMemoryUserRepository(credentials=credential_repo)
