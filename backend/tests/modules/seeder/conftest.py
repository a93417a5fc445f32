"""Pytest fixtures for seeder module tests."""

import json
import pytest
from pathlib import Path

from modules.users.repository import InMemoryCredentialRepository, InMemoryUserRepository
from modules.seeder.user_seeder import UserSeeder


# Cheapest cost factor bcrypt accepts
TEST_BCRYPT_ROUNDS = 4


def _seed_record(email: str, **overrides) -> dict:
    record = {
        "email": email,
        "firstName": "Test",
        "lastName": "User",
        "phone": "+15550000001",
        "emailVerified": True,
        "isSubscribed": False,
        "isActive": True,
        "password": "SeedPass123!",
        "businessType": "plumbing",
        "description": "Test user",
    }
    record.update(overrides)
    return record


@pytest.fixture
def seed_record():
    """Builder for one camelCase seed record."""
    return _seed_record


@pytest.fixture
def write_seed_file(tmp_path: Path):
    """Write a seed file from records (or raw data) and return its path."""

    def write(records=None, raw=None, name: str = "users.json") -> Path:
        if raw is None:
            raw = {
                "content": records or [],
                "metadata": {
                    "version": "1.0.0",
                    "environment": "test",
                    "description": "Test users",
                    "lastUpdated": "2025-01-15",
                    "totalUsers": len(records or []),
                },
            }
        path = tmp_path / name
        path.write_text(raw if isinstance(raw, str) else json.dumps(raw), encoding="utf-8")
        return path

    return write


@pytest.fixture
def two_user_file(write_seed_file) -> Path:
    return write_seed_file(
        [
            _seed_record("first@example.com"),
            _seed_record("second@example.com", emailVerified=False, isSubscribed=True),
        ]
    )


@pytest.fixture
def credential_repo() -> InMemoryCredentialRepository:
    return InMemoryCredentialRepository()


@pytest.fixture
def user_repo(credential_repo) -> InMemoryUserRepository:
    return InMemoryUserRepository(credentials=credential_repo)


@pytest.fixture
def make_seeder(user_repo, credential_repo):
    def build(data_path: Path) -> UserSeeder:
        return UserSeeder(user_repo, credential_repo, data_path, bcrypt_rounds=TEST_BCRYPT_ROUNDS)

    return build
