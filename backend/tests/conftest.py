"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import pytest

from shared.config import get_settings
from shared.database import reset_client_cache
from modules.users.repository import reset_repositories
from modules.users.service import reset_account_service


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset cached settings, clients and services before and after each test."""
    get_settings.cache_clear()
    reset_client_cache()
    reset_repositories()
    reset_account_service()
    yield
    get_settings.cache_clear()
    reset_client_cache()
    reset_repositories()
    reset_account_service()
