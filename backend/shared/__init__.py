"""
Shared infrastructure for the Contraqo backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: Supabase client factory
- exceptions: Base exception classes
- models: Audit/versioning field-set embedded by every entity
- repository: Repository base classes

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .database import get_supabase_client, reset_client_cache
from .exceptions import (
    ContraqoError,
    NotFoundError,
    ValidationError,
    ConflictError,
    VersionConflictError,
    ExternalServiceError,
)
from .models import AuditTrail, Auditable

__all__ = [
    "Settings",
    "get_settings",
    "get_supabase_client",
    "reset_client_cache",
    "ContraqoError",
    "NotFoundError",
    "ValidationError",
    "ConflictError",
    "VersionConflictError",
    "ExternalServiceError",
    "AuditTrail",
    "Auditable",
]
