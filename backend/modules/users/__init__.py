"""
Users module.

Handles user accounts, their authentication credentials, and the
subscription/trial lifecycle.

Public API:
- User, UserCredential: Account entities with derived authorization predicates
- CreateUserDto, CreateUserCredentialDto, parse_dto: Inbound validation
- IUserRepository, ICredentialRepository: Persistence interfaces
- service.AccountService: Version-checked account actions (import from .service)
- Users exceptions: UserNotFoundError, DuplicateEmailError
"""

from .enums import ProviderType, SubscriptionStatus
from .models import User, UserCredential, TRIAL_PERIOD_DAYS, UNSUBSCRIBE_GRACE_DAYS
from .dto import CreateUserDto, CreateUserCredentialDto, parse_dto
from .interfaces import IUserRepository, ICredentialRepository
from .exceptions import UserNotFoundError, DuplicateEmailError

__all__ = [
    # Enums
    "ProviderType",
    "SubscriptionStatus",
    # Models
    "User",
    "UserCredential",
    "TRIAL_PERIOD_DAYS",
    "UNSUBSCRIBE_GRACE_DAYS",
    # DTOs
    "CreateUserDto",
    "CreateUserCredentialDto",
    "parse_dto",
    # Interfaces
    "IUserRepository",
    "ICredentialRepository",
    # Exceptions
    "UserNotFoundError",
    "DuplicateEmailError",
]
