"""
Account service implementation.

Loads users, applies the named business actions under an optimistic
version check, and persists the result. Callers pass the version they
last observed; a VersionConflictError means they must re-fetch and retry.
"""

import logging
from typing import Callable, Optional

from shared.config import get_settings

from .dto import CreateUserCredentialDto, CreateUserDto, parse_dto
from .enums import ProviderType
from .exceptions import UserNotFoundError
from .interfaces import ICredentialRepository, IUserRepository
from .models import User
from .repository import get_credential_repository, get_user_repository
from .security import DEFAULT_BCRYPT_ROUNDS, hash_password


logger = logging.getLogger(__name__)


class AccountService:
    """User account lifecycle on top of the user and credential repositories."""

    def __init__(
        self,
        users: IUserRepository,
        credentials: ICredentialRepository,
        bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS,
    ):
        self._users = users
        self._credentials = credentials
        self._bcrypt_rounds = bcrypt_rounds

    def get_user(self, user_id: str) -> User:
        """
        Get a user with credentials loaded.

        Raises:
            UserNotFoundError: If no user has this ID
        """
        user = self._users.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    def register_with_email(
        self,
        dto: CreateUserDto,
        password: str,
        actor_id: Optional[str] = None,
    ) -> User:
        """
        Create a user and its primary email credential.

        The credential is verified exactly when the user's email is.

        Returns:
            The saved user with its credential attached
        """
        password_hash = hash_password(password, self._bcrypt_rounds)

        user = self._users.create(dto)
        if actor_id:
            user.audit.set_created_by(actor_id)
        self._users.save(user)

        credential_dto = parse_dto(
            CreateUserCredentialDto,
            {
                "user_id": user.id,
                "provider_type": ProviderType.EMAIL,
                "provider_id": user.email,
                "credential_data": password_hash,
                "is_primary": True,
                "is_verified": user.email_verified,
            },
        )
        credential = self._credentials.create(credential_dto)
        if actor_id:
            credential.audit.set_created_by(actor_id)
        self._credentials.save(credential)

        user.credentials = [credential]
        logger.info("Registered user %s with email credential", user.id)
        return user

    # -------------------------------------------------------------------------
    # Version-checked business actions
    # -------------------------------------------------------------------------

    def subscribe(self, user_id: str, expected_version: int, actor_id: Optional[str] = None) -> User:
        return self._apply(user_id, expected_version, lambda u: u.subscribe(actor_id))

    def unsubscribe(self, user_id: str, expected_version: int, actor_id: Optional[str] = None) -> User:
        return self._apply(user_id, expected_version, lambda u: u.unsubscribe(actor_id))

    def verify_email(self, user_id: str, expected_version: int, actor_id: str) -> User:
        return self._apply(user_id, expected_version, lambda u: u.verify_email(actor_id))

    def deactivate(self, user_id: str, expected_version: int, actor_id: Optional[str] = None) -> User:
        return self._apply(user_id, expected_version, lambda u: u.deactivate(actor_id))

    def reactivate(self, user_id: str, expected_version: int) -> User:
        return self._apply(user_id, expected_version, lambda u: u.reactivate())

    def extend_trial(
        self,
        user_id: str,
        expected_version: int,
        days: float,
        actor_id: Optional[str] = None,
    ) -> User:
        return self._apply(user_id, expected_version, lambda u: u.extend_trial(days, actor_id))

    def _apply(self, user_id: str, expected_version: int, action: Callable[[User], None]) -> User:
        user = self.get_user(user_id)
        user.audit.check_version(expected_version)
        action(user)
        saved = self._users.save(user)
        logger.debug("User %s saved at version %d", user_id, saved.audit.version)
        return saved


# Module-level instance getter
_service_instance: Optional[AccountService] = None


def get_account_service() -> AccountService:
    """Get the account service singleton, backed by Supabase."""
    global _service_instance
    if _service_instance is None:
        _service_instance = AccountService(
            get_user_repository(),
            get_credential_repository(),
            bcrypt_rounds=get_settings().bcrypt_rounds,
        )
    return _service_instance


def reset_account_service() -> None:
    """Reset the account service singleton (for testing)."""
    global _service_instance
    _service_instance = None
