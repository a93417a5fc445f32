"""
User seeder.

Creates users and their primary email credentials from a JSON seed file.
Records are processed one at a time, in file order.
"""

import logging
from pathlib import Path

from modules.users.dto import CreateUserCredentialDto, CreateUserDto, parse_dto
from modules.users.enums import ProviderType
from modules.users.interfaces import ICredentialRepository, IUserRepository
from modules.users.models import User
from modules.users.security import DEFAULT_BCRYPT_ROUNDS, hash_password

from .exceptions import SeedRecordError
from .loader import load_user_seed_file
from .models import UserSeedData


logger = logging.getLogger(__name__)


class UserSeeder:
    """
    Seeds the users and user_credentials tables.

    Seeding is skipped when any user already exists. A failing record
    aborts the run; records created before it stay persisted.
    """

    name = "users"

    def __init__(
        self,
        users: IUserRepository,
        credentials: ICredentialRepository,
        data_path: Path,
        bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS,
    ):
        self._users = users
        self._credentials = credentials
        self._data_path = data_path
        self._bcrypt_rounds = bcrypt_rounds

    def seed(self) -> int:
        """
        Create every user in the seed file.

        Returns:
            Number of users created (0 when users already exist)

        Raises:
            SeedDataError: If the seed file cannot be loaded
            SeedRecordError: If a record cannot be created
        """
        logger.info("Seeding users...")

        existing = self._users.count()
        if existing > 0:
            logger.info("Users already exist (%d), skipping seed", existing)
            return 0

        seed_file = load_user_seed_file(self._data_path)
        logger.info(
            "Loaded %d users from seed data (v%s)",
            len(seed_file.content),
            seed_file.metadata.version,
        )

        created = 0
        for record in seed_file.content:
            try:
                user = self._create_user(record)
            except Exception as e:
                logger.error("Failed to create user %s: %s", record.email, e)
                raise SeedRecordError(record.email, str(e)) from e
            logger.debug("Created user %s (%s)", user.email, user.id)
            created += 1

        logger.info("Successfully created %d users with credentials", created)
        return created

    def clear(self) -> int:
        """
        Hard-delete all credentials, then all users.

        Returns:
            Number of rows removed across both tables
        """
        logger.info("Clearing users...")

        credential_count = self._credentials.count()
        user_count = self._users.count()

        if credential_count == 0 and user_count == 0:
            logger.info("No users or credentials to clear")
            return 0

        removed = 0
        if credential_count > 0:
            removed += self._credentials.delete()
            logger.info("Cleared %d user credentials", credential_count)

        if user_count > 0:
            removed += self._users.delete()
            logger.info("Cleared %d users", user_count)

        return removed

    def _create_user(self, record: UserSeedData) -> User:
        password_hash = hash_password(record.password, self._bcrypt_rounds)

        user_dto = parse_dto(
            CreateUserDto,
            {
                "email": record.email,
                "first_name": record.first_name,
                "last_name": record.last_name,
                "phone": record.phone,
                "email_verified": record.email_verified,
                "is_subscribed": record.is_subscribed,
                "is_active": record.is_active,
            },
        )
        user = self._users.create(user_dto)
        if record.trial_ends_at is not None:
            user.trial_ends_at = record.trial_ends_at
        user = self._users.save(user)

        credential_dto = parse_dto(
            CreateUserCredentialDto,
            {
                "user_id": user.id,
                "provider_type": ProviderType.EMAIL,
                "provider_id": user.email,
                "credential_data": password_hash,
                "is_primary": True,
                "is_verified": record.email_verified,
            },
        )
        credential = self._credentials.create(credential_dto)
        self._credentials.save(credential)

        return user
