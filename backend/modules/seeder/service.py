"""
Seeder orchestration.

SeederService runs the registered seeders in dependency order when
seeding and in reverse order when clearing, so that child tables are
emptied before their parents.
"""

import logging
from pathlib import Path
from typing import Optional

from shared.config import Settings, get_settings
from modules.users.interfaces import ICredentialRepository, IUserRepository
from modules.users.repository import get_credential_repository, get_user_repository

from .interfaces import ISeeder
from .user_seeder import UserSeeder


logger = logging.getLogger(__name__)


class SeederService:
    """Runs a fixed sequence of seeders."""

    def __init__(self, seeders: list[ISeeder]):
        self._seeders = list(seeders)

    @property
    def seeders(self) -> list[ISeeder]:
        return list(self._seeders)

    def seed_all(self) -> dict[str, int]:
        """
        Run every seeder in order.

        Returns:
            Records created per seeder name

        Raises:
            Whatever the failing seeder raised, after logging it
        """
        logger.info("Starting database seeding...")
        results: dict[str, int] = {}
        try:
            for seeder in self._seeders:
                results[seeder.name] = seeder.seed()
        except Exception as e:
            logger.error("Database seeding failed: %s", e)
            raise
        logger.info("Database seeding completed successfully")
        return results

    def clear(self) -> dict[str, int]:
        """
        Clear every seeder's tables in reverse order.

        Returns:
            Rows removed per seeder name
        """
        logger.info("Clearing database...")
        results: dict[str, int] = {}
        try:
            for seeder in reversed(self._seeders):
                results[seeder.name] = seeder.clear()
        except Exception as e:
            logger.error("Database clearing failed: %s", e)
            raise
        logger.info("Database cleared successfully")
        return results

    def reset_and_seed(self) -> dict[str, int]:
        """Clear then seed. Returns the seed results."""
        logger.info("Resetting and seeding database...")
        self.clear()
        return self.seed_all()


def create_seeder_service(
    settings: Optional[Settings] = None,
    users: Optional[IUserRepository] = None,
    credentials: Optional[ICredentialRepository] = None,
    data_path: Optional[Path] = None,
) -> SeederService:
    """
    Wire a SeederService.

    Repositories default to the Supabase-backed singletons; pass in-memory
    ones to seed without a database.
    """
    settings = settings or get_settings()
    user_seeder = UserSeeder(
        users if users is not None else get_user_repository(),
        credentials if credentials is not None else get_credential_repository(),
        data_path=data_path or settings.seed_data_path,
        bcrypt_rounds=settings.bcrypt_rounds,
    )
    return SeederService([user_seeder])
