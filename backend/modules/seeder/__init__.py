"""
Seeder module - development and test data.

Populates the account tables from JSON seed files and clears them again.

Usage:
    from modules.seeder import create_seeder_service

    service = create_seeder_service()
    service.reset_and_seed()
"""

from .exceptions import SeedDataError, SeedRecordError
from .interfaces import ISeeder
from .loader import load_user_seed_file, read_json_file
from .models import SeedFile, SeedMetadata, UserSeedData, UserSeedFile
from .service import SeederService, create_seeder_service
from .user_seeder import UserSeeder

__all__ = [
    # Service
    "SeederService",
    "create_seeder_service",
    "UserSeeder",
    "ISeeder",
    # Loading
    "load_user_seed_file",
    "read_json_file",
    # Models
    "SeedFile",
    "SeedMetadata",
    "UserSeedData",
    "UserSeedFile",
    # Exceptions
    "SeedDataError",
    "SeedRecordError",
]
