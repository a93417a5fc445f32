"""
Seed file loading.

Reads a JSON seed file and validates its structure before anything is
written, so a malformed file never produces a partial seed.
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from .exceptions import SeedDataError
from .models import UserSeedFile


logger = logging.getLogger(__name__)


def read_json_file(path: Path) -> Any:
    """
    Read and parse a JSON file.

    Raises:
        OSError: If the file cannot be read
        json.JSONDecodeError: If the contents are not valid JSON
    """
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.error("Error reading or parsing JSON file at %s: %s", path, e)
        raise


def load_user_seed_file(path: Path) -> UserSeedFile:
    """
    Load and validate a users seed file.

    Args:
        path: Location of the JSON seed file

    Returns:
        The parsed seed file

    Raises:
        SeedDataError: If the file is missing, not JSON, or structurally invalid
    """
    try:
        raw = read_json_file(path)
    except (OSError, json.JSONDecodeError) as e:
        raise SeedDataError(str(path), str(e)) from e

    if not isinstance(raw, dict) or not isinstance(raw.get("content"), list):
        raise SeedDataError(str(path), "Invalid seed data structure: missing users array")

    if not raw.get("metadata"):
        raise SeedDataError(str(path), "Invalid seed data structure: missing metadata")

    try:
        seed_file = UserSeedFile.model_validate(raw)
    except PydanticValidationError as e:
        fields = sorted({".".join(str(part) for part in err["loc"]) for err in e.errors()})
        raise SeedDataError(
            str(path),
            f"Invalid seed data structure: {', '.join(fields)}",
        ) from e

    logger.info("Successfully loaded seed data: %s", seed_file.metadata.description)
    logger.debug(
        "Environment: %s, Version: %s",
        seed_file.metadata.environment,
        seed_file.metadata.version,
    )

    if seed_file.metadata.total_users != len(seed_file.content):
        logger.warning(
            "Seed metadata declares %d users but the file contains %d",
            seed_file.metadata.total_users,
            len(seed_file.content),
        )

    return seed_file
