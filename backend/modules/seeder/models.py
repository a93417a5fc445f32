"""
Seeder data models.

These mirror the JSON seed files: a ``content`` payload plus a
``metadata`` block describing the dataset. Keys are camelCase on disk.
"""

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from shared.models import UTCDateTime


ContentT = TypeVar("ContentT")


class SeedModel(BaseModel):
    """Seed file models read camelCase keys and ignore unknown ones."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class SeedMetadata(SeedModel):
    """Describes a seed dataset."""

    version: str = Field(..., description="Dataset version")
    environment: str = Field(..., description="Target environment, e.g. development")
    description: str = Field(..., description="What the dataset contains")
    last_updated: str = Field(..., description="When the dataset was last edited")
    total_users: int = Field(..., ge=0, description="Number of user records")


class UserSeedData(SeedModel):
    """
    One user to seed.

    The password is plaintext and is hashed before it is stored.
    """

    email: str
    first_name: str
    last_name: str
    phone: Optional[str] = None
    email_verified: bool
    is_subscribed: bool
    is_active: bool
    password: str
    business_type: Optional[str] = None
    trial_ends_at: Optional[UTCDateTime] = None
    description: str


class SeedFile(SeedModel, Generic[ContentT]):
    """A parsed seed file."""

    content: ContentT
    metadata: SeedMetadata


UserSeedFile = SeedFile[list[UserSeedData]]
