"""
Inbound data-transfer objects for the users module.

DTOs accept camelCase keys (as sent by clients and stored in seed files)
as well as snake_case field names. Use parse_dto() at the boundary so
that malformed input surfaces as a shared ValidationError with one
message per offending field, before anything reaches storage.
"""

from typing import Any, ClassVar, Optional, TypeVar

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    StrictBool,
    UUID4,
    ValidationError as PydanticValidationError,
)
from pydantic.alias_generators import to_camel

from shared.exceptions import ValidationError

from .enums import ProviderType
from .models import User, UserCredential


# E.164-like: optional +, no leading zero, up to 15 digits
PHONE_PATTERN = r"^\+?[1-9]\d{1,14}$"

DtoT = TypeVar("DtoT", bound="BaseDto")


class BaseDto(BaseModel):
    """Common configuration for inbound DTOs."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    # Field name -> client-facing message for any failure on that field
    error_messages: ClassVar[dict[str, str]] = {}


class CreateUserDto(BaseDto):
    """Fields accepted when creating a user."""

    error_messages: ClassVar[dict[str, str]] = {
        "email": "Please provide a valid email address",
        "first_name": "First name must be a string of at most 100 characters",
        "last_name": "Last name must be a string of at most 100 characters",
        "phone": "Phone must be a valid international format (e.g., +15550123)",
        "email_verified": "Email verified must be a boolean",
        "is_active": "Is active must be a boolean",
        "is_subscribed": "Is subscribed must be a boolean",
    }

    email: EmailStr
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    phone: Optional[str] = Field(None, pattern=PHONE_PATTERN)
    email_verified: StrictBool = False
    is_active: StrictBool = True
    is_subscribed: StrictBool = False

    def to_user(self) -> User:
        """Build an unsaved User; trial_ends_at takes its default."""
        return User(**self.model_dump())


class CreateUserCredentialDto(BaseDto):
    """Fields accepted when attaching a credential to a user."""

    error_messages: ClassVar[dict[str, str]] = {
        "user_id": "User ID must be a valid UUID",
        "provider_type": "Provider type must be one of: email, google, microsoft, apple",
        "provider_id": "Provider ID cannot be empty",
        "credential_data": "Credential data must be at least 8 characters",
        "is_primary": "Is primary must be a boolean",
        "is_verified": "Is verified must be a boolean",
    }

    user_id: UUID4
    provider_type: ProviderType
    provider_id: str = Field(..., min_length=1)
    credential_data: str = Field(..., min_length=8)
    is_primary: StrictBool = False
    is_verified: StrictBool = False

    def to_credential(self) -> UserCredential:
        """Build an unsaved UserCredential."""
        return UserCredential(
            user_id=str(self.user_id),
            provider_type=self.provider_type,
            provider_id=self.provider_id,
            credential_data=self.credential_data,
            is_primary=self.is_primary,
            is_verified=self.is_verified,
        )


def _field_name(dto_cls: type[BaseDto], loc: tuple[Any, ...]) -> str:
    """Resolve an error location (alias or field name) to the field name."""
    if not loc:
        return "__root__"
    head = str(loc[0])
    for name, info in dto_cls.model_fields.items():
        if head in (name, info.alias):
            return name
    return head


def parse_dto(dto_cls: type[DtoT], data: dict[str, Any]) -> DtoT:
    """
    Validate raw input into a DTO.

    Args:
        dto_cls: The DTO class to validate against
        data: Raw input, camelCase or snake_case keys

    Returns:
        The validated DTO

    Raises:
        ValidationError: With details {"fields": {field_name: message}}
    """
    try:
        return dto_cls.model_validate(data)
    except PydanticValidationError as e:
        fields: dict[str, str] = {}
        for error in e.errors():
            name = _field_name(dto_cls, tuple(error["loc"]))
            fields.setdefault(name, dto_cls.error_messages.get(name, error["msg"]))
        raise ValidationError(
            f"Invalid {dto_cls.__name__}: {', '.join(sorted(fields))}",
            code="VALIDATION_FAILED",
            details={"fields": fields},
        ) from e
