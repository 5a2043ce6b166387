"""
Validation rules for user input.

The rules are an immutable value built once at startup and injected into the
user service, so every request validates against the same compiled patterns.
"""
# Standard library imports
import re
import string
from dataclasses import dataclass, field
from typing import Optional, Pattern

# External package imports
from email_validator import EmailNotValidError, validate_email

# Local application imports
from ...core.exceptions import InvalidIdentifierError, InvalidInputError, WeakPasswordError
from ...domain.constants import UserFields
from ...domain.models.user import User


DEFAULT_SPECIAL_CHARACTERS = "!@#$%^&*"


@dataclass(frozen=True)
class UserValidationRules:
    """Limits and patterns applied to user fields"""
    name_min_length: int = 3
    name_max_length: int = 50
    password_min_length: int = 8
    password_max_length: int = 128
    min_age: int = 1
    max_age: int = 150
    address_min_length: int = 5
    special_characters: str = DEFAULT_SPECIAL_CHARACTERS
    # Letters and whitespace, at least one letter
    name_pattern: Pattern[str] = field(default=re.compile(r"(?=.*[A-Za-z])[A-Za-z\s]+"))
    # 24 hex characters, the MongoDB ObjectId format
    identifier_pattern: Pattern[str] = field(default=re.compile(r"[0-9a-fA-F]{24}"))

    def validate_identifier(self, user_id: Optional[str]) -> str:
        if not isinstance(user_id, str) or not self.identifier_pattern.fullmatch(user_id):
            raise InvalidIdentifierError(user_id)
        return user_id

    def validate_name(self, name: str) -> None:
        if not name:
            raise InvalidInputError("Name is required", field=UserFields.NAME)
        if not self.name_min_length <= len(name) <= self.name_max_length:
            raise InvalidInputError(
                f"Name must be between {self.name_min_length} and "
                f"{self.name_max_length} characters",
                field=UserFields.NAME,
            )
        if not self.name_pattern.fullmatch(name):
            raise InvalidInputError(
                "Name may only contain letters and spaces", field=UserFields.NAME
            )

    def validate_password_length(self, password: str) -> None:
        if not password:
            raise InvalidInputError("Password cannot be empty", field=UserFields.PASSWORD)
        if not self.password_min_length <= len(password) <= self.password_max_length:
            raise InvalidInputError(
                f"Password must be between {self.password_min_length} and "
                f"{self.password_max_length} characters",
                field=UserFields.PASSWORD,
            )

    def is_strong_password(self, password: str) -> bool:
        """
        At least password_min_length characters, one uppercase letter, one
        lowercase letter, one digit and one special character.
        """
        return (
            len(password) >= self.password_min_length
            and any(c in string.ascii_uppercase for c in password)
            and any(c in string.ascii_lowercase for c in password)
            and any(c in string.digits for c in password)
            and any(c in self.special_characters for c in password)
        )

    def validate_password(self, password: str) -> None:
        self.validate_password_length(password)
        if not self.is_strong_password(password):
            raise WeakPasswordError(
                "Password isn't strong enough, it should have at least "
                f"{self.password_min_length} characters, one uppercase letter, "
                "one lowercase letter, one number and one special character "
                f"({self.special_characters})"
            )

    def validate_email(self, email: str) -> None:
        try:
            validate_email(email, check_deliverability=False)
        except EmailNotValidError as e:
            raise InvalidInputError(f"Invalid email: {e}", field=UserFields.EMAIL) from e

    def validate_age(self, age: int) -> None:
        if isinstance(age, bool) or not isinstance(age, int) or not self.min_age <= age <= self.max_age:
            raise InvalidInputError(
                f"Age must be an integer between {self.min_age} and {self.max_age}",
                field=UserFields.AGE,
            )

    def validate_address(self, address: str) -> None:
        if len(address) < self.address_min_length:
            raise InvalidInputError(
                f"Address must be at least {self.address_min_length} characters",
                field=UserFields.ADDRESS,
            )

    def validate_new_user(self, user: User) -> None:
        """Name and password are required; other fields are checked when set"""
        self.validate_name(user.name)
        self.validate_password(user.password)
        self._validate_optional_fields(user)

    def validate_partial_user(self, user: User) -> None:
        """Every set field follows the same rules as on creation"""
        if not user.present_fields():
            raise InvalidInputError("No fields to update")
        if user.name:
            self.validate_name(user.name)
        if user.password:
            self.validate_password(user.password)
        self._validate_optional_fields(user)

    def _validate_optional_fields(self, user: User) -> None:
        if user.email:
            self.validate_email(user.email)
        if user.age:
            self.validate_age(user.age)
        if user.address:
            self.validate_address(user.address)


def default_validation_rules() -> UserValidationRules:
    return UserValidationRules()
