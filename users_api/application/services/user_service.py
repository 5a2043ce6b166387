# Standard library imports
import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import replace
from typing import List, Optional

# Local application imports
from ...core.exceptions import StorageError
from ...core.security import DEFAULT_HASH_ROUNDS, hash_password
from ...domain.models.user import User
from ...domain.repositories.user_repository import UserRepository
from .user_validation import UserValidationRules, default_validation_rules

logger = logging.getLogger(__name__)


class UserService(ABC):
    """Service interface - user operations exposed to the API layer"""

    @abstractmethod
    async def get_all_users(self) -> List[User]:
        pass

    @abstractmethod
    async def get_user(self, user_id: str) -> User:
        pass

    @abstractmethod
    async def create_user(self, user: User) -> User:
        pass

    @abstractmethod
    async def update_user(self, user_id: str, user: User) -> User:
        pass

    @abstractmethod
    async def delete_user(self, user_id: str) -> None:
        pass


class DefaultUserService(UserService):
    """
    Validates input, hashes passwords and delegates persistence to the
    user repository.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        rules: Optional[UserValidationRules] = None,
        password_hash_rounds: int = DEFAULT_HASH_ROUNDS,
    ) -> None:
        self.user_repository = user_repository
        self.rules = rules or default_validation_rules()
        self.password_hash_rounds = password_hash_rounds

    async def get_all_users(self) -> List[User]:
        try:
            return await self.user_repository.find_all()
        except StorageError as e:
            raise self._annotate(e, "get_all_users") from e

    async def get_user(self, user_id: str) -> User:
        """
        Get a user by ID

        Raises:
            InvalidIdentifierError: If user_id is not 24 hex characters
            UserNotFoundError: If the user does not exist
        """
        self.rules.validate_identifier(user_id)
        try:
            return await self.user_repository.find_by_id(user_id)
        except StorageError as e:
            raise self._annotate(e, "get_user") from e

    async def create_user(self, user: User) -> User:
        """
        Create a new user

        Args:
            user: Draft user with a plain-text password

        Returns:
            Stored user with its ID and hashed password

        Raises:
            InvalidInputError: If a field fails validation
            WeakPasswordError: If the password fails the strength policy
        """
        self.rules.validate_new_user(user)

        draft = replace(user, id=None, password=await self._hash(user.password))
        try:
            created = await self.user_repository.create(draft)
        except StorageError as e:
            raise self._annotate(e, "create_user") from e

        logger.info(f"Created user {created.id}")
        return created

    async def update_user(self, user_id: str, user: User) -> User:
        """
        Merge the set fields of user into the stored user

        Fields left empty are not changed. A new password is validated and
        hashed like on creation.
        """
        self.rules.validate_identifier(user_id)
        self.rules.validate_partial_user(user)

        partial = replace(user, id=None)
        if partial.password:
            partial = replace(partial, password=await self._hash(partial.password))

        try:
            updated = await self.user_repository.update(user_id, partial)
        except StorageError as e:
            raise self._annotate(e, "update_user") from e

        logger.info(f"Updated user {user_id}")
        return updated

    async def delete_user(self, user_id: str) -> None:
        self.rules.validate_identifier(user_id)
        try:
            await self.user_repository.delete(user_id)
        except StorageError as e:
            raise self._annotate(e, "delete_user") from e
        logger.info(f"Deleted user {user_id}")

    async def _hash(self, plain_password: str) -> str:
        # bcrypt is CPU bound; keep it off the event loop
        return await asyncio.to_thread(hash_password, plain_password, self.password_hash_rounds)

    @staticmethod
    def _annotate(error: StorageError, operation: str) -> StorageError:
        logger.error(f"{operation} failed: {error.message}")
        annotated = StorageError(
            f"{operation}: {error.message}",
            operation=error.operation or operation,
            details={**error.details, "service_operation": operation},
        )
        return annotated
