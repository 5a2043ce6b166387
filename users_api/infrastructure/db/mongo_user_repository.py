# Standard library imports
import logging
from typing import List

# External package imports
from motor.motor_asyncio import AsyncIOMotorCollection
from bson import ObjectId
from bson.errors import BSONError, InvalidId
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

# Local application imports
from ...domain.repositories.user_repository import UserRepository
from ...domain.models.user import User
from ...domain.constants import UserFields
from ...core.exceptions import InvalidIdentifierError, StorageError, UserNotFoundError

logger = logging.getLogger(__name__)

# Driver failures plus documents BSON cannot encode (e.g. ints wider than 64 bits)
STORAGE_ERRORS = (PyMongoError, BSONError, OverflowError)


class MongoUserRepository(UserRepository):
    """MongoDB implementation of UserRepository"""

    def __init__(self, user_collection: AsyncIOMotorCollection) -> None:
        self.user_collection = user_collection

    async def find_all(self) -> List[User]:
        """
        Load every user in the collection

        Returns:
            List of User domain models in storage order
        """
        users: List[User] = []
        try:
            async for document in self.user_collection.find({}):
                users.append(self._document_to_user(document))
        except STORAGE_ERRORS as e:
            raise StorageError(f"Error listing users: {e}", operation="find_all") from e
        return users

    async def find_by_id(self, user_id: str) -> User:
        """
        Find user by ID

        Args:
            user_id: User ID to search for

        Returns:
            User domain model

        Raises:
            InvalidIdentifierError: If user_id is not an ObjectId
            UserNotFoundError: If no document matches
        """
        object_id = self._to_object_id(user_id)

        try:
            document = await self.user_collection.find_one({UserFields.MONGO_ID: object_id})
        except STORAGE_ERRORS as e:
            raise StorageError(f"Error finding user by ID: {e}", operation="find_by_id") from e

        if document is None:
            raise UserNotFoundError(user_id)
        return self._document_to_user(document)

    async def create(self, user: User) -> User:
        """
        Insert a new user

        Args:
            user: User domain model (id is ignored)

        Returns:
            User domain model with the ID assigned by MongoDB
        """
        user_dict = self._user_to_dict(user)
        try:
            result = await self.user_collection.insert_one(user_dict)
        except STORAGE_ERRORS as e:
            raise StorageError(f"Error creating user: {e}", operation="create") from e

        return self._document_to_user({**user_dict, UserFields.MONGO_ID: result.inserted_id})

    async def update(self, user_id: str, user: User) -> User:
        """
        Merge the non-zero fields of user into the stored document

        Args:
            user_id: ID of the user to update
            user: Partial user; zero-valued fields are left untouched

        Returns:
            Updated User domain model

        Raises:
            InvalidIdentifierError: If user_id is not an ObjectId
            UserNotFoundError: If no document matches
        """
        object_id = self._to_object_id(user_id)
        update_fields = self._user_to_dict(user)

        if not update_fields:
            # Nothing to merge; $set rejects an empty document
            return await self.find_by_id(user_id)

        try:
            document = await self.user_collection.find_one_and_update(
                {UserFields.MONGO_ID: object_id},
                {"$set": update_fields},
                return_document=ReturnDocument.AFTER,
            )
        except STORAGE_ERRORS as e:
            raise StorageError(f"Error updating user: {e}", operation="update") from e

        if document is None:
            raise UserNotFoundError(user_id)
        return self._document_to_user(document)

    async def delete(self, user_id: str) -> None:
        """
        Delete user by ID

        Raises:
            InvalidIdentifierError: If user_id is not an ObjectId
            UserNotFoundError: If no document matches
        """
        object_id = self._to_object_id(user_id)

        try:
            result = await self.user_collection.delete_one({UserFields.MONGO_ID: object_id})
        except STORAGE_ERRORS as e:
            raise StorageError(f"Error deleting user: {e}", operation="delete") from e

        if result.deleted_count == 0:
            raise UserNotFoundError(user_id)
        logger.debug(f"Deleted user {user_id}")

    @staticmethod
    def _to_object_id(user_id: str) -> ObjectId:
        # ObjectId(None) would generate a fresh id
        if not user_id:
            raise InvalidIdentifierError(user_id)
        try:
            return ObjectId(user_id)
        except (InvalidId, TypeError):
            raise InvalidIdentifierError(user_id)

    def _document_to_user(self, document: dict) -> User:
        """
        Convert MongoDB document to User domain model

        Args:
            document: MongoDB document dictionary

        Returns:
            User domain model
        """
        if not document or UserFields.MONGO_ID not in document:
            raise StorageError("Invalid document: missing _id field")

        return User(
            id=str(document[UserFields.MONGO_ID]),
            name=document.get(UserFields.NAME, ""),
            age=document.get(UserFields.AGE),
            email=document.get(UserFields.EMAIL, ""),
            password=document.get(UserFields.PASSWORD, ""),
            address=document.get(UserFields.ADDRESS, ""),
        )

    def _user_to_dict(self, user: User) -> dict:
        """
        Convert User domain model to a MongoDB document holding only set fields

        Args:
            user: User domain model

        Returns:
            Dictionary ready for MongoDB storage (never contains _id)
        """
        return user.present_fields()
