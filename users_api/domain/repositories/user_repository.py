from abc import ABC, abstractmethod
from typing import List
from ..models.user import User


class UserRepository(ABC):
    """Repository interface - defines contract for user data access"""

    @abstractmethod
    async def find_all(self) -> List[User]:
        """Return every stored user, in storage order"""
        pass

    @abstractmethod
    async def find_by_id(self, user_id: str) -> User:
        """Find user by ID, raising UserNotFoundError when absent"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Insert user and return it with its assigned ID"""
        pass

    @abstractmethod
    async def update(self, user_id: str, user: User) -> User:
        """Merge the non-zero fields of user into the stored document"""
        pass

    @abstractmethod
    async def delete(self, user_id: str) -> None:
        """Delete user by ID, raising UserNotFoundError when absent"""
        pass
