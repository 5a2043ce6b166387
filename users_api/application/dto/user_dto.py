from typing import Optional

from pydantic import BaseModel

from ...domain.models.user import User


class UserRequest(BaseModel):
    """
    DTO for user create/update requests.

    Omitted, null, empty or zero fields are treated as not set.
    """
    name: Optional[str] = None
    age: Optional[int] = None
    email: Optional[str] = None
    password: Optional[str] = None
    address: Optional[str] = None

    def to_domain(self) -> User:
        return User(
            id=None,
            name=self.name or "",
            age=self.age or None,
            email=self.email or "",
            password=self.password or "",
            address=self.address or "",
        )


class UserResponse(BaseModel):
    """DTO for user response (no password)"""
    id: str
    name: str = ""
    age: Optional[int] = None
    email: str = ""
    address: str = ""

    @classmethod
    def from_domain(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id or "",
            name=user.name,
            age=user.age,
            email=user.email,
            address=user.address,
        )


class MessageResponse(BaseModel):
    """DTO for plain confirmation messages"""
    message: str


class ErrorResponse(BaseModel):
    """DTO for error payloads"""
    error: str
