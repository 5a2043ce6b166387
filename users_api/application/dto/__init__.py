from .user_dto import UserRequest, UserResponse, MessageResponse, ErrorResponse

__all__ = [
    "UserRequest",
    "UserResponse",
    "MessageResponse",
    "ErrorResponse",
]
