# Standard library imports
import logging
from typing import List, NoReturn

# External package imports
from fastapi import APIRouter, HTTPException, Response, status

# Local application imports
from ...application.dto.user_dto import ErrorResponse, MessageResponse, UserRequest, UserResponse
from ...application.services.user_service import UserService
from ...core.exceptions import (
    InternalError,
    UserNotFoundError,
    UsersApiError,
    ValidationError,
    get_user_message,
)
from ...di.container import get_container


logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["users"],
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    },
)


def _get_user_service() -> UserService:
    container = get_container()
    return container.get(UserService)


def _require_id(user_id: str) -> str:
    if not user_id or not user_id.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User ID is required in the request"
        )
    return user_id


def _raise_http_error(exception: Exception, action: str) -> NoReturn:
    """
    Map a service exception to an HTTPException

    Validation errors -> 400, missing user -> 404, anything else -> 500 with a
    sanitized message (the full error is logged).
    """
    if isinstance(exception, ValidationError):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Bad request. {exception.message}"
        )
    if isinstance(exception, UserNotFoundError):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )
    if isinstance(exception, UsersApiError):
        logger.error(f"Failed to {action}: {exception.message}")
    else:
        logger.error(f"Failed to {action}: {exception}", exc_info=exception)
        exception = InternalError(f"Unexpected error while trying to {action}: {exception}")
    raise HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Internal Server Error. {get_user_message(exception)}"
    )


@router.get("", response_model=List[UserResponse])
async def get_all_users() -> List[UserResponse]:
    """
    List all users

    Returns:
        List of UserResponse (passwords are never returned)
    """
    user_service = _get_user_service()

    try:
        users = await user_service.get_all_users()
    except Exception as exception:
        _raise_http_error(exception, "list users")
    return [UserResponse.from_domain(user) for user in users]


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: str) -> UserResponse:
    """
    Get a user by ID

    Args:
        user_id: 24 hex character user ID

    Returns:
        UserResponse with user information
    """
    _require_id(user_id)
    user_service = _get_user_service()

    try:
        user = await user_service.get_user(user_id)
    except Exception as exception:
        _raise_http_error(exception, "get user")
    return UserResponse.from_domain(user)


@router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def create_user(request: UserRequest) -> MessageResponse:
    """
    Create a new user

    Args:
        request: User draft with plain-text password

    Returns:
        Confirmation message
    """
    user_service = _get_user_service()

    try:
        await user_service.create_user(request.to_domain())
    except Exception as exception:
        _raise_http_error(exception, "create user")
    return MessageResponse(message="User created successfully")


@router.put("/{user_id}", response_model=MessageResponse)
async def update_user(user_id: str, request: UserRequest) -> MessageResponse:
    """
    Update the fields present in the request; other fields are left unchanged

    Args:
        user_id: 24 hex character user ID
        request: Partial user

    Returns:
        Confirmation message
    """
    _require_id(user_id)
    user_service = _get_user_service()

    try:
        await user_service.update_user(user_id, request.to_domain())
    except Exception as exception:
        _raise_http_error(exception, "update user")
    return MessageResponse(message="User updated successfully")


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_user(user_id: str) -> Response:
    """
    Delete a user

    Args:
        user_id: 24 hex character user ID
    """
    _require_id(user_id)
    user_service = _get_user_service()

    try:
        await user_service.delete_user(user_id)
    except Exception as exception:
        _raise_http_error(exception, "delete user")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
