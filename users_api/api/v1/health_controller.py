# External package imports
from fastapi import APIRouter

# Local application imports
from ...application.dto.user_dto import MessageResponse


router = APIRouter(tags=["health"])


@router.get("/ping", response_model=MessageResponse)
async def ping() -> MessageResponse:
    """Liveness probe"""
    return MessageResponse(message="pong")
