from .health_controller import router as health_router
from .users_controller import router as users_router


__all__ = ["health_router", "users_router"]
