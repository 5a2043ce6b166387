from .base_container import BaseContainer
from .container import DIContainer, configure_container, get_container, reset_container

__all__ = [
    "BaseContainer",
    "DIContainer",
    "configure_container",
    "get_container",
    "reset_container",
]
