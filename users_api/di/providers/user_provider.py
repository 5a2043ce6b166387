from typing import TYPE_CHECKING
from ...core.config import Settings
from ...domain.repositories.user_repository import UserRepository
from ...application.services.user_service import UserService, DefaultUserService
from ...application.services.user_validation import UserValidationRules, default_validation_rules

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class UserProvider:
    """User service provider - registers validation rules and the user service"""

    @staticmethod
    def register(container: "BaseContainer", settings: Settings) -> None:
        """
        Register the validation rules once and the user service on top of
        the registered repository.
        """
        container.register_singleton(UserValidationRules, default_validation_rules())

        container.register_singleton(
            UserService,
            DefaultUserService(
                user_repository=container.get(UserRepository),
                rules=container.get(UserValidationRules),
                password_hash_rounds=settings.password_hash_rounds,
            )
        )
