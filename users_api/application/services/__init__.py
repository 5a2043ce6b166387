from .user_service import UserService, DefaultUserService
from .user_validation import UserValidationRules, default_validation_rules

__all__ = [
    "UserService",
    "DefaultUserService",
    "UserValidationRules",
    "default_validation_rules",
]
