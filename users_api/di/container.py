# Standard library imports
from typing import Optional

# Local application imports
from ..core.config import Settings, get_settings
from ..infrastructure.db.mongo_connection import MongoConnection
from .base_container import BaseContainer
from .providers import (
    DatabaseProvider,
    RepositoryProvider,
    UserProvider,
)


class DIContainer(BaseContainer):
    """
    Main dependency injection container.
    Composes all providers in the correct order.

    Registration order is important:
    1. Database connection (DatabaseProvider)
    2. Repositories (RepositoryProvider) - depends on database
    3. Services (UserProvider) - depend on repositories
    """

    def __init__(self, connection: MongoConnection, settings: Optional[Settings] = None) -> None:
        super().__init__()
        self.connection = connection
        self.settings = settings or get_settings()
        self.setup()

    def setup(self) -> None:
        """
        Setup dependency registrations by composing all providers.
        Order matters: database → repositories → services
        """
        DatabaseProvider.register(self, self.connection)
        RepositoryProvider.register(self)
        UserProvider.register(self, self.settings)


# Global container instance, set once the database connection is live
_container: Optional[BaseContainer] = None


def configure_container(container: BaseContainer) -> BaseContainer:
    """
    Install the global DI container (called from the application lifespan)

    Returns:
        The installed container
    """
    global _container
    _container = container
    return _container


def reset_container() -> None:
    global _container
    _container = None


def get_container() -> BaseContainer:
    """
    Get the global DI container instance

    Returns:
        Container with all dependencies registered

    Raises:
        RuntimeError: If the application has not finished starting up
    """
    if _container is None:
        raise RuntimeError("Dependency container not configured; the database is not connected yet")
    return _container
