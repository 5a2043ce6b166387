from typing import TYPE_CHECKING
from ...infrastructure.db.mongo_connection import MongoConnection

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class DatabaseProvider:
    """Centralized database connection provider - single source of truth for all DB connections"""

    @staticmethod
    def register(container: "BaseContainer", connection: MongoConnection) -> None:
        """
        Register the live connection and its collections in the container.
        This is the ONLY place where database connections are registered.
        """
        container.register_singleton(MongoConnection, connection)
        container.register_singleton("database", connection.database)
        container.register_singleton("user_collection", connection.users_collection())
