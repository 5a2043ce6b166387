from .mongo_connection import (
    MongoConnection,
    PoolOptions,
    build_connection_uri,
    close_with_timeout,
    connect,
    connect_with_retries,
)
from .mongo_user_repository import MongoUserRepository

__all__ = [
    "MongoConnection",
    "PoolOptions",
    "build_connection_uri",
    "close_with_timeout",
    "connect",
    "connect_with_retries",
    "MongoUserRepository",
]
