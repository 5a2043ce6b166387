# Standard library imports
import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional
from urllib.parse import quote_plus

# External package imports
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase, AsyncIOMotorCollection
from pymongo.errors import PyMongoError

# Local application imports
from ...core.config import Settings, get_settings
from ...core.exceptions import CredentialError, DatabaseConnectionError
from ...utils.retry_utils import ExponentialBackoff, async_retry_with_backoff
from ..secrets.vault_credentials import DatabaseCredentials

logger = logging.getLogger(__name__)

USERS_COLLECTION = "users"


@dataclass(frozen=True)
class PoolOptions:
    """Connection pool bounds"""
    min_size: int = 10
    max_size: int = 100
    max_idle_minutes: int = 30


@dataclass
class MongoConnection:
    """Live MongoDB client and the database it serves"""
    client: AsyncIOMotorClient
    database: AsyncIOMotorDatabase

    def users_collection(self) -> AsyncIOMotorCollection:
        """
        Get users collection from MongoDB

        Returns:
            MongoDB collection for users
        """
        return self.database[USERS_COLLECTION]

    def close(self) -> None:
        self.client.close()


def build_connection_uri(credentials: DatabaseCredentials, host: str, port: str) -> str:
    """
    Build a mongodb:// connection string with URL-quoted credentials

    Args:
        credentials: Database username/password
        host: Database host
        port: Database port

    Returns:
        Connection string
    """
    if not host or not str(port):
        raise DatabaseConnectionError("DB_HOST or DB_PORT not set")
    username = quote_plus(credentials.username)
    password = quote_plus(credentials.password)
    return f"mongodb://{username}:{password}@{host}:{port}"


async def connect(
    credentials: DatabaseCredentials,
    host: str,
    port: str,
    db_name: str,
    timeout: float,
    pool: Optional[PoolOptions] = None,
) -> MongoConnection:
    """
    Open a pooled MongoDB connection and verify it with a ping

    Args:
        credentials: Database username/password
        host: Database host
        port: Database port
        db_name: Database name
        timeout: Seconds allowed for server selection and connecting
        pool: Pool bounds (defaults to PoolOptions())

    Returns:
        MongoConnection for the named database

    Raises:
        DatabaseConnectionError: If the client cannot be created or the ping fails
    """
    if not db_name:
        raise DatabaseConnectionError("DB_NAME not set")
    pool = pool or PoolOptions()
    timeout_ms = int(timeout * 1000)

    try:
        client = AsyncIOMotorClient(
            build_connection_uri(credentials, host, port),
            minPoolSize=pool.min_size,
            maxPoolSize=pool.max_size,
            maxIdleTimeMS=pool.max_idle_minutes * 60 * 1000,
            serverSelectionTimeoutMS=timeout_ms,
            connectTimeoutMS=timeout_ms,
        )
    except (PyMongoError, ValueError, TypeError) as e:
        raise DatabaseConnectionError(f"Failed to create MongoDB client: {e}") from e

    try:
        await client.admin.command("ping")
    except PyMongoError as e:
        client.close()
        raise DatabaseConnectionError(f"Failed to connect to MongoDB at {host}:{port}: {e}") from e

    return MongoConnection(client=client, database=client[db_name])


def backoff_from_settings(settings: Settings) -> ExponentialBackoff:
    return ExponentialBackoff(
        max_attempts=settings.db_connect_max_attempts,
        initial_interval=settings.db_connect_initial_interval,
        max_interval=settings.db_connect_max_interval,
    )


async def connect_with_retries(
    credential_provider: Callable[[], Awaitable[DatabaseCredentials]],
    settings: Optional[Settings] = None,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> MongoConnection:
    """
    Fetch credentials once, then connect to MongoDB with exponential backoff.

    Each attempt uses the current backoff interval as its timeout. Credential
    failures are not retried.

    Args:
        credential_provider: Coroutine function returning the credentials
        settings: Application settings (defaults to get_settings())
        sleep: Awaitable sleep function (injectable for tests)

    Returns:
        Verified MongoConnection

    Raises:
        CredentialError: If the credentials cannot be fetched
        DatabaseConnectionError: If every attempt failed
    """
    settings = settings or get_settings()
    try:
        credentials = await credential_provider()
    except CredentialError:
        logger.error("Could not fetch database credentials", exc_info=True)
        raise

    pool = PoolOptions(
        min_size=settings.db_min_pool_size,
        max_size=settings.db_max_pool_size,
        max_idle_minutes=settings.db_max_idle_minutes,
    )

    async def attempt(timeout: float) -> MongoConnection:
        return await connect(
            credentials,
            settings.db_host,
            settings.db_port,
            settings.db_name,
            timeout=timeout,
            pool=pool,
        )

    connection = await async_retry_with_backoff(
        attempt,
        backoff_from_settings(settings),
        retry_on=(DatabaseConnectionError,),
        sleep=sleep,
        description="MongoDB connection",
    )
    logger.info(f"Connected to MongoDB! Database name: {settings.db_name}")
    return connection


async def close_with_timeout(connection: MongoConnection, timeout: float = 10.0) -> bool:
    """
    Close the MongoDB client, waiting at most timeout seconds

    Returns:
        True if the client closed in time, False on timeout
    """
    try:
        await asyncio.wait_for(asyncio.to_thread(connection.close), timeout=timeout)
    except asyncio.TimeoutError:
        logger.warning(f"MongoDB client did not close within {timeout:.0f}s")
        return False
    logger.info("MongoDB connection closed")
    return True
