"""
MongoDB Connection Manager

This module provides MongoWrapper, the entry point of the library. It owns
the connection lifecycle and hands out collection wrappers:

1. connect() opens a client and selects a database, once
2. collection() returns an opened MongoCollectionWrapper
3. disconnect() closes the client and clears every handle

Database-level administrative operations (listing, creating and dropping
collections, raw commands, statistics) are forwarded to the selected database
without added semantics.

The driver client class is injected through ``client_factory`` so tests and
callers can substitute any object with the AsyncIOMotorClient surface.
"""

import logging
from typing import Any, Callable, Optional

from motor.motor_asyncio import AsyncIOMotorClient

from ..config import MongoDBConfig
from ..exceptions import AlreadyConnectedError, NotConnectedError
from ..models import ConnectionState
from ..utils import resolve
from .collection import MongoCollectionWrapper
from .delegation import PassThrough

logger = logging.getLogger(__name__)


class MongoWrapper:
    """
    Connection manager for one MongoDB database.

    Invariant: ``connection`` and ``db`` are set if and only if ``state`` is
    CONNECTED.

    Attributes:
        config: MongoDB configuration
        state: Current ConnectionState
        connection: Driver client, None while disconnected
        db: Selected driver database, None while disconnected
    """

    list_collections = PassThrough("db")
    list_collection_names = PassThrough("db")
    create_collection = PassThrough("db")
    drop_collection = PassThrough("db")
    get_collection = PassThrough("db")
    command = PassThrough("db")
    watch = PassThrough("db")

    def __init__(
        self,
        config: Optional[MongoDBConfig] = None,
        client_factory: Callable[..., Any] = AsyncIOMotorClient
    ):
        """Initialize a disconnected manager.

        Args:
            config: MongoDB configuration (defaults to MongoDBConfig.from_env())
            client_factory: Callable building the driver client from a URL
                and keyword options
        """
        self.config = config or MongoDBConfig.from_env()
        self.client_factory = client_factory
        self.state = ConnectionState.DISCONNECTED
        self.connection = None
        self.db = None

        if self.config.enable_debug_logging:
            logging.getLogger("mongodb_wrapper").setLevel(logging.DEBUG)

    @property
    def connected(self) -> bool:
        """Whether the manager currently holds a connection."""
        return self.state == ConnectionState.CONNECTED

    async def connect(self, url: Optional[str] = None, database_name: Optional[str] = None) -> "MongoWrapper":
        """
        Open a client connection and select a database.

        Args:
            url: Connection string (defaults to config.url)
            database_name: Database to select (defaults to config.database_name)

        Returns:
            This manager, connected

        Raises:
            AlreadyConnectedError: The manager is already connected
            pymongo.errors.PyMongoError: The server could not be reached
        """
        if self.connected:
            raise AlreadyConnectedError()

        url = url or self.config.url
        database_name = database_name or self.config.database_name

        client = self.client_factory(url, **self.config.client_options())
        try:
            if self.config.ping_on_connect:
                await client.admin.command("ping")
            db = client.get_database(database_name)
        except Exception:
            logger.error(f"MongoDB connect failed, closing client for {database_name}")
            await resolve(client.close())
            raise

        self.connection = client
        self.db = db
        self.state = ConnectionState.CONNECTED
        logger.info(f"Connected to MongoDB database {database_name}")

        return self

    async def disconnect(self) -> "MongoWrapper":
        """
        Close the client connection and clear all handles.

        Returns:
            This manager, disconnected

        Raises:
            NotConnectedError: The manager is not connected
        """
        if not self.connected:
            raise NotConnectedError()

        await resolve(self.connection.close())
        self.state = ConnectionState.DISCONNECTED
        self.connection = None
        self.db = None
        logger.info("Disconnected from MongoDB")

        return self

    async def collection(self, collection_name: str, **options: Any) -> MongoCollectionWrapper:
        """
        Get access to a specific MongoDB collection.

        Args:
            collection_name: The collection name to access
            **options: Extra arguments for the driver's get_collection

        Returns:
            An opened MongoCollectionWrapper

        Raises:
            NotConnectedError: The manager is not connected
            ConfigurationError: The collection name is empty
        """
        if not self.connected:
            raise NotConnectedError(f"Cannot access collection {collection_name}: not connected.")
        return await MongoCollectionWrapper.create(self.db, collection_name, **options)

    async def stats(self, **kwargs: Any):
        """
        Get the database statistics (the ``dbStats`` command).

        Args:
            **kwargs: Extra command fields, e.g. scale=1024

        Returns:
            The raw command response
        """
        if not self.connected:
            raise NotConnectedError("Cannot call stats: not connected.")
        return await self.db.command("dbStats", **kwargs)

    async def __aenter__(self) -> "MongoWrapper":
        return await self.connect()

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.connected:
            await self.disconnect()

    def __repr__(self) -> str:
        return f"MongoWrapper(database={self.config.database_name!r}, state={self.state.value})"
