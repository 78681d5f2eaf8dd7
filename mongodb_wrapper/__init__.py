"""
MongoDB Wrapper Library

A thin asynchronous convenience layer over motor: a connection manager with a
connect/disconnect guard, and a collection accessor that forwards driver
operations and adds duplicate checks on the ``uuid`` field and existence
checks on single-document updates and deletes.
"""

from .config import MongoDBConfig
from .exceptions import (
    AlreadyConnectedError,
    ConfigurationError,
    DuplicateEntryError,
    LifecycleError,
    MongoWrapperError,
    NonExistentEntryError,
    NotConnectedError,
    ValidationError,
)
from .models import (
    UUID_FIELD,
    ConnectionState,
    Document,
    Filter,
    UpdateStrategy,
)
from .core import (
    MongoCollectionWrapper,
    MongoWrapper,
    PassThrough,
)

__version__ = "2.2.0"
__all__ = [
    # Configuration
    "MongoDBConfig",

    # Exceptions
    "AlreadyConnectedError",
    "ConfigurationError",
    "DuplicateEntryError",
    "LifecycleError",
    "MongoWrapperError",
    "NonExistentEntryError",
    "NotConnectedError",
    "ValidationError",

    # Models
    "UUID_FIELD",
    "ConnectionState",
    "Document",
    "Filter",
    "UpdateStrategy",

    # Wrappers
    "MongoCollectionWrapper",
    "MongoWrapper",
    "PassThrough",
]
