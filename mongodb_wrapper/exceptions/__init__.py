# Base exception class
from .base import MongoWrapperError

from .domain_exceptions import (
    ConfigurationError,
    ValidationError,
    LifecycleError,
    AlreadyConnectedError,
    NotConnectedError,
    DuplicateEntryError,
    NonExistentEntryError,
)

__all__ = [
    # Base exception
    "MongoWrapperError",

    # Domain exceptions (alphabetically ordered)
    "AlreadyConnectedError",
    "ConfigurationError",
    "DuplicateEntryError",
    "LifecycleError",
    "NonExistentEntryError",
    "NotConnectedError",
    "ValidationError",
]
