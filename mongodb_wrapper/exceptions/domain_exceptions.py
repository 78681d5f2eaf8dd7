"""
Domain-Specific Exceptions for MongoDB Wrapper

This module holds every exception raised by the wrapper itself. They all
extend MongoWrapperError so callers can catch the wrapper's own failures in
one place while driver errors keep their pymongo types.

Organized by category:
1. Configuration and Validation Errors
2. Connection Lifecycle Errors
3. Entry Errors (checked operations)
"""

from typing import Any, Dict, Optional

from .base import MongoWrapperError


# =============================================================================
# Configuration and Validation Errors
# =============================================================================

class ConfigurationError(MongoWrapperError):
    """Raised when a wrapper is built without a required setting.

    Used for:
    - Collection accessor built without a database handle
    - Collection accessor built without a collection name
    """

    def __init__(self, message: str, setting: Optional[str] = None, original_error: Optional[Exception] = None):
        """Initialize configuration error.

        Args:
            message: Human-readable error message
            setting: Name of the missing or invalid setting
            original_error: The original exception that caused this error
        """
        self.setting = setting
        context = {}
        if setting:
            context['setting'] = setting
        super().__init__(message, original_error, context)


class ValidationError(MongoWrapperError):
    """Raised when a document or update payload has the wrong shape.

    Used for:
    - Documents inserted without a ``uuid`` field
    - Subfield pushes that are not a single field carrying a ``uuid``
    """

    def __init__(self, message: str, errors: Optional[Dict[str, Any]] = None, original_error: Optional[Exception] = None):
        """Initialize validation error.

        Args:
            message: Human-readable error message
            errors: Dictionary of field-level validation errors
            original_error: The original exception that caused this error
        """
        self.errors = errors or {}
        context = {
            'validation_errors': self.errors
        }
        super().__init__(message, original_error, context)


# =============================================================================
# Connection Lifecycle Errors
# =============================================================================

class LifecycleError(MongoWrapperError):
    """Raised when an operation does not fit the current connection state."""

    def __init__(self, message: str, state: Optional[str] = None, original_error: Optional[Exception] = None):
        """Initialize lifecycle error.

        Args:
            message: Human-readable error message
            state: Connection state at the time of the failure
            original_error: The original exception that caused this error
        """
        self.state = state
        context = {}
        if state:
            context['state'] = state
        super().__init__(message, original_error, context)


class AlreadyConnectedError(LifecycleError):
    """Raised by connect() when the manager already holds a connection."""

    def __init__(self, message: str = "Already connected.", state: Optional[str] = "connected"):
        super().__init__(message, state)


class NotConnectedError(LifecycleError):
    """Raised by disconnect() and by delegated calls when no connection is held."""

    def __init__(self, message: str = "Not connected.", state: Optional[str] = "disconnected"):
        super().__init__(message, state)


# =============================================================================
# Entry Errors
# =============================================================================

class DuplicateEntryError(MongoWrapperError):
    """Raised when an insert targets a ``uuid`` that already exists.

    Used for:
    - insert_one() on a document whose uuid is already stored
    - safe_insert_subfields() on a subdocument whose uuid is already stored
    """

    def __init__(self, message: str, collection_name: Optional[str] = None, uuid: Optional[Any] = None):
        """Initialize duplicate entry error.

        Args:
            message: Human-readable error message
            collection_name: Collection the insert targeted
            uuid: The duplicated uuid value
        """
        self.collection_name = collection_name
        self.uuid = uuid
        context = {}
        if collection_name:
            context['collection'] = collection_name
        if uuid is not None:
            context['uuid'] = uuid
        super().__init__(message, None, context)


class NonExistentEntryError(MongoWrapperError):
    """Raised when a single-document update or delete matches nothing.

    update_many() and delete_many() never raise it.
    """

    def __init__(self, message: str, collection_name: Optional[str] = None, filters: Optional[Dict[str, Any]] = None):
        """Initialize non-existent entry error.

        Args:
            message: Human-readable error message
            collection_name: Collection the operation targeted
            filters: The filter that matched no document
        """
        self.collection_name = collection_name
        self.filters = filters
        context = {}
        if collection_name:
            context['collection'] = collection_name
        if filters is not None:
            context['filter'] = filters
        super().__init__(message, None, context)
