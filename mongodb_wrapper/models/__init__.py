from .base import (
    UUID_FIELD,
    ConnectionState,
    Document,
    Filter,
    UpdateStrategy,
)

__all__ = [
    "UUID_FIELD",
    "ConnectionState",
    "Document",
    "Filter",
    "UpdateStrategy",
]
