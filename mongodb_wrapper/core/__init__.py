"""
Core components for MongoDB access.

- MongoWrapper: connection lifecycle and database-level pass-throughs
- MongoCollectionWrapper: checked and pass-through collection operations
- PassThrough: descriptor forwarding a method to a driver handle
"""

from .collection import MongoCollectionWrapper
from .connection import MongoWrapper
from .delegation import PassThrough, pass_through_names

__all__ = [
    "MongoCollectionWrapper",
    "MongoWrapper",
    "PassThrough",
    "pass_through_names",
]
