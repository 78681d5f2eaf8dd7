"""
Test helpers for the MongoDB wrapper.

This module provides in-memory database and collection doubles used to check
collection contents around checked operations.
"""

from .fake_mongo import FakeCollection, FakeDatabase

__all__ = [
    'FakeCollection',
    'FakeDatabase',
]
