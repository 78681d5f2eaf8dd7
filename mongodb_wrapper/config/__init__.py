from .config import MongoDBConfig

__all__ = ["MongoDBConfig"]
