import os
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# Load environment variables from .env file if it exists
load_dotenv()

_INVALID_DATABASE_CHARS = set('/\\. "$')


class MongoDBConfig(BaseModel):
    """Configuration for MongoDB connection and operations."""

    url: str = Field(
        default_factory=lambda: os.getenv("MONGODB_URL", "mongodb://localhost:27017"),
        description="MongoDB connection string"
    )

    database_name: str = Field(
        default_factory=lambda: os.getenv("MONGODB_DATABASE", "app"),
        description="Database selected on connect"
    )

    # Collection configuration
    collection_prefix: str = Field(
        default_factory=lambda: os.getenv("MONGODB_COLLECTION_PREFIX", ""),
        description="Prefix to add to all collection names"
    )

    app_name: Optional[str] = Field(
        default_factory=lambda: os.getenv("MONGODB_APP_NAME"),
        description="Application name reported to the server in the handshake"
    )

    # Connection settings
    max_pool_size: int = Field(
        default=100,
        description="Maximum number of connections in the connection pool"
    )

    min_pool_size: int = Field(
        default=0,
        description="Minimum number of connections kept open in the pool"
    )

    server_selection_timeout_ms: int = Field(
        default=30000,
        description="How long the driver waits to find an available server"
    )

    connect_timeout_ms: int = Field(
        default=20000,
        description="Socket connect timeout in milliseconds"
    )

    ping_on_connect: bool = Field(
        default=True,
        description="Run a ping command on connect so an unreachable server fails fast"
    )

    # Environment settings
    environment: str = Field(
        default_factory=lambda: os.getenv("ENVIRONMENT", "dev"),
        description="Current environment (dev, test, staging, prod)"
    )

    # Logging settings
    enable_debug_logging: bool = Field(
        default_factory=lambda: os.getenv("MONGODB_DEBUG_LOGGING", "false").lower() == "true",
        description="Enable debug logging for MongoDB operations"
    )

    @field_validator('url')
    @classmethod
    def validate_url(cls, v):
        """Validate MongoDB connection string scheme."""
        if not v:
            raise ValueError("MongoDB URL is required")
        if not v.startswith(("mongodb://", "mongodb+srv://")):
            raise ValueError("MongoDB URL must start with 'mongodb://' or 'mongodb+srv://'")
        return v

    @field_validator('database_name')
    @classmethod
    def validate_database_name(cls, v):
        """Validate database name against MongoDB naming restrictions."""
        if not v:
            raise ValueError("Database name is required")
        invalid = _INVALID_DATABASE_CHARS.intersection(v)
        if invalid:
            raise ValueError(f"Database name contains invalid characters: {sorted(invalid)}")
        return v

    @field_validator('environment')
    @classmethod
    def validate_environment(cls, v):
        """Validate environment value."""
        valid_environments = ['dev', 'test', 'staging', 'prod']
        if v not in valid_environments:
            raise ValueError(f"Environment must be one of: {valid_environments}")
        return v

    @model_validator(mode='after')
    def validate_pool_sizes(self):
        """Validate that the pool bounds are consistent."""
        if self.min_pool_size < 0:
            raise ValueError("min_pool_size cannot be negative")
        if self.max_pool_size and self.min_pool_size > self.max_pool_size:
            raise ValueError("min_pool_size cannot exceed max_pool_size")
        return self

    def client_options(self) -> Dict[str, Any]:
        """Get keyword arguments for the driver client constructor.

        Returns:
            Options understood by motor/pymongo client classes
        """
        options = {
            'maxPoolSize': self.max_pool_size,
            'minPoolSize': self.min_pool_size,
            'serverSelectionTimeoutMS': self.server_selection_timeout_ms,
            'connectTimeoutMS': self.connect_timeout_ms,
        }
        if self.app_name:
            options['appname'] = self.app_name
        return options

    def get_collection_name(self, base_name: str) -> str:
        """Get the full collection name with prefix and environment.

        Args:
            base_name: Base collection name

        Returns:
            Full collection name with prefix and environment
        """
        parts = []

        if self.collection_prefix:
            parts.append(self.collection_prefix)

        if self.environment != "prod":
            parts.append(self.environment)

        parts.append(base_name)

        return "_".join(parts)

    @classmethod
    def from_env(cls) -> 'MongoDBConfig':
        """Create configuration from environment variables.

        Returns:
            MongoDBConfig instance
        """
        return cls()

    @classmethod
    def for_local_development(cls) -> 'MongoDBConfig':
        """Create configuration for a local MongoDB server.

        Returns:
            MongoDBConfig instance configured for local development
        """
        return cls(
            url="mongodb://localhost:27017",
            database_name="local_dev",
            environment="dev",
            server_selection_timeout_ms=5000,
            enable_debug_logging=True
        )

    @classmethod
    def for_testing(cls, url: Optional[str] = None, database_name: str = "mongodb_wrapper_test") -> 'MongoDBConfig':
        """Create configuration for test runs.

        Args:
            url: Connection string of the test server (defaults to MONGODB_TEST_URL)
            database_name: Throwaway database name

        Returns:
            MongoDBConfig instance with short timeouts
        """
        return cls(
            url=url or os.getenv("MONGODB_TEST_URL", "mongodb://localhost:27017"),
            database_name=database_name,
            environment="test",
            server_selection_timeout_ms=2000,
            connect_timeout_ms=2000
        )

    model_config = ConfigDict(
        validate_assignment=True
    )
