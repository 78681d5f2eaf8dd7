"""
MongoDB Collection Wrapper

Read/write access to a single MongoDB collection. Most operations are plain
pass-throughs to the driver collection. Three write paths are checked:

- insert_one(): refuses a document whose ``uuid`` is already stored
- update_one() / delete_one(): refuse a filter that matches no document
- safe_insert_subfields(): refuses to push a subdocument whose ``uuid`` is
  already stored under that field

update_many() and delete_many() deliberately skip the existence check and
return the driver result as-is.

The duplicate checks are a probe followed by a write with no transaction in
between. Two concurrent inserts of the same uuid can both pass the probe;
only a unique index on ``uuid`` (not created by this wrapper) closes the race.
"""

import logging
from typing import Any, Dict, Mapping, Union

from pymongo import ReturnDocument

from ..exceptions import (
    ConfigurationError,
    DuplicateEntryError,
    NonExistentEntryError,
    NotConnectedError,
    ValidationError,
)
from ..models import UUID_FIELD, Document, Filter, UpdateStrategy
from ..utils import build_update, extract_subfield_uuid, normalize_filter, resolve
from .delegation import PassThrough

logger = logging.getLogger(__name__)


class MongoCollectionWrapper:
    """
    Accessor for one named collection of a connected database.

    Construction is two-step: the constructor only validates and stores its
    arguments, and ``open()`` resolves the driver collection handle. Use
    ``await MongoCollectionWrapper.create(db, "users")`` to do both.

    Attributes:
        database: Driver database handle the collection belongs to
        collection_name: Name of the collection
        collection: Driver collection handle, None until open() completes
    """

    # Read queries
    find = PassThrough("collection")
    find_one = PassThrough("collection")
    count_documents = PassThrough("collection")
    estimated_document_count = PassThrough("collection")
    distinct = PassThrough("collection")
    aggregate = PassThrough("collection")

    # Unchecked writes
    insert_many = PassThrough("collection")
    replace_one = PassThrough("collection")
    bulk_write = PassThrough("collection")
    find_one_and_update = PassThrough("collection")
    find_one_and_delete = PassThrough("collection")
    find_one_and_replace = PassThrough("collection")

    # Indexes
    create_index = PassThrough("collection")
    create_indexes = PassThrough("collection")
    drop_index = PassThrough("collection")
    drop_indexes = PassThrough("collection")
    list_indexes = PassThrough("collection")
    index_information = PassThrough("collection")

    # Collection administration and change streams
    rename = PassThrough("collection")
    drop = PassThrough("collection")
    options = PassThrough("collection")
    watch = PassThrough("collection")

    def __init__(self, database: Any, collection_name: str, **options: Any):
        """Validate and store the collection settings.

        Args:
            database: Driver database handle (e.g. AsyncIOMotorDatabase)
            collection_name: Name of the collection to access
            **options: Extra arguments for ``database.get_collection``
                (codec_options, read_preference, write_concern, read_concern)

        Raises:
            ConfigurationError: Missing database handle or collection name
        """
        if database is None:
            raise ConfigurationError("Mongo client is not provided.", setting="database")
        if not collection_name:
            raise ConfigurationError("Collection name is not provided.", setting="collection_name")

        self.database = database
        self.collection_name = collection_name
        self.collection_options = options
        self.collection = None

    @classmethod
    async def create(cls, database: Any, collection_name: str, **options: Any) -> "MongoCollectionWrapper":
        """Build and open a collection wrapper in one call.

        Args:
            database: Driver database handle
            collection_name: Name of the collection to access
            **options: Extra arguments for ``database.get_collection``

        Returns:
            Opened MongoCollectionWrapper
        """
        wrapper = cls(database, collection_name, **options)
        return await wrapper.open()

    async def open(self) -> "MongoCollectionWrapper":
        """Resolve the driver collection handle.

        Driver errors raised while resolving the handle propagate unmodified.

        Returns:
            This wrapper, bound to the collection
        """
        self.collection = await resolve(
            self.database.get_collection(self.collection_name, **self.collection_options)
        )
        logger.debug(f"Opened collection {self.collection_name}")
        return self

    def _require_collection(self):
        if self.collection is None:
            raise NotConnectedError(f"Collection {self.collection_name} is not open.")
        return self.collection

    async def insert_one(self, document: Mapping[str, Any], **kwargs: Any):
        """
        Insert a document if no stored document has the same uuid.

        Args:
            document: Document to insert, must contain a ``uuid`` field
            **kwargs: Extra driver arguments (bypass_document_validation, session, ...)

        Returns:
            The driver's InsertOneResult

        Raises:
            ValidationError: Document has no uuid
            DuplicateEntryError: A document with the same uuid exists
        """
        collection = self._require_collection()
        if not isinstance(document, Mapping) or UUID_FIELD not in document:
            raise ValidationError(
                f"Cannot insert into {self.collection_name}: document has no {UUID_FIELD}.",
                {UUID_FIELD: "required"}
            )

        uuid = document[UUID_FIELD]
        logger.debug(f"Probing {self.collection_name} for uuid {uuid}")
        existing = await collection.count_documents({UUID_FIELD: uuid}, limit=1)
        if existing:
            logger.warning(f"Rejected duplicate uuid {uuid} in {self.collection_name}")
            raise DuplicateEntryError(
                f"Cannot insert into {self.collection_name}: UUID already exists.",
                self.collection_name,
                uuid
            )

        result = await collection.insert_one(document, **kwargs)
        logger.info(f"Inserted document {uuid} into {self.collection_name}")
        return result

    async def update_one(
        self,
        filters: Filter,
        fields: Mapping[str, Any],
        strategy: Union[str, UpdateStrategy] = UpdateStrategy.SET,
        **kwargs: Any
    ) -> Document:
        """
        Atomically update one document and return it.

        Args:
            filters: Query mapping, or a bare uuid value
            fields: Fields handed to the update operator
            strategy: Update operator, "$set" by default
            **kwargs: Extra driver arguments; return_document defaults to
                ReturnDocument.AFTER

        Returns:
            The updated document

        Raises:
            NonExistentEntryError: No document matched the filter
        """
        collection = self._require_collection()
        query = normalize_filter(filters)
        kwargs.setdefault('return_document', ReturnDocument.AFTER)

        document = await collection.find_one_and_update(query, build_update(fields, strategy), **kwargs)
        if document is None:
            logger.warning(f"Update matched nothing in {self.collection_name}: {query}")
            raise NonExistentEntryError(
                f"Cannot update {self.collection_name}: UUID doesn't exist.",
                self.collection_name,
                query
            )

        logger.info(f"Updated document in {self.collection_name}: {query}")
        return document

    async def update_many(
        self,
        filters: Filter,
        fields: Mapping[str, Any],
        strategy: Union[str, UpdateStrategy] = UpdateStrategy.SET,
        **kwargs: Any
    ):
        """
        Update every matching document.

        Unlike update_one(), a filter matching nothing is not an error.

        Returns:
            The driver's UpdateResult, unmodified
        """
        collection = self._require_collection()
        return await collection.update_many(normalize_filter(filters), build_update(fields, strategy), **kwargs)

    async def delete_one(self, filters: Filter, **kwargs: Any) -> Document:
        """
        Atomically delete one document and return it.

        Args:
            filters: Query mapping, or a bare uuid value
            **kwargs: Extra driver arguments (sort, projection, session, ...)

        Returns:
            The deleted document

        Raises:
            NonExistentEntryError: No document matched the filter
        """
        collection = self._require_collection()
        query = normalize_filter(filters)

        document = await collection.find_one_and_delete(query, **kwargs)
        if document is None:
            logger.warning(f"Delete matched nothing in {self.collection_name}: {query}")
            raise NonExistentEntryError(
                f"Cannot delete {self.collection_name}: UUID doesn't exist.",
                self.collection_name,
                query
            )

        logger.info(f"Deleted document from {self.collection_name}: {query}")
        return document

    async def delete_many(self, filters: Filter, **kwargs: Any):
        """
        Delete every matching document.

        Unlike delete_one(), a filter matching nothing is not an error.

        Returns:
            The driver's DeleteResult, unmodified
        """
        collection = self._require_collection()
        return await collection.delete_many(normalize_filter(filters), **kwargs)

    async def safe_insert_subfields(self, filters: Filter, fields: Mapping[str, Any], **kwargs: Any) -> Document:
        """
        Push a subdocument onto an array field unless its uuid is already stored.

        Example:
            await members.safe_insert_subfields(
                "team-1",
                {"members": {"uuid": "bbb", "name": "bar"}}
            )

        Args:
            filters: Query mapping, or a bare uuid value, selecting the parent
            fields: Exactly one field mapped to a subdocument carrying a uuid
            **kwargs: Extra driver arguments; return_document defaults to
                ReturnDocument.AFTER

        Returns:
            The updated parent document

        Raises:
            ValidationError: ``fields`` is not one field carrying a uuid, or ``filters`` is None
            DuplicateEntryError: Some document already holds that subfield uuid
            NonExistentEntryError: No parent document matched the filter
        """
        collection = self._require_collection()
        field_name, uuid = extract_subfield_uuid(fields)
        query = normalize_filter(filters)
        probe: Dict[str, Any] = {f"{field_name}.{UUID_FIELD}": uuid}

        logger.debug(f"Probing {self.collection_name} for {field_name} uuid {uuid}")
        existing = await collection.count_documents(probe, limit=1)
        if existing:
            logger.warning(f"Rejected duplicate {field_name} uuid {uuid} in {self.collection_name}")
            raise DuplicateEntryError(
                f"Cannot update {self.collection_name}: {field_name} UUID already exists.",
                self.collection_name,
                uuid
            )

        kwargs.setdefault('return_document', ReturnDocument.AFTER)
        document = await collection.find_one_and_update(query, build_update(fields, UpdateStrategy.PUSH), **kwargs)
        if document is None:
            logger.warning(f"Subfield push matched nothing in {self.collection_name}: {query}")
            raise NonExistentEntryError(
                f"Cannot update {self.collection_name}: UUID doesn't exist.",
                self.collection_name,
                query
            )

        logger.info(f"Pushed {field_name} {uuid} in {self.collection_name}: {query}")
        return document

    def __repr__(self) -> str:
        state = "open" if self.collection is not None else "closed"
        return f"MongoCollectionWrapper({self.collection_name!r}, {state})"
