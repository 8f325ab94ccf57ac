"""
MongoDB document store backing the user adapter.

Wraps a Motor collection behind the small surface the adapter needs:
connect, find_one and save, plus the live schema documents are bound to.
"""
import logging
from enum import Enum
from typing import Any, Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection
from pymongo.errors import InvalidOperation, PyMongoError

from user_adapter.config import get_settings
from user_adapter.core.exceptions import MissingConnectionURIError
from user_adapter.models.document import UserDocument
from user_adapter.models.schema import UserSchema

logger = logging.getLogger(__name__)


class ConnectionState(str, Enum):
    """Connection lifecycle of a store."""
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    FAILED = "failed"


class MotorUserStore:
    """Users collection accessed through Motor."""

    def __init__(
        self,
        schema: Optional[UserSchema] = None,
        client: Optional[AsyncIOMotorClient] = None,
        database_name: Optional[str] = None,
        collection_name: Optional[str] = None,
    ):
        """
        Args:
            schema: Live schema, an empty one is created if omitted
            client: Already configured Motor client to share
            database_name: Defaults to the DATABASE_NAME setting
            collection_name: Defaults to the USERS_COLLECTION setting
        """
        settings = get_settings()
        self.schema = schema if schema is not None else UserSchema()
        self.client = client
        self.database_name = database_name or settings.database_name
        self.collection_name = collection_name or settings.users_collection
        self.state = ConnectionState.CONNECTED if client is not None else ConnectionState.DISCONNECTED

    @property
    def collection(self) -> AsyncIOMotorCollection:
        if self.client is None:
            raise InvalidOperation("User store is not connected")
        return self.client[self.database_name][self.collection_name]

    # ==================== Connection ====================

    async def connect(self, uri: Optional[str], options: Optional[dict[str, Any]] = None) -> None:
        """
        Open the Motor client, check it answers and create unique indexes.

        A store that is already connected is left as is.

        Raises:
            MissingConnectionURIError: If no URI is given
            PyMongoError: Driver failures, unchanged
        """
        if self.state == ConnectionState.CONNECTED:
            return
        if not uri:
            raise MissingConnectionURIError()

        self.state = ConnectionState.CONNECTING
        logger.info("Try connecting to MongoDB")

        client_options = {
            "serverSelectionTimeoutMS": get_settings().server_selection_timeout_ms,
            **(options or {}),
        }
        try:
            self.client = AsyncIOMotorClient(uri, **client_options)
            await self.client.admin.command("ping")
            await self.ensure_indexes()
        except Exception as e:
            self.state = ConnectionState.FAILED
            logger.error(f"Error connecting to MongoDB: {e}")
            if self.client is not None:
                self.client.close()
                self.client = None
            raise

        self.state = ConnectionState.CONNECTED
        logger.info(f"Connected to MongoDB ({self.database_name}.{self.collection_name})")

    async def ensure_indexes(self) -> None:
        """Create a unique index for every unique schema path."""
        for path in self.schema.unique_paths():
            await self.collection.create_index(path, unique=True, sparse=True)

    def close(self) -> None:
        """Close the Motor client."""
        if self.client is not None:
            self.client.close()
            self.client = None
        self.state = ConnectionState.DISCONNECTED

    # ==================== Documents ====================

    def new_document(
        self,
        data: Optional[dict[str, Any]] = None,
        profile_field: Optional[str] = None,
    ) -> UserDocument:
        """Unsaved document with the schema defaults applied."""
        document_data = self.schema.apply_defaults(dict(data or {}))
        return UserDocument(
            document_data,
            schema=self.schema,
            profile_field=profile_field,
            is_new=True,
        )

    async def find_one(
        self,
        query: dict[str, Any],
        profile_field: Optional[str] = None,
    ) -> Optional[UserDocument]:
        """Fetch a single user document, or None."""
        try:
            data = await self.collection.find_one(query)
        except PyMongoError as e:
            logger.error(f"Error reading user with {query}: {e}")
            raise

        if data is None:
            return None
        return UserDocument(data, schema=self.schema, profile_field=profile_field, is_new=False)

    async def save(self, document: UserDocument) -> UserDocument:
        """
        Persist a document.

        New documents are inserted. Existing ones get a ``$set`` of the
        paths written since they were loaded, so profile keys are updated
        individually as ``profile.<key>``.
        """
        try:
            if document.is_new:
                result = await self.collection.insert_one(document.to_mongo())
                document.mark_saved(result.inserted_id)
                return document

            updates = self._modified_values(document)
            if updates:
                await self.collection.update_one({"_id": document.raw_id}, {"$set": updates})
        except PyMongoError as e:
            logger.error(f"Error saving user {document.id}: {e}")
            raise

        document.mark_saved()
        return document

    @staticmethod
    def _modified_values(document: UserDocument) -> dict[str, Any]:
        # A path written as a whole supersedes its own sub-paths
        paths = document.modified_paths
        return {
            path: document.get(path)
            for path in paths
            if not any(path.startswith(f"{parent}.") for parent in paths)
        }
