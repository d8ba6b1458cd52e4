"""
MongoDB adapter for document-based operations.
Holds the process-wide client and exposes the collection operations the services use.
"""

import logging
from typing import Dict, Any, List, Optional
from pymongo import MongoClient
from pymongo.errors import PyMongoError
from .schemas import DOCUMENT_VALIDATORS, DOCUMENT_ID_FIELDS

logger = logging.getLogger(__name__)

DEFAULT_DB_NAME = 'imageUpload'


class MongoAdapter:
    """MongoDB adapter for document-based database operations"""

    def __init__(self, connection_string: str, timeout_ms: int = 5000, client: Optional[MongoClient] = None):
        if not connection_string:
            raise ValueError("MongoDB connection string required. Set MONGODB_URI or pass connection_string")

        self.connection_string = connection_string
        self.timeout_ms = timeout_ms
        self.client = client
        self.db = None
        self.connected = False
        self._connect()

    @staticmethod
    def database_name(connection_string: str) -> str:
        """Extract the database name from the URI path, falling back to the default."""
        path = connection_string.split('://', 1)[-1]
        if '/' not in path:
            return DEFAULT_DB_NAME
        db_name = path.split('/', 1)[1].split('?')[0]
        return db_name or DEFAULT_DB_NAME

    def _connect(self) -> None:
        """Establish MongoDB connection.

        A failed ping is logged and not raised: pymongo reconnects lazily, so
        the process keeps serving and individual requests fail instead.
        """
        if self.client is None:
            self.client = MongoClient(self.connection_string, serverSelectionTimeoutMS=self.timeout_ms)

        db_name = self.database_name(self.connection_string)
        self.db = self.client[db_name]

        try:
            self.client.admin.command('ping')
            self.connected = True
            logger.info(f"MongoDB connected successfully: {db_name}")
        except PyMongoError as e:
            logger.error(f"MongoDB connection error: {e}")

    def _validate_document(self, collection: str, document: Dict[str, Any]) -> None:
        """Validate document against schema"""
        if collection in DOCUMENT_VALIDATORS:
            try:
                DOCUMENT_VALIDATORS[collection](document)
            except Exception as e:
                logger.error(f"Document validation failed for {collection}: {e}")
                raise ValueError(f"Document validation failed: {e}")

    def _id_field(self, collection: str) -> str:
        if collection not in DOCUMENT_ID_FIELDS:
            raise ValueError(f"Unknown collection: {collection}")
        return DOCUMENT_ID_FIELDS[collection]

    def init_collections(self) -> None:
        """Initialize MongoDB indexes"""
        try:
            for collection_name, id_field in DOCUMENT_ID_FIELDS.items():
                self.db[collection_name].create_index([(id_field, 1)])

            logger.info("MongoDB collections and indexes initialized successfully")

        except Exception as e:
            logger.error(f"Error initializing MongoDB collections: {e}")
            raise

    def create_document(self, collection: str, document: Dict[str, Any]) -> str:
        """Insert a document and return its MongoDB id"""
        try:
            self._validate_document(collection, document)

            # insert_one adds _id to the dict it is given
            result = self.db[collection].insert_one(dict(document))
            doc_id = str(result.inserted_id)

            logger.info(f"Created document in {collection} with ID: {doc_id}")
            return doc_id

        except Exception as e:
            logger.error(f"Error creating document in {collection}: {e}")
            raise

    def query_documents(self, collection: str, query: Optional[Dict[str, Any]] = None,
                        limit: int = 0, offset: int = 0) -> List[Dict[str, Any]]:
        """Query documents with filters. A limit of 0 returns every match."""
        try:
            cursor = self.db[collection].find(query or {}).skip(offset).limit(limit)

            documents = []
            for doc in cursor:
                doc.pop('_id', None)
                documents.append(doc)

            return documents

        except Exception as e:
            logger.error(f"Error querying documents from {collection}: {e}")
            raise

    def count_documents(self, collection: str, query: Optional[Dict[str, Any]] = None) -> int:
        """Count documents matching query"""
        try:
            return self.db[collection].count_documents(query or {})
        except Exception as e:
            logger.error(f"Error counting documents in {collection}: {e}")
            raise

    def close(self) -> None:
        """Close MongoDB connection"""
        if self.client:
            self.client.close()
