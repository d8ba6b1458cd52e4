"""
Image record service for the Images API.
Each record holds the provider URL and identifier of one uploaded image.
"""

import logging
from typing import Dict, Any, List

import jsonschema

from database.mongo_adapter import MongoAdapter
from database.schemas import validate_image_document
from images_api.errors import PersistenceError

logger = logging.getLogger(__name__)


class ImageRecordService:
    """Service for persisting and listing image records"""

    def __init__(self, adapter: MongoAdapter, collection: str = "images"):
        self.adapter = adapter
        self.collection = collection

    def create_image(self, url: str, public_id: str) -> Dict[str, Any]:
        """Persist a new image record and return it"""
        document = {"url": url, "public_id": public_id}
        try:
            self.adapter.create_document(self.collection, document)
        except Exception as e:
            logger.error(f"Error creating image record for {public_id}: {e}")
            raise PersistenceError() from e

        logger.info(f"Created image record {public_id}")
        return document

    def list_images(self) -> List[Dict[str, Any]]:
        """Get every image record, unfiltered.

        A stored document without a usable ``url`` or ``public_id`` fails the
        whole listing with ``PersistenceError``.
        """
        try:
            documents = self.adapter.query_documents(self.collection, {})
        except Exception as e:
            logger.error(f"Error listing image records: {e}")
            raise PersistenceError() from e

        images = []
        for doc in documents:
            image = {"url": doc.get("url"), "public_id": doc.get("public_id")}
            try:
                validate_image_document(image)
            except jsonschema.ValidationError as e:
                logger.error(f"Malformed image record in {self.collection}: {e.message}")
                raise PersistenceError() from e
            images.append(image)
        return images
