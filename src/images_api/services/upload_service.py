"""
Upload workflow: validate the incoming image, store it with the provider,
then persist its reference.

The two network steps are not atomic. When the record cannot be written the
service deletes the freshly uploaded asset once; if that delete also fails the
asset is left orphaned on the provider and only the log records it.
"""

import logging
import time
from typing import Dict, Any, Optional

from images_api.adapters.storage import BaseImageStorage, StoredAsset
from images_api.errors import (
    FileTooLargeError,
    NotAnImageError,
    PersistenceError,
    StorageError,
)
from images_api.services.database import ImageRecordService
from images_api.utils.decorators import log_execution_time

logger = logging.getLogger(__name__)


def is_image(content_type: Optional[str]) -> bool:
    """True when the declared MIME type is an image type."""
    return bool(content_type) and content_type.startswith("image/")


def build_public_id(field_name: str) -> str:
    """Storage key: the form field name plus the current epoch milliseconds."""
    return f"{field_name}_{int(time.time() * 1000)}"


class ImageUploadService:
    """Stores uploaded images with the provider and records their references"""

    def __init__(self, storage: BaseImageStorage, records: ImageRecordService, max_upload_bytes: int):
        self.storage = storage
        self.records = records
        self.max_upload_bytes = max_upload_bytes

    def check_content_type(self, content_type: Optional[str]) -> None:
        if not is_image(content_type):
            logger.info(f"Rejected upload with content type {content_type!r}")
            raise NotAnImageError()

    def check_size(self, size: int) -> None:
        if size > self.max_upload_bytes:
            logger.info(f"Rejected upload of {size} bytes (limit {self.max_upload_bytes})")
            raise FileTooLargeError()

    @log_execution_time
    def upload(self, field_name: str, content_type: Optional[str], data: bytes) -> Dict[str, Any]:
        """Validate, upload and persist one image, returning the created record."""
        self.check_content_type(content_type)
        self.check_size(len(data))

        asset = self.storage.upload(data, public_id=build_public_id(field_name))
        logger.info(f"Stored asset: {asset}")

        try:
            return self.records.create_image(url=asset.url, public_id=asset.public_id)
        except PersistenceError:
            self._discard(asset)
            raise

    def _discard(self, asset: StoredAsset) -> None:
        """Compensating delete for an asset whose record could not be written."""
        try:
            deleted = self.storage.delete(asset.public_id)
        except StorageError as e:
            logger.error(f"Orphaned asset left in storage: {asset.public_id} ({asset.url}): {e.__cause__}")
            return

        if deleted:
            logger.warning(f"Removed {asset.public_id} from storage after failed record write")
        else:
            logger.error(f"Orphaned asset left in storage: {asset.public_id} ({asset.url})")
