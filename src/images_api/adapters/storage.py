"""
Storage adapter for the external image provider.

The provider client is configured once per process by ``init_storage``; the
returned backend is what the upload service talks to.
"""

import io
import logging
from dataclasses import dataclass
from typing import Optional, List, Dict, Any

import cloudinary
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError

from images_api.config.settings import Settings
from images_api.errors import StorageError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoredAsset:
    """Location and identifier the provider assigned to an uploaded image."""
    url: str
    public_id: str


class BaseImageStorage:
    """Base class for image storage backends"""

    def upload(self, data: bytes, public_id: str) -> StoredAsset:
        raise NotImplementedError

    def delete(self, public_id: str) -> bool:
        raise NotImplementedError


class CloudinaryImageStorage(BaseImageStorage):
    """Stores images on Cloudinary with a fixed folder, format list and transformation"""

    def __init__(self, folder: str, allowed_formats: List[str],
                 transformation: Optional[List[Dict[str, Any]]] = None):
        self.folder = folder
        self.allowed_formats = list(allowed_formats)
        self.transformation = transformation or []

    def upload(self, data: bytes, public_id: str) -> StoredAsset:
        """Upload image bytes and return the provider's URL and identifier."""
        try:
            result = cloudinary.uploader.upload(
                io.BytesIO(data),
                folder=self.folder,
                public_id=public_id,
                allowed_formats=self.allowed_formats,
                transformation=self.transformation,
                resource_type="image",
            )
        except CloudinaryError as e:
            logger.error(f"Error uploading to Cloudinary: {str(e)}")
            raise StorageError() from e

        url = result.get("secure_url") or result.get("url")
        if not url or not result.get("public_id"):
            logger.error(f"Unexpected Cloudinary upload response: {result}")
            raise StorageError()

        logger.info(f"Uploaded {result['public_id']} to Cloudinary ({result.get('bytes')} bytes)")
        return StoredAsset(url=url, public_id=result["public_id"])

    def delete(self, public_id: str) -> bool:
        """Remove an asset. Returns False when the provider did not delete anything."""
        try:
            result = cloudinary.uploader.destroy(public_id, resource_type="image")
        except CloudinaryError as e:
            logger.error(f"Error deleting {public_id} from Cloudinary: {str(e)}")
            raise StorageError() from e

        deleted = result.get("result") == "ok"
        if deleted:
            logger.info(f"Deleted {public_id} from Cloudinary")
        else:
            logger.warning(f"Cloudinary did not delete {public_id}: {result}")
        return deleted


def init_storage(settings: Settings) -> BaseImageStorage:
    """Configure the Cloudinary client for this process and return the storage backend."""
    if not settings.cloudinary_configured:
        logger.warning("Cloudinary credentials are incomplete; uploads will be rejected by the provider")

    cloudinary.config(
        cloud_name=settings.cloudinary_cloud_name,
        api_key=settings.cloudinary_api_key,
        api_secret=settings.cloudinary_api_secret,
        secure=True,
    )
    logger.info(f"Storage initialized for cloud '{settings.cloudinary_cloud_name}', folder '{settings.upload_folder}'")

    return CloudinaryImageStorage(
        folder=settings.upload_folder,
        allowed_formats=settings.allowed_formats,
        transformation=settings.transformation,
    )
