from fastapi import Request

from images_api.services.database import ImageRecordService
from images_api.services.upload_service import ImageUploadService


def get_record_service(request: Request) -> ImageRecordService:
    """Record store dependency."""
    return request.app.state.image_records


def get_upload_service(request: Request) -> ImageUploadService:
    """Upload workflow dependency."""
    return request.app.state.upload_service
