from fastapi import (
    APIRouter,
    Depends,
    Request,
    status
)
from fastapi.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile as StarletteUploadFile

from images_api.dependencies import get_record_service, get_upload_service
from images_api.errors import FileMissingError
from images_api.schemas import (
    GetImagesResponse,
    ImageRecord,
    MessageResponse,
    UploadImageResponse,
)
from images_api.services.database import ImageRecordService
from images_api.services.upload_service import ImageUploadService

UPLOAD_FIELD_NAME = "file"

router = APIRouter()


@router.post(
    "/upload",
    response_model=UploadImageResponse,
    responses={
        status.HTTP_400_BAD_REQUEST: {
            "model": MessageResponse,
            "description": "No file was sent, or the file is not an image.",
        },
        status.HTTP_413_REQUEST_ENTITY_TOO_LARGE: {"model": MessageResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": MessageResponse},
    },
)
async def upload_image(
    request: Request,
    upload_service: ImageUploadService = Depends(get_upload_service),
) -> UploadImageResponse:
    """
    Upload an image to the storage provider and record its reference.

    The ``file`` form field must hold a file part. A plain text value, or no
    field at all, is a missing file. The content type is checked before the
    body is read, and the body is read at most one byte past the size limit.
    """
    form = await request.form()
    try:
        file = form.get(UPLOAD_FIELD_NAME)
        if not isinstance(file, StarletteUploadFile):
            raise FileMissingError()

        upload_service.check_content_type(file.content_type)
        data = await file.read(upload_service.max_upload_bytes + 1)
    finally:
        await form.close()

    record = await run_in_threadpool(
        upload_service.upload,
        UPLOAD_FIELD_NAME,
        file.content_type,
        data,
    )
    return UploadImageResponse(
        message="File uploaded successfully",
        uploaded=ImageRecord(**record),
    )


@router.get(
    "/images",
    response_model=GetImagesResponse,
    responses={
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": MessageResponse},
    },
)
async def list_images(
    records: ImageRecordService = Depends(get_record_service),
) -> GetImagesResponse:
    """List every stored image record."""
    images = await run_in_threadpool(records.list_images)
    return GetImagesResponse(
        message="Images fetched successfully",
        data=[ImageRecord(**image) for image in images],
    )
