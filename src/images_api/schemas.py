####################################
# --- Request/response schemas --- #
####################################

from typing import List

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
)

EXAMPLE_IMAGE = {
    "url": "https://res.cloudinary.com/demo/image/upload/v1718000000/images-folder/file_1718000000000.png",
    "public_id": "file_1718000000000",
}


class ImageRecord(BaseModel):
    """Reference to an image stored with the provider."""
    url: str = Field(
        description="Public URL of the stored image.",
        json_schema_extra={"example": EXAMPLE_IMAGE["url"]},
    )
    public_id: str = Field(
        description="Provider identifier of the stored image.",
        json_schema_extra={"example": EXAMPLE_IMAGE["public_id"]},
    )


class UploadImageResponse(BaseModel):
    """Response model for `POST /upload`."""
    message: str
    uploaded: ImageRecord

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "message": "File uploaded successfully",
                "uploaded": EXAMPLE_IMAGE,
            }
        }
    )


class GetImagesResponse(BaseModel):
    """Response model for `GET /images`."""
    message: str
    data: List[ImageRecord]

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "message": "Images fetched successfully",
                "data": [EXAMPLE_IMAGE],
            }
        }
    )


class MessageResponse(BaseModel):
    """Body of every error response."""
    message: str
