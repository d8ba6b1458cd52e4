from contextlib import asynccontextmanager
from textwrap import dedent
import logging
from fastapi import FastAPI
from fastapi.routing import APIRoute
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from database.client import init_db
from images_api.adapters.storage import BaseImageStorage, init_storage
from images_api.config.settings import Settings, get_settings
from images_api.errors import (
    ImagesApiError,
    handle_broad_exceptions,
    handle_images_api_errors,
    handle_http_exceptions,
)
from images_api.routers.images import router as images_router
from images_api.services.database import ImageRecordService
from images_api.services.upload_service import ImageUploadService

# Set up logging
logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    storage: BaseImageStorage | None = None,
    record_service: ImageRecordService | None = None,
) -> FastAPI:
    """
    Create a FastAPI application.

    The database connection and the storage provider client are created once
    here and live for the lifetime of the app. Pass ``storage`` or
    ``record_service`` to replace them.
    """
    settings = settings or get_settings()

    adapter = None
    if record_service is None:
        logger.info("connecting to database")
        adapter = init_db(settings.mongodb_uri, timeout_ms=settings.mongodb_timeout_ms)
        record_service = ImageRecordService(adapter, collection=settings.images_collection)

    if storage is None:
        storage = init_storage(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        if adapter is not None:
            logger.info("closing database connection")
            adapter.close()

    app = FastAPI(
        title="Images API",
        summary="Store images with Cloudinary and keep a record of them",
        version="v1",
        description=dedent(
            """\
        Upload an image with `POST /upload` (multipart field `file`) and list
        every stored image with `GET /images`.
        """
        ),
        # only the two image routes are exposed
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        generate_unique_id_function=custom_generate_unique_id,
        lifespan=lifespan,
    )

    if settings.cors_allow_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_allow_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.state.settings = settings
    app.state.image_storage = storage
    app.state.image_records = record_service
    app.state.upload_service = ImageUploadService(
        storage=storage,
        records=record_service,
        max_upload_bytes=settings.max_upload_bytes,
    )

    app.include_router(images_router, tags=["images"])

    app.add_exception_handler(
        exc_class_or_status_code=ImagesApiError,
        handler=handle_images_api_errors,
    )
    app.add_exception_handler(
        exc_class_or_status_code=StarletteHTTPException,
        handler=handle_http_exceptions,
    )
    app.middleware("http")(handle_broad_exceptions)

    return app


def custom_generate_unique_id(route: APIRoute):
    """
    Generate prettier `operationId`s in the OpenAPI schema.

    These become the function names in generated client SDKs.
    """
    return f"{route.tags[0]}-{route.name}"


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    app = create_app(settings)
    logger.info(f"Server is running on port {settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port)
