import pytest
from fastapi.testclient import TestClient

from images_api.config.settings import Settings
from images_api.main import create_app
from images_api.services.database import ImageRecordService
from tests.consts import TEST_CLOUD_NAME, TEST_UPLOAD_FOLDER
from tests.fixtures.db_client import InMemoryMongoAdapter
from tests.fixtures.storage_fixtures import InMemoryImageStorage


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        cloudinary_cloud_name=TEST_CLOUD_NAME,
        cloudinary_api_key="test-key",
        cloudinary_api_secret="test-secret",
        upload_folder=TEST_UPLOAD_FOLDER,
    )


@pytest.fixture
def storage() -> InMemoryImageStorage:
    return InMemoryImageStorage()


@pytest.fixture
def db_adapter() -> InMemoryMongoAdapter:
    return InMemoryMongoAdapter()


@pytest.fixture
def record_service(db_adapter: InMemoryMongoAdapter) -> ImageRecordService:
    return ImageRecordService(db_adapter, collection="images")


@pytest.fixture
def client(settings, storage, record_service):
    app = create_app(settings=settings, storage=storage, record_service=record_service)
    with TestClient(app) as test_client:
        yield test_client
