import pytest
from pydantic import ValidationError

from images_api.config.settings import Settings


def test_defaults(monkeypatch):
    for name in ("PORT", "MONGODB_URI", "UPLOAD_FOLDER", "MAX_UPLOAD_BYTES", "ALLOWED_FORMATS"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.port == 3000
    assert settings.mongodb_uri == "mongodb://127.0.0.1:27017/imageUpload"
    assert settings.upload_folder == "images-folder"
    assert settings.allowed_formats == ["jpeg", "png", "jpg"]
    assert settings.max_upload_bytes == 5 * 1024 * 1024
    assert settings.transformation == [{"width": 100, "height": 100, "crop": "fill"}]


def test_cloudinary_credentials_from_environment(monkeypatch):
    monkeypatch.setenv("CLOUDINARY_CLOUD_NAME", "env-cloud")
    monkeypatch.setenv("CLOUDINARY_API_KEY", "env-key")
    monkeypatch.setenv("CLOUDINARY_API_SECRET", "env-secret")

    settings = Settings(_env_file=None)

    assert settings.cloudinary_cloud_name == "env-cloud"
    assert settings.cloudinary_api_key == "env-key"
    assert settings.cloudinary_api_secret == "env-secret"
    assert settings.cloudinary_configured is True


def test_missing_credentials(monkeypatch):
    for name in ("CLOUDINARY_CLOUD_NAME", "CLOUDINARY_API_KEY", "CLOUDINARY_API_SECRET"):
        monkeypatch.delenv(name, raising=False)

    assert Settings(_env_file=None).cloudinary_configured is False


def test_log_level_is_normalized():
    assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"

    with pytest.raises(ValidationError):
        Settings(_env_file=None, log_level="chatty")


def test_environment_dict_masks_secret():
    settings = Settings(_env_file=None, cloudinary_api_secret="very-secret")

    env = settings.get_environment_dict()

    assert env["CLOUDINARY_API_SECRET"] == "********"
    assert settings.get_environment_dict(mask_secrets=False)["CLOUDINARY_API_SECRET"] == "very-secret"
