# src/images_api/config/settings.py
from typing import Optional, List, Dict, Any
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

MEGABYTE = 1024 * 1024


class Settings(BaseSettings):
    """
    Single source of truth for all application settings.

    Configuration precedence:
    1. Values passed to the constructor
    2. Environment variables
    3. .env file (if exists)
    4. Default values in this class (lowest priority)

    Usage:
        from images_api.config.settings import get_settings
        settings = get_settings()
        folder = settings.upload_folder
    """

    # Application Settings
    app_name: str = Field(
        default="image-upload-api",
        description="Application name"
    )

    host: str = Field(
        default="0.0.0.0",
        description="Interface the HTTP server binds to"
    )

    port: int = Field(
        default=3000,
        description="TCP port the HTTP server listens on"
    )

    cors_allow_origins: List[str] = Field(
        default_factory=list,
        description="Origins allowed by CORS; empty disables the middleware"
    )

    # MongoDB Configuration
    mongodb_uri: str = Field(
        default="mongodb://127.0.0.1:27017/imageUpload",
        alias="MONGODB_URI",
        description="MongoDB connection string, database name taken from the path"
    )

    mongodb_timeout_ms: int = Field(
        default=5000,
        description="Server selection timeout for MongoDB operations"
    )

    images_collection: str = Field(
        default="images",
        description="Collection holding image records"
    )

    # Cloudinary Configuration
    cloudinary_cloud_name: Optional[str] = Field(
        default=None,
        alias="CLOUDINARY_CLOUD_NAME"
    )

    cloudinary_api_key: Optional[str] = Field(
        default=None,
        alias="CLOUDINARY_API_KEY"
    )

    cloudinary_api_secret: Optional[str] = Field(
        default=None,
        alias="CLOUDINARY_API_SECRET"
    )

    # Upload Configuration
    upload_folder: str = Field(
        default="images-folder",
        description="Provider folder every upload is stored under"
    )

    allowed_formats: List[str] = Field(
        default_factory=lambda: ["jpeg", "png", "jpg"],
        description="Formats the provider accepts"
    )

    transformation_width: int = Field(default=100, gt=0)
    transformation_height: int = Field(default=100, gt=0)
    transformation_crop: str = Field(default="fill")

    max_upload_bytes: int = Field(
        default=5 * MEGABYTE,
        gt=0,
        description="Largest accepted upload in bytes"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )

    @field_validator('log_level')
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept log levels in any case."""
        level = v.upper()
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if level not in valid_levels:
            raise ValueError(f"Invalid log_level: {v}. Must be one of {valid_levels}")
        return level

    @field_validator('allowed_formats')
    @classmethod
    def normalize_formats(cls, v: List[str]) -> List[str]:
        return [fmt.lower().lstrip('.') for fmt in v]

    @property
    def transformation(self) -> List[Dict[str, Any]]:
        """Incoming transformation applied by the provider on upload."""
        return [{
            "width": self.transformation_width,
            "height": self.transformation_height,
            "crop": self.transformation_crop,
        }]

    @property
    def cloudinary_configured(self) -> bool:
        return all([self.cloudinary_cloud_name, self.cloudinary_api_key, self.cloudinary_api_secret])

    def get_environment_dict(self, mask_secrets: bool = True) -> dict:
        """Get configuration as a dictionary for display.

        Returns:
            Dictionary of environment variables
        """
        secret = self.cloudinary_api_secret
        if mask_secrets and secret:
            secret = "*" * 8

        return {
            'APP_NAME': self.app_name,
            'HOST': self.host,
            'PORT': str(self.port),
            'MONGODB_URI': self.mongodb_uri,
            'IMAGES_COLLECTION': self.images_collection,
            'CLOUDINARY_CLOUD_NAME': self.cloudinary_cloud_name or '',
            'CLOUDINARY_API_KEY': self.cloudinary_api_key or '',
            'CLOUDINARY_API_SECRET': secret or '',
            'UPLOAD_FOLDER': self.upload_folder,
            'ALLOWED_FORMATS': ",".join(self.allowed_formats),
            'MAX_UPLOAD_BYTES': str(self.max_upload_bytes),
            'LOG_LEVEL': self.log_level,
        }

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    This ensures we only create one Settings instance per process.
    """
    return Settings()
