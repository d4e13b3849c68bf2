# Standard library imports
import os
from pathlib import Path
from typing import Final, List, Optional


_PACKAGE_DIR = Path(__file__).resolve().parent.parent


class Settings:
    """
    Application settings loaded from environment variables.
    
    This class centralizes all configuration settings for the application.
    All settings are loaded from environment variables with sensible defaults.
    Remote storage is optional: leaving the bucket unset keeps every blob
    on local disk.
    """
    
    def __init__(self) -> None:
        # Database Configuration
        self.mongo_uri: Final[str] = os.getenv("MONGODB_URI", "mongodb://localhost:27017")
        self.mongo_database_name: Final[str] = os.getenv("MONGO_DB_NAME", "photo-description-app")
        self.mongo_collection_name: Final[str] = os.getenv("MONGO_COLLECTION", "photos")
        self.mongo_server_selection_timeout_ms: Final[int] = int(
            os.getenv("MONGO_SERVER_SELECTION_TIMEOUT_MS", "5000")
        )
        
        # Vision API Configuration (OpenAI-compatible chat completions)
        self.vision_api_key: Final[str] = os.getenv("OPENAI_API_KEY", "")
        self.vision_api_url: Final[str] = os.getenv(
            "VISION_API_URL",
            "https://api.openai.com/v1/chat/completions"
        )
        self.vision_model: Final[str] = os.getenv("VISION_MODEL", "gpt-4o-mini")
        self.vision_max_tokens: Final[int] = int(os.getenv("VISION_MAX_TOKENS", "1500"))
        self.vision_timeout_seconds: Final[float] = float(os.getenv("VISION_TIMEOUT_SECONDS", "30"))
        
        # Object Storage Configuration (S3)
        self.aws_access_key_id: Final[str] = os.getenv("AWS_ACCESS_KEY_ID", "")
        self.aws_secret_access_key: Final[str] = os.getenv("AWS_SECRET_ACCESS_KEY", "")
        self.aws_region: Final[str] = os.getenv("AWS_REGION", "us-east-1")
        self.s3_bucket_name: Final[str] = os.getenv("S3_BUCKET_NAME", "")
        self.s3_public_base_url: Final[str] = os.getenv("S3_PUBLIC_BASE_URL", "")
        
        # Local Storage / Static Files
        self.upload_dir: Final[str] = os.getenv("UPLOAD_DIR", str(Path.cwd() / "uploads"))
        self.public_dir: Final[str] = os.getenv("PUBLIC_DIR", str(_PACKAGE_DIR / "static"))
        
        # Server Configuration
        self.host: Final[str] = os.getenv("HOST", "0.0.0.0")
        self.port: Final[int] = int(os.getenv("PORT", "3000"))
        self.port_search_limit: Final[int] = int(os.getenv("PORT_SEARCH_LIMIT", "20"))
        self.cors_origins: Final[List[str]] = [
            origin.strip()
            for origin in os.getenv("CORS_ORIGINS", "*").split(",")
            if origin.strip()
        ]
        self.log_level: Final[str] = os.getenv("LOG_LEVEL", "INFO").upper()
    
    @property
    def remote_storage_configured(self) -> bool:
        """True when credentials and a bucket are all present"""
        return bool(
            self.aws_access_key_id
            and self.aws_secret_access_key
            and self.s3_bucket_name
        )


# Global settings instance (singleton pattern)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get application settings (singleton pattern)
    
    Returns:
        Settings instance with all configuration values
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next call re-reads the environment"""
    global _settings
    _settings = None
