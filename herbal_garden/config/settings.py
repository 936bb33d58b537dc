"""
Centralized Configuration Settings.

All environment variables are defined here using Pydantic Settings.
Values come from the process environment first, then an optional ``.env``
file in the working directory.
"""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

DATA_DIR = Path(__file__).resolve().parent.parent / "data"


class Settings(BaseSettings):
    """Application settings with environment variable loading.

    All settings have sensible defaults for development except the two API
    keys, which must be supplied before the server will start.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # =========================================================================
    # Server Configuration
    # =========================================================================
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    STRUCTURED_LOGGING: bool = True
    LOG_LEVEL: str = "INFO"
    SERVICE_NAME: str = "herbal-garden"

    # =========================================================================
    # CORS & Origins
    # =========================================================================
    ALLOWED_ORIGINS: str = "*"

    @property
    def allowed_origins_list(self) -> list[str]:
        """Parse ALLOWED_ORIGINS into list."""
        return [o.strip() for o in self.ALLOWED_ORIGINS.split(",") if o.strip()]

    # =========================================================================
    # File Upload
    # =========================================================================
    MAX_UPLOAD_MB: int = 10

    @property
    def max_upload_bytes(self) -> int:
        return self.MAX_UPLOAD_MB * 1024 * 1024

    # =========================================================================
    # Vector Index (Pinecone)
    # =========================================================================
    PINECONE_API_KEY: str = ""
    PINECONE_INDEX_NAME: str = "ayurveda-kb-v2"
    PINECONE_INDEX_HOST: str = ""  # Resolved from the control plane when empty
    PINECONE_CONTROL_URL: str = "https://api.pinecone.io"
    PINECONE_NAMESPACE: str = "ayurveda"
    PINECONE_SIGHTINGS_NAMESPACE: str = "sightings"
    PINECONE_API_VERSION: str = "2025-04"
    RERANK_MODEL: str = "bge-reranker-v2-m3"
    SEARCH_TOP_K: int = 5

    # =========================================================================
    # Generative Models
    # =========================================================================
    GEMINI_API_KEY: str = ""
    GEMINI_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta"
    CHAT_MODEL: str = "gemini-3-flash-preview"
    FALLBACK_PROVIDER: str = "gemini"  # "gemini" or "openai"
    FALLBACK_MODEL: str = "gemini-2.5-flash"
    FALLBACK_API_KEY: str = ""
    FALLBACK_BASE_URL: str = "https://api.openai.com/v1"

    # =========================================================================
    # Outbound HTTP
    # =========================================================================
    HTTP_TIMEOUT_SECONDS: float = 60.0
    HTTP_MAX_RETRIES: int = 2

    # =========================================================================
    # Data & Ingestion
    # =========================================================================
    PDF_DIR: str = ""  # Defaults to ./pdfs
    KNOWLEDGE_BASE_PATH: str = ""  # Defaults to packaged health_issues_kb.json
    PLANT_CATALOG_PATH: str = ""  # Defaults to packaged plant_catalog.json
    CHUNK_SIZE: int = 800
    CHUNK_OVERLAP: int = 150
    UPSERT_BATCH_SIZE: int = 4
    INDEX_SETTLE_SECONDS: float = 5.0

    @property
    def pdf_dir_path(self) -> Path:
        if self.PDF_DIR:
            return Path(self.PDF_DIR)
        return Path("pdfs")

    @property
    def knowledge_base_file_path(self) -> Path:
        if self.KNOWLEDGE_BASE_PATH:
            return Path(self.KNOWLEDGE_BASE_PATH)
        return DATA_DIR / "health_issues_kb.json"

    @property
    def plant_catalog_file_path(self) -> Path:
        if self.PLANT_CATALOG_PATH:
            return Path(self.PLANT_CATALOG_PATH)
        return DATA_DIR / "plant_catalog.json"

    def missing_server_keys(self) -> list[str]:
        """Names of API keys the HTTP server cannot run without."""
        return [name for name in ("GEMINI_API_KEY", "PINECONE_API_KEY") if not getattr(self, name)]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
