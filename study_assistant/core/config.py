"""
Application configuration management
"""
import re
from typing import List, Optional, Annotated
from pydantic import Field, BeforeValidator
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

load_dotenv()


def parse_comma_separated_str(value: any) -> List[str]:
    if isinstance(value, str):
        if not value:
            return []
        return [item.strip() for item in value.split(',') if item.strip()]
    if isinstance(value, list):
        return value
    return []


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # App settings
    app_name: str = "Study Assistant"
    app_version: str = "1.0.0"
    debug: bool = Field(False, env="DEBUG")

    # Server settings
    host: str = Field("0.0.0.0", env="HOST")
    port: int = Field(8000, env="PORT")

    # Gemini - multiple keys are rotated
    gemini_keys: str = Field("", env="GEMINI_KEYS")
    gemini_model: str = Field("gemini-2.0-flash", env="GEMINI_MODEL")
    gemini_fallback_model: str = Field("gemini-2.5-flash", env="GEMINI_FALLBACK_MODEL")

    # Persistence
    database_url: str = Field("sqlite:///./study_assistant.db", env="DATABASE_URL")

    # Generation pipeline
    daily_request_limit: int = Field(5, env="DAILY_REQUEST_LIMIT")
    content_preview_length: int = Field(500, env="CONTENT_PREVIEW_LENGTH")
    generation_max_tokens: int = Field(1000, env="GENERATION_MAX_TOKENS")
    generation_timeout_seconds: float = Field(60.0, env="GENERATION_TIMEOUT_SECONDS")
    extraction_timeout_seconds: float = Field(60.0, env="EXTRACTION_TIMEOUT_SECONDS")

    # Upload limits (decoded payload size)
    max_file_size: int = Field(20 * 1024 * 1024, env="MAX_FILE_SIZE")  # 20MB

    # Security
    api_key: Optional[str] = Field(None, env="API_KEY")
    cors_origins: Annotated[List[str], BeforeValidator(parse_comma_separated_str)] = Field(
        default=["*"],
        env="CORS_ORIGINS"
    )

    # Logging
    log_level: str = Field("INFO", env="LOG_LEVEL")

    @property
    def gemini_key_list(self) -> List[str]:
        """Parse Gemini keys separated by comma, semicolon, or whitespace/newline"""
        return [k for k in re.split(r"[,;\s]+", self.gemini_keys.strip()) if k]

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore"
    }


# Global settings instance
settings = Settings()
