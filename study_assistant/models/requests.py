"""
Pydantic models for API requests
"""
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from study_assistant.core.config import settings


class GenerationMode(str, Enum):
    """Kind of generation requested"""
    SOLVE = "solve"
    SUMMARIZE = "summarize"
    MCQ = "mcq"


class Complexity(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    DIFFICULT = "difficult"


class Language(str, Enum):
    ENGLISH = "english"
    URDU = "urdu"
    BOTH = "both"


DEFAULT_MCQ_COUNT = 5


class GenerateRequest(BaseModel):
    """Request model for solve / summarize / mcq generation"""
    type: GenerationMode = Field(..., description="Generation mode")
    subject: Optional[str] = Field(None, description="Optional subject name")
    content: Optional[str] = Field(None, description="Raw text to process")
    file_data: Optional[str] = Field(
        None, alias="fileData",
        description="Base64 file payload, optionally data-URL prefixed"
    )
    file_name: Optional[str] = Field(None, alias="fileName", description="Original filename")
    file_type: Optional[str] = Field(None, alias="fileType", description="Declared media type")
    count: int = Field(DEFAULT_MCQ_COUNT, ge=1, description="Number of MCQs to generate")
    complexity: Complexity = Field(Complexity.MEDIUM, description="Summary complexity level")
    language: Language = Field(Language.ENGLISH, description="Response language")

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "example": {
                "type": "summarize",
                "content": "Photosynthesis converts light to energy.",
                "complexity": "easy",
                "language": "english"
            }
        }
    }

    @field_validator("count", mode="before")
    @classmethod
    def default_count(cls, value):
        return DEFAULT_MCQ_COUNT if value is None else value

    @field_validator("complexity", mode="before")
    @classmethod
    def default_complexity(cls, value):
        return Complexity.MEDIUM if value is None else value

    @field_validator("language", mode="before")
    @classmethod
    def default_language(cls, value):
        return Language.ENGLISH if value is None else value

    @field_validator("file_data")
    @classmethod
    def check_file_size(cls, value: Optional[str]) -> Optional[str]:
        if not value:
            return value
        payload = value.split(",", 1)[1] if "," in value else value
        # base64 expands by 4/3
        if len(payload) * 3 // 4 > settings.max_file_size:
            raise ValueError(
                f"File too large. Maximum size: {settings.max_file_size / 1024 / 1024:.1f}MB"
            )
        return value

    @property
    def has_file(self) -> bool:
        return bool(self.file_data)

    @property
    def has_content(self) -> bool:
        return bool(self.content)


class SubscribeRequest(BaseModel):
    """Payment verification request (stub)"""
    transaction_id: Optional[str] = Field(None, alias="transactionId")

    model_config = {"populate_by_name": True}