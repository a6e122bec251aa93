"""
Pydantic models for API responses
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from study_assistant.core.interfaces.history_repository import HistoryRecord


class GenerateResponse(BaseModel):
    """Response model for a successful generation"""
    result: str = Field(..., description="Generated text")
    remaining: int = Field(..., ge=0, description="Requests left today for this caller")

    model_config = {
        "json_schema_extra": {
            "example": {
                "result": "**Topic Overview**: Photosynthesis is ...",
                "remaining": 4
            }
        }
    }


class ErrorResponse(BaseModel):
    """Error body shared by every failing endpoint"""
    message: str = Field(..., description="Human-readable message")
    field: Optional[str] = Field(None, description="Offending field for validation errors")


class MessageResponse(BaseModel):
    message: str


class HistoryItem(BaseModel):
    """One history record as exposed over HTTP"""
    id: int
    type: str
    subject: Optional[str] = None
    content: str
    result: str
    file_name: Optional[str] = Field(None, serialization_alias="fileName")
    created_at: datetime = Field(..., serialization_alias="createdAt")

    @classmethod
    def from_record(cls, record: HistoryRecord) -> "HistoryItem":
        return cls(
            id=record.id,
            type=record.type,
            subject=record.subject,
            content=record.content,
            result=record.result,
            file_name=record.file_name,
            created_at=record.created_at,
        )
