"""
Error taxonomy for the generation pipeline

Every failure raised inside a request is one of these; the API layer turns
them into a single ``{"message": ...}`` JSON response with the matching status.
"""
from typing import Optional
from fastapi import status


class StudyAssistantError(Exception):
    """Base error carrying an HTTP status and a user-facing message"""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None, field: Optional[str] = None):
        self.message = message or self.default_message
        self.field = field
        super().__init__(self.message)

    def to_dict(self) -> dict:
        body = {"message": self.message}
        if self.field:
            body["field"] = self.field
        return body


class ValidationError(StudyAssistantError):
    """Malformed request shape"""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class EmptyContentError(StudyAssistantError):
    """Extraction produced no usable text"""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "No text content found to process."


class LimitExceededError(StudyAssistantError):
    """Identity has used up its daily quota"""
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    default_message = "Daily limit exceeded. Please try again tomorrow."


class InternalError(StudyAssistantError):
    """Extraction, model or persistence failure after validation passed"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"
