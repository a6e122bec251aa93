"""
Abstract base interface for AI services
"""
from abc import ABC, abstractmethod
from typing import Dict, Any, Optional
from pydantic import BaseModel


class AIResponse(BaseModel):
    """Standard AI response format"""
    success: bool
    content: Optional[str] = None
    error: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None


class AIService(ABC):
    """
    Abstract base class for all AI services

    This interface ensures all AI services (Gemini, OpenAI, etc.)
    have consistent methods and can be easily swapped
    """

    @abstractmethod
    async def generate_text(
        self,
        prompt: str,
        system_instruction: Optional[str] = None,
        max_tokens: Optional[int] = None,
        **kwargs
    ) -> AIResponse:
        """
        Generate text response from prompt

        Args:
            prompt: The user turn
            system_instruction: Optional system instruction for the model
            max_tokens: Hard cap on generated tokens
            **kwargs: Additional parameters specific to the service

        Returns:
            AIResponse with generated text or error. ``content`` is None when
            the model returned no candidate text.
        """
        pass

    @abstractmethod
    def get_service_name(self) -> str:
        """Return the name of the AI service"""
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the service is available/configured"""
        pass
