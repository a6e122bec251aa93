"""
Gemini AI Service Implementation
"""
from typing import List, Optional, Dict, Any
from google.generativeai import GenerativeModel
from google.generativeai.types import HarmCategory, HarmBlockThreshold
import google.generativeai as genai
from loguru import logger

from study_assistant.core.interfaces.ai_service import AIService, AIResponse
from study_assistant.utils.key_rotation import KeyRotationManager


class GeminiService(AIService):
    """
    Google Gemini AI service implementation

    Features:
    - Multi-key rotation for load balancing
    - Retry with a different key, at most one attempt per key (capped at 3)
    - Fallback model for the remaining attempts once the primary is rejected
    - Safety settings configuration
    """

    def __init__(
        self,
        api_keys: List[str],
        model_name: str = "gemini-2.0-flash",
        fallback_model: str = "gemini-2.5-flash",
    ):
        """
        Initialize Gemini service

        Args:
            api_keys: List of Gemini API keys
            model_name: Primary model
            fallback_model: Model used when the primary one errors
        """
        self.api_keys = api_keys
        self.key_manager = KeyRotationManager(
            keys=self.api_keys,
            max_errors_per_key=3,
            block_duration_minutes=5
        )

        self.model_name = model_name
        self.fallback_model = fallback_model

        self.safety_settings = {
            HarmCategory.HARM_CATEGORY_HARASSMENT: HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE,
            HarmCategory.HARM_CATEGORY_HATE_SPEECH: HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE,
            HarmCategory.HARM_CATEGORY_SEXUALLY_EXPLICIT: HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE,
            HarmCategory.HARM_CATEGORY_DANGEROUS_CONTENT: HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE,
        }

        logger.info(f"Initialized GeminiService with {len(self.api_keys)} API keys")

    async def generate_text(
        self,
        prompt: str,
        system_instruction: Optional[str] = None,
        max_tokens: Optional[int] = None,
        model_name: Optional[str] = None,
        temperature: float = 0.7,
        **kwargs
    ) -> AIResponse:
        """
        Generate a completion for one user turn

        Args:
            prompt: The user turn
            system_instruction: System instruction for the model
            max_tokens: Maximum tokens to generate
            model_name: Optional model override
            temperature: Generation temperature (0.0-1.0)

        Returns:
            AIResponse with generated text or error
        """
        return await self._generate_with_retry(
            prompt=prompt,
            system_instruction=system_instruction,
            model_name=model_name or self.model_name,
            temperature=temperature,
            max_tokens=max_tokens,
            **kwargs
        )

    def get_service_name(self) -> str:
        """Return the name of the AI service"""
        return "Google Gemini"

    def is_available(self) -> bool:
        """Check if the service is available/configured"""
        return len(self.api_keys) > 0

    async def _generate_with_retry(
        self,
        prompt: str,
        system_instruction: Optional[str] = None,
        model_name: Optional[str] = None,
        max_retries: Optional[int] = None,
        **kwargs
    ) -> AIResponse:
        """
        Generate response with automatic retry using different API keys

        Args:
            prompt: The prompt to send
            system_instruction: System instruction for the model
            model_name: Model to use
            max_retries: Maximum retry attempts
            **kwargs: Additional model parameters

        Returns:
            AIResponse with result or error
        """
        max_retries = max_retries or min(len(self.api_keys), 3)
        last_error = None

        for attempt in range(max_retries):
            api_key = await self.key_manager.get_next_key()

            if not api_key:
                return AIResponse(
                    success=False,
                    error="All API keys are currently blocked. Please try again later."
                )

            try:
                genai.configure(api_key=api_key)

                model = GenerativeModel(
                    model_name=model_name,
                    safety_settings=self.safety_settings,
                    system_instruction=system_instruction or None,
                )

                response = await model.generate_content_async(
                    prompt,
                    generation_config={
                        "temperature": kwargs.get("temperature", 0.7),
                        "max_output_tokens": kwargs.get("max_tokens"),
                        "top_p": kwargs.get("top_p", 0.95),
                        "top_k": kwargs.get("top_k", 40),
                    }
                )

                result_text = self._first_candidate_text(response)

                await self.key_manager.report_success(api_key)

                logger.info(f"✅ Gemini request successful with key {api_key[:8]}...")

                return AIResponse(
                    success=True,
                    content=result_text,
                    metadata={
                        "model": model_name,
                        "api_key_prefix": api_key[:8] + "...",
                        "attempt": attempt + 1
                    }
                )

            except Exception as error:
                last_error = error
                logger.warning(f"❌ Gemini request failed with key {api_key[:8]}...: {error}")

                await self.key_manager.report_error(api_key, error)

                # The fallback model takes the next attempt, never an extra one
                if "model" in str(error).lower() and model_name != self.fallback_model:
                    logger.info(f"🔄 Switching to fallback model: {self.fallback_model}")
                    model_name = self.fallback_model

                continue

        error_msg = f"Failed after {max_retries} attempts. Last error: {last_error}"
        logger.error(f"❌ Gemini service failed: {error_msg}")

        return AIResponse(
            success=False,
            error=error_msg,
            metadata={
                "attempts": max_retries,
                "last_error": str(last_error)
            }
        )

    @staticmethod
    def _first_candidate_text(response) -> Optional[str]:
        """Text of the first candidate, or None if the model returned nothing"""
        candidates = getattr(response, "candidates", None) or []
        if not candidates:
            return None

        content = getattr(candidates[0], "content", None)
        parts = getattr(content, "parts", None) or []
        text = "".join(getattr(part, "text", "") or "" for part in parts)
        return text or None

    async def get_statistics(self) -> Dict[str, Any]:
        """
        Get service statistics

        Returns:
            Dictionary with service statistics
        """
        key_stats = await self.key_manager.get_key_statistics()

        return {
            "service_name": self.get_service_name(),
            "total_keys": len(self.api_keys),
            "available_keys": len([k for k, s in key_stats.items() if not s["is_blocked"]]),
            "key_statistics": key_stats,
            "model_name": self.model_name,
            "fallback_model": self.fallback_model
        }
