"""
Generation pipeline: quota, extraction, prompt, model call, history
"""
import asyncio
from typing import Any, Dict, Optional, Union
import pydantic
from pydantic import BaseModel
from loguru import logger

from study_assistant.core.exceptions import (
    EmptyContentError,
    InternalError,
    LimitExceededError,
    StudyAssistantError,
    ValidationError,
)
from study_assistant.core.interfaces.ai_service import AIService
from study_assistant.core.interfaces.history_repository import HistoryRepository, NewHistoryRecord
from study_assistant.models.requests import GenerateRequest
from study_assistant.services.extraction.registry import TextExtractionService
from study_assistant.services.prompts.builder import build_system_prompt
from study_assistant.services.rate_limit.rate_limiter import RateLimiter


NO_RESPONSE_TEXT = "No response generated."


class GenerationResult(BaseModel):
    result: str
    remaining: int


class GenerationService:
    """
    Runs one generation request end to end

    Steps run strictly in order: validate, rate-limit check, extract, build
    prompt, call the model, persist history, report remaining quota. Quota is
    consumed at the rate-limit check whatever happens afterwards. A history
    row is only written after the model call succeeds.
    """

    def __init__(
        self,
        ai_service: AIService,
        rate_limiter: RateLimiter,
        history: HistoryRepository,
        extraction: Optional[TextExtractionService] = None,
        max_tokens: int = 1000,
        generation_timeout_seconds: Optional[float] = None,
        content_preview_length: int = 500,
    ):
        """
        Initialize generation service

        Args:
            ai_service: Language model client
            rate_limiter: Daily quota tracker
            history: History store
            extraction: Request-to-text extraction
            max_tokens: Output cap passed to the model
            generation_timeout_seconds: Bound on the model call, None for no bound
            content_preview_length: Characters of extracted text kept in history
        """
        self.ai_service = ai_service
        self.rate_limiter = rate_limiter
        self.history = history
        self.extraction = extraction or TextExtractionService()
        self.max_tokens = max_tokens
        self.generation_timeout_seconds = generation_timeout_seconds
        self.content_preview_length = content_preview_length

    async def generate(
        self,
        request: Union[GenerateRequest, Dict[str, Any]],
        identity: str,
    ) -> GenerationResult:
        """
        Generate a solution, summary or MCQ set

        Args:
            request: Validated request, or a raw JSON-like dict
            identity: Rate-limit key for the caller

        Returns:
            GenerationResult with the model output and remaining quota

        Raises:
            ValidationError: Malformed request
            LimitExceededError: Daily quota used up
            EmptyContentError: Nothing to process after extraction
            InternalError: Extraction, model or persistence failure
        """
        request = self._validate(request)

        if not self.rate_limiter.check_rate_limit(identity):
            raise LimitExceededError()

        try:
            return await self._run(request, identity)
        except StudyAssistantError:
            raise
        except Exception as e:
            logger.exception(f"Generation error for {identity} ({request.type.value}): {e}")
            raise InternalError() from e

    async def _run(self, request: GenerateRequest, identity: str) -> GenerationResult:
        extracted_text = await self.extraction.extract_text(request)
        if not extracted_text.strip():
            raise EmptyContentError()

        system_prompt = build_system_prompt(request)

        logger.info(f"🤖 {request.type.value} request from {identity}: {len(extracted_text)} chars")
        response = await asyncio.wait_for(
            self.ai_service.generate_text(
                prompt=extracted_text,
                system_instruction=system_prompt,
                max_tokens=self.max_tokens,
            ),
            timeout=self.generation_timeout_seconds,
        )
        if not response.success:
            raise RuntimeError(f"Model call failed: {response.error}")

        result = response.content or NO_RESPONSE_TEXT

        await self.history.create(NewHistoryRecord(
            type=request.type.value,
            subject=request.subject or None,
            content=extracted_text[:self.content_preview_length],
            result=result,
            file_name=request.file_name or None,
        ))

        remaining = self.rate_limiter.get_remaining_requests(identity)
        return GenerationResult(result=result, remaining=remaining)

    @staticmethod
    def _validate(request: Union[GenerateRequest, Dict[str, Any]]) -> GenerateRequest:
        if isinstance(request, GenerateRequest):
            return request
        try:
            return GenerateRequest.model_validate(request)
        except pydantic.ValidationError as e:
            first = e.errors()[0]
            field = ".".join(str(part) for part in first.get("loc", ()))
            raise ValidationError(first.get("msg", "Invalid request"), field=field or None) from e
