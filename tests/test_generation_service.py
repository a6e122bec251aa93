"""Tests for the generation pipeline."""

import base64
import time
from typing import List, Optional

import fitz
import pytest

from study_assistant.core.exceptions import (
    EmptyContentError,
    InternalError,
    LimitExceededError,
    ValidationError,
)
from study_assistant.core.interfaces.text_extractor import TextExtractor
from study_assistant.models.requests import GenerateRequest
from study_assistant.services.ai.generation_service import NO_RESPONSE_TEXT, GenerationService
from study_assistant.services.extraction.registry import ExtractorRegistry, TextExtractionService

from conftest import FakeAIService


IDENTITY = "203.0.113.7"
PHOTOSYNTHESIS = "Photosynthesis converts light to energy."


def summarize_request() -> GenerateRequest:
    return GenerateRequest(type="summarize", content=PHOTOSYNTHESIS, complexity="easy")


def blank_pdf_base64() -> str:
    doc = fitz.open()
    doc.new_page()
    data = doc.tobytes()
    doc.close()
    return base64.b64encode(data).decode()


def service_with(ai_service, rate_limiter, history_repository, **kwargs) -> GenerationService:
    return GenerationService(
        ai_service=ai_service,
        rate_limiter=rate_limiter,
        history=history_repository,
        **kwargs,
    )


async def test_summarize_scenario(generation_service, ai_service, history_repository):
    outcome = await generation_service.generate(summarize_request(), IDENTITY)

    assert outcome.result == "Generated answer"
    assert outcome.remaining == 4

    [call] = ai_service.calls
    assert call["prompt"] == PHOTOSYNTHESIS
    assert "Complexity level: easy." in call["system_instruction"]
    assert "**Topic Overview**" in call["system_instruction"]
    assert call["max_tokens"] == 1000

    [record] = await history_repository.list()
    assert record.type == "summarize"
    assert record.content == PHOTOSYNTHESIS
    assert record.result == "Generated answer"
    assert record.subject is None
    assert record.file_name is None


async def test_content_preview_is_truncated(generation_service, history_repository):
    long_text = "a" * 750
    await generation_service.generate(GenerateRequest(type="solve", content=long_text), IDENTITY)

    [record] = await history_repository.list()
    assert record.content == "a" * 500


async def test_sixth_request_is_rejected(generation_service, ai_service, history_repository):
    for _ in range(5):
        await generation_service.generate(summarize_request(), IDENTITY)

    with pytest.raises(LimitExceededError) as exc_info:
        await generation_service.generate(summarize_request(), IDENTITY)

    assert exc_info.value.status_code == 429
    assert len(ai_service.calls) == 5
    assert len(await history_repository.list()) == 5


async def test_blank_pdf_is_empty_content(generation_service, ai_service, rate_limiter, history_repository):
    request = GenerateRequest(type="solve", fileData=blank_pdf_base64(), fileType="application/pdf")

    with pytest.raises(EmptyContentError) as exc_info:
        await generation_service.generate(request, IDENTITY)

    assert exc_info.value.status_code == 400
    assert exc_info.value.message == "No text content found to process."
    assert ai_service.calls == []
    assert await history_repository.list() == []
    # quota is consumed at check time
    assert rate_limiter.get_remaining_requests(IDENTITY) == 4


async def test_whitespace_content_is_empty(generation_service, ai_service):
    with pytest.raises(EmptyContentError):
        await generation_service.generate(GenerateRequest(type="mcq", content="   \n"), IDENTITY)
    assert ai_service.calls == []


async def test_invalid_dict_request_consumes_no_quota(generation_service, rate_limiter):
    with pytest.raises(ValidationError) as exc_info:
        await generation_service.generate({"type": "translate", "content": "hola"}, IDENTITY)

    assert exc_info.value.field == "type"
    assert rate_limiter.get_remaining_requests(IDENTITY) == 5


async def test_dict_request_is_validated(generation_service, ai_service):
    outcome = await generation_service.generate({"type": "mcq", "content": "Cells", "count": 10}, IDENTITY)

    assert outcome.remaining == 4
    assert "exactly 10 " in ai_service.calls[0]["system_instruction"]


async def test_model_exception_is_internal_error(rate_limiter, history_repository):
    service = service_with(FakeAIService(error=ConnectionError("boom")), rate_limiter, history_repository)

    with pytest.raises(InternalError) as exc_info:
        await service.generate(summarize_request(), IDENTITY)

    assert exc_info.value.status_code == 500
    assert exc_info.value.message == "Internal server error"
    assert await history_repository.list() == []
    assert rate_limiter.get_remaining_requests(IDENTITY) == 4


async def test_unsuccessful_model_response_is_internal_error(rate_limiter, history_repository):
    service = service_with(FakeAIService(success=False), rate_limiter, history_repository)

    with pytest.raises(InternalError):
        await service.generate(summarize_request(), IDENTITY)

    assert await history_repository.list() == []


async def test_model_timeout_is_internal_error(rate_limiter, history_repository):
    service = service_with(
        FakeAIService(delay=1), rate_limiter, history_repository, generation_timeout_seconds=0.01
    )

    with pytest.raises(InternalError):
        await service.generate(summarize_request(), IDENTITY)

    assert await history_repository.list() == []


class SlowExtractor(TextExtractor):
    def extract(self, data: bytes, filename: Optional[str] = None) -> str:
        time.sleep(0.5)
        return data.decode()

    def supports(self, file_type, filename) -> bool:
        return bool(filename) and filename.endswith(".md")

    def get_supported_extensions(self) -> List[str]:
        return ["md"]


async def test_extraction_timeout_is_internal_error(ai_service, rate_limiter, history_repository):
    registry = ExtractorRegistry()
    registry.register_extractor(SlowExtractor(), index=0)
    service = service_with(
        ai_service, rate_limiter, history_repository,
        extraction=TextExtractionService(registry=registry, timeout_seconds=0.01),
    )
    request = GenerateRequest(type="summarize", fileData=base64.b64encode(b"# notes").decode(), fileName="notes.md")

    with pytest.raises(InternalError):
        await service.generate(request, IDENTITY)

    assert ai_service.calls == []
    assert await history_repository.list() == []


async def test_empty_model_output_uses_placeholder(rate_limiter, history_repository):
    service = service_with(FakeAIService(content=None), rate_limiter, history_repository)

    outcome = await service.generate(summarize_request(), IDENTITY)

    assert outcome.result == NO_RESPONSE_TEXT
    [record] = await history_repository.list()
    assert record.result == NO_RESPONSE_TEXT


async def test_persistence_failure_is_internal_error(ai_service, rate_limiter):
    class BrokenHistory:
        async def create(self, record):
            raise RuntimeError("disk full")

    service = service_with(ai_service, rate_limiter, BrokenHistory())

    with pytest.raises(InternalError):
        await service.generate(summarize_request(), IDENTITY)


async def test_file_name_and_subject_are_recorded(generation_service, history_repository):
    request = GenerateRequest(
        type="solve",
        subject="Math",
        fileData=base64.b64encode(b"Solve x + 1 = 2").decode(),
        fileName="homework.txt",
    )

    await generation_service.generate(request, IDENTITY)

    [record] = await history_repository.list()
    assert record.subject == "Math"
    assert record.file_name == "homework.txt"
    assert record.content == "Solve x + 1 = 2"
