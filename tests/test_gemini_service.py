"""Tests for the Gemini client and API key rotation."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from study_assistant.services.ai.gemini_service import GeminiService
from study_assistant.utils.key_rotation import KeyRotationManager


def gemini_response(*texts):
    parts = [SimpleNamespace(text=text) for text in texts]
    candidate = SimpleNamespace(content=SimpleNamespace(parts=parts))
    return SimpleNamespace(candidates=[candidate])


async def test_keys_rotate_round_robin():
    manager = KeyRotationManager(keys=["key-aaaaaaaa", "key-bbbbbbbb"])

    picked = [await manager.get_next_key() for _ in range(4)]

    assert picked == ["key-aaaaaaaa", "key-bbbbbbbb", "key-aaaaaaaa", "key-bbbbbbbb"]


async def test_failing_key_is_blocked():
    manager = KeyRotationManager(keys=["key-aaaaaaaa", "key-bbbbbbbb"], max_errors_per_key=2)
    for _ in range(2):
        await manager.report_error("key-aaaaaaaa", RuntimeError("429"))

    picked = {await manager.get_next_key() for _ in range(3)}

    assert picked == {"key-bbbbbbbb"}
    stats = await manager.get_key_statistics()
    assert stats["key-aaaa..."]["is_blocked"] is True


async def test_all_keys_blocked_returns_none():
    manager = KeyRotationManager(keys=["key-aaaaaaaa"], max_errors_per_key=1)
    await manager.report_error("key-aaaaaaaa", RuntimeError("bad"))

    assert await manager.get_next_key() is None


def test_rotation_requires_a_key():
    with pytest.raises(ValueError):
        KeyRotationManager(keys=["", "  "])


def test_first_candidate_text():
    assert GeminiService._first_candidate_text(gemini_response("Hello ", "world")) == "Hello world"
    assert GeminiService._first_candidate_text(SimpleNamespace(candidates=[])) is None
    assert GeminiService._first_candidate_text(gemini_response("")) is None


async def test_generate_text_passes_system_instruction_and_cap():
    model = MagicMock()
    model.generate_content_async = AsyncMock(return_value=gemini_response("Step 1"))

    with patch("study_assistant.services.ai.gemini_service.genai.configure"), \
            patch("study_assistant.services.ai.gemini_service.GenerativeModel", return_value=model) as model_cls:
        service = GeminiService(api_keys=["key-aaaaaaaa"])
        response = await service.generate_text("2x = 4", system_instruction="Be a tutor", max_tokens=1000)

    assert response.success is True
    assert response.content == "Step 1"
    assert model_cls.call_args.kwargs["system_instruction"] == "Be a tutor"
    args, kwargs = model.generate_content_async.call_args
    assert args[0] == "2x = 4"
    assert kwargs["generation_config"]["max_output_tokens"] == 1000


async def test_generate_text_reports_failure():
    model = MagicMock()
    model.generate_content_async = AsyncMock(side_effect=RuntimeError("quota exceeded"))

    with patch("study_assistant.services.ai.gemini_service.genai.configure"), \
            patch("study_assistant.services.ai.gemini_service.GenerativeModel", return_value=model):
        service = GeminiService(api_keys=["key-aaaaaaaa"])
        response = await service.generate_text("2x = 4")

    assert response.success is False
    assert "quota exceeded" in response.error


async def test_model_error_with_one_key_makes_one_call():
    model = MagicMock()
    model.generate_content_async = AsyncMock(side_effect=RuntimeError("404 model not found"))

    with patch("study_assistant.services.ai.gemini_service.genai.configure"), \
            patch("study_assistant.services.ai.gemini_service.GenerativeModel", return_value=model):
        service = GeminiService(api_keys=["key-aaaaaaaa"])
        response = await service.generate_text("2x = 4")

    assert response.success is False
    assert model.generate_content_async.call_count == 1


async def test_fallback_model_uses_next_key_attempt():
    model = MagicMock()
    model.generate_content_async = AsyncMock(
        side_effect=[RuntimeError("404 model not found"), gemini_response("x = 2")]
    )

    with patch("study_assistant.services.ai.gemini_service.genai.configure"), \
            patch("study_assistant.services.ai.gemini_service.GenerativeModel", return_value=model) as model_cls:
        service = GeminiService(
            api_keys=["key-aaaaaaaa", "key-bbbbbbbb"],
            model_name="gemini-2.0-flash",
            fallback_model="gemini-2.5-flash",
        )
        response = await service.generate_text("2x = 4")

    assert response.success is True
    assert response.content == "x = 2"
    assert model.generate_content_async.call_count == 2
    used_models = [call.kwargs["model_name"] for call in model_cls.call_args_list]
    assert used_models == ["gemini-2.0-flash", "gemini-2.5-flash"]
