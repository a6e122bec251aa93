import asyncio
import os
from typing import List, Optional

import pytest

# Settings are read at import time
os.environ.setdefault("GEMINI_KEYS", "test-key-0001")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("DAILY_REQUEST_LIMIT", "5")

from study_assistant.core.interfaces.ai_service import AIService, AIResponse  # noqa: E402
from study_assistant.db.database import create_db_engine, create_session_factory, init_db  # noqa: E402
from study_assistant.services.ai.generation_service import GenerationService  # noqa: E402
from study_assistant.services.history.sqlalchemy_history import SQLAlchemyHistoryRepository  # noqa: E402
from study_assistant.services.rate_limit.rate_limiter import RateLimiter  # noqa: E402


class FakeAIService(AIService):
    """Records calls and returns a canned completion"""

    def __init__(self, content: Optional[str] = "Generated answer", success: bool = True,
                 error: Optional[Exception] = None, delay: float = 0):
        self.content = content
        self.success = success
        self.error = error
        self.delay = delay
        self.calls: List[dict] = []

    async def generate_text(self, prompt, system_instruction=None, max_tokens=None, **kwargs):
        self.calls.append({
            "prompt": prompt,
            "system_instruction": system_instruction,
            "max_tokens": max_tokens,
        })
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        if not self.success:
            return AIResponse(success=False, error="quota exhausted")
        return AIResponse(success=True, content=self.content)

    def get_service_name(self) -> str:
        return "Fake"

    def is_available(self) -> bool:
        return True


@pytest.fixture
def ai_service():
    return FakeAIService()


@pytest.fixture
def rate_limiter():
    return RateLimiter(daily_limit=5)


@pytest.fixture
def history_repository():
    engine = create_db_engine("sqlite://")
    init_db(engine)
    yield SQLAlchemyHistoryRepository(session_factory=create_session_factory(engine))
    engine.dispose()


@pytest.fixture
def generation_service(ai_service, rate_limiter, history_repository):
    return GenerationService(
        ai_service=ai_service,
        rate_limiter=rate_limiter,
        history=history_repository,
        max_tokens=1000,
        generation_timeout_seconds=5,
    )
