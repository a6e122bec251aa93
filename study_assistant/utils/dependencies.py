"""
FastAPI dependency injection utilities

This module provides dependency injection for all services,
ensuring singleton instances and proper initialization.
"""
import asyncio
from functools import lru_cache
from typing import Dict, Any, Optional
from fastapi import Header, HTTPException, Request, status
from loguru import logger
from sqlalchemy import text

from study_assistant.core.config import settings
from study_assistant.core.exceptions import InternalError
from study_assistant.core.interfaces.history_repository import HistoryRepository
from study_assistant.db.database import SessionLocal
from study_assistant.services.ai.gemini_service import GeminiService
from study_assistant.services.ai.generation_service import GenerationService
from study_assistant.services.extraction.registry import TextExtractionService
from study_assistant.services.history.sqlalchemy_history import SQLAlchemyHistoryRepository
from study_assistant.services.rate_limit.rate_limiter import RateLimiter


UNKNOWN_IDENTITY = "unknown"


@lru_cache()
def get_gemini_service() -> GeminiService:
    """Get singleton Gemini AI service"""
    api_keys = settings.gemini_key_list
    if not api_keys:
        logger.error("AI service unavailable: No API keys configured")
        raise InternalError()

    return GeminiService(
        api_keys=api_keys,
        model_name=settings.gemini_model,
        fallback_model=settings.gemini_fallback_model,
    )


@lru_cache()
def get_rate_limiter() -> RateLimiter:
    """Get singleton in-memory rate limiter"""
    return RateLimiter(daily_limit=settings.daily_request_limit)


@lru_cache()
def get_history_repository() -> HistoryRepository:
    """Get singleton history store"""
    return SQLAlchemyHistoryRepository(session_factory=SessionLocal)


@lru_cache()
def get_extraction_service() -> TextExtractionService:
    return TextExtractionService(timeout_seconds=settings.extraction_timeout_seconds)


@lru_cache()
def get_generation_service() -> GenerationService:
    """Get singleton generation pipeline"""
    return GenerationService(
        ai_service=get_gemini_service(),
        rate_limiter=get_rate_limiter(),
        history=get_history_repository(),
        extraction=get_extraction_service(),
        max_tokens=settings.generation_max_tokens,
        generation_timeout_seconds=settings.generation_timeout_seconds,
        content_preview_length=settings.content_preview_length,
    )


# ============================================================================
# REQUEST DEPENDENCIES
# ============================================================================

def get_client_identity(request: Request) -> str:
    """
    Rate-limit key for the caller

    The peer address as seen by the server; every caller without one shares
    the ``"unknown"`` bucket.
    """
    if request.client and request.client.host:
        return request.client.host
    return UNKNOWN_IDENTITY


async def require_authenticated(x_api_key: Optional[str] = Header(None)) -> str:
    """
    Require a caller authenticated with the configured API key

    With no ``API_KEY`` configured nobody is authenticated.

    Raises:
        HTTPException: 401 if authentication fails
    """
    if not settings.api_key or not x_api_key or x_api_key != settings.api_key:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized"
        )
    return x_api_key


# ============================================================================
# SERVICE HEALTH CHECKS
# ============================================================================

def _ping_database() -> None:
    session = SessionLocal()
    try:
        session.execute(text("SELECT 1"))
    finally:
        session.close()


async def check_services_health() -> Dict[str, Dict[str, Any]]:
    """
    Check health of all services

    Returns:
        Dictionary with health status of all services
    """
    health_status = {}

    try:
        ai_service = get_gemini_service()
        stats = await ai_service.get_statistics()
        health_status["ai_service"] = {
            "status": "healthy",
            "name": stats.get("service_name"),
            "model": stats.get("model_name"),
            "available_keys": stats.get("available_keys"),
            "total_keys": stats.get("total_keys")
        }
    except Exception as e:
        health_status["ai_service"] = {
            "status": "unhealthy",
            "error": "No API keys configured" if not settings.gemini_key_list else str(e)
        }

    try:
        await asyncio.to_thread(_ping_database)
        health_status["database"] = {"status": "healthy"}
    except Exception as e:
        health_status["database"] = {
            "status": "unhealthy",
            "error": str(e)
        }

    health_status["rate_limiter"] = {
        "status": "healthy",
        "daily_limit": get_rate_limiter().daily_limit
    }

    return health_status


def clear_service_cache():
    """
    Clear all cached service instances

    Useful for testing or configuration reloading
    """
    get_gemini_service.cache_clear()
    get_rate_limiter.cache_clear()
    get_history_repository.cache_clear()
    get_extraction_service.cache_clear()
    get_generation_service.cache_clear()
