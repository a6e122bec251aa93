"""
Study Assistant - Main FastAPI Application

An AI study helper for students featuring:
- Step-by-step solutions to questions
- Structured study summaries
- Multiple choice question generation
- Text extraction from images (OCR), PDF, DOCX and plain text
"""
import sys
import time
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from loguru import logger
import uvicorn

from study_assistant.core.config import settings
from study_assistant.core.exceptions import StudyAssistantError
from study_assistant.db.database import engine, init_db
from study_assistant.api import router as api_router


# Configure logging
logger.remove()  # Remove default handler
logger.add(
    sys.stdout,
    format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
    level=settings.log_level
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager

    Creates database tables on startup.
    """
    logger.info("🚀 Starting Study Assistant...")
    logger.info(f"🔧 Configuration: {settings.app_name} v{settings.app_version}")
    logger.info(f"🔧 Environment: Debug={settings.debug}")
    logger.info(f"🔧 Daily request limit: {settings.daily_request_limit}")

    init_db(engine)
    logger.info("✅ Database tables ready")

    if not settings.gemini_key_list:
        logger.warning("⚠️ GEMINI_KEYS not configured, generation requests will fail with 500")

    yield

    logger.info("🛑 Shutting down Study Assistant...")


app = FastAPI(
    title="Study Assistant",
    description="""
## 📚 Study Assistant

Submit text, a photo of a page, a PDF or a Word document and receive:

- **Solve**: step-by-step explanations with LaTeX math
- **Summarize**: structured study notes at easy, medium or difficult level
- **MCQ**: multiple choice questions with an answer key

Answers can be in English, Urdu, or both. Each caller has a small daily quota.
    """,
    version=settings.app_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json"
)


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)


app.include_router(api_router)


@app.get("/", tags=["Root"])
async def root():
    """
    Service root endpoint
    """
    return {
        "message": "📚 Welcome to Study Assistant",
        "version": settings.app_version,
        "modes": ["solve", "summarize", "mcq"],
        "api_docs": "/docs",
        "status": "🟢 Service running"
    }


@app.get("/health", tags=["Health"])
async def health_check():
    """
    Service health check

    Reports the AI service, database and rate limiter status.
    """
    try:
        from study_assistant.utils.dependencies import check_services_health
        health_status = await check_services_health()

        return {
            "status": "healthy",
            "timestamp": time.time(),
            "version": settings.app_version,
            "services": health_status
        }
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "unhealthy",
                "error": str(e),
                "version": settings.app_version
            }
        )


@app.exception_handler(StudyAssistantError)
async def study_assistant_error_handler(request: Request, exc: StudyAssistantError):
    """Map pipeline errors to their status and a ``{message}`` body"""
    if exc.status_code >= 500:
        logger.error(f"Request failed for {request.url}: {exc.__cause__ or exc}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Report the first invalid field as a 400"""
    errors = exc.errors()
    first = errors[0] if errors else {}
    loc = [str(part) for part in first.get("loc", ()) if part != "body"]
    content = {"message": first.get("msg", "Invalid request")}
    if loc:
        content["field"] = ".".join(loc)
    logger.info(f"Validation error for {request.url}: {content}")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=content)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"message": exc.detail}, headers=exc.headers)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """
    Global exception handler for unhandled errors
    """
    logger.error(f"Unhandled exception for {request.url}: {exc}")

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": str(exc) if settings.debug else "Internal server error"}
    )


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """
    Log all HTTP requests for monitoring and debugging
    """
    start_time = time.time()

    logger.info(f"📥 {request.method} {request.url}")

    response = await call_next(request)

    process_time = time.time() - start_time
    logger.info(f"📤 {request.method} {request.url} - {response.status_code} - {process_time:.2f}s")

    return response


if __name__ == "__main__":
    logger.info(f"🚀 Starting Study Assistant on {settings.host}:{settings.port}")

    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        access_log=True,
        log_level=settings.log_level.lower()
    )
