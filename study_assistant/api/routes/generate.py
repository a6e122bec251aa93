"""
Generation route: solve, summarize and MCQ
"""
from fastapi import APIRouter, Depends
from loguru import logger

from study_assistant.models.requests import GenerateRequest
from study_assistant.models.responses import ErrorResponse, GenerateResponse
from study_assistant.services.ai.generation_service import GenerationService
from study_assistant.utils.dependencies import get_client_identity, get_generation_service

router = APIRouter(tags=["Generate"])


@router.post(
    "/generate",
    response_model=GenerateResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid request or no content found"},
        429: {"model": ErrorResponse, "description": "Daily limit exceeded"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
)
async def generate(
    request: GenerateRequest,
    identity: str = Depends(get_client_identity),
    service: GenerationService = Depends(get_generation_service),
):
    """
    Generate a solution, study summary or MCQ set

    - **type**: `solve`, `summarize` or `mcq`
    - **content**: Text to process (optional when a file is sent)
    - **fileData**: Base64 file, optionally data-URL prefixed (image, PDF, DOCX, TXT)
    - **count**: Number of MCQs (default 5)
    - **complexity**: `easy`, `medium` or `difficult` (summaries)
    - **language**: `english`, `urdu` or `both`

    Each caller gets a fixed number of requests per day; the response reports
    how many remain.
    """
    logger.info(f"📝 Generate request: type={request.type.value} file={request.file_name!r} from {identity}")

    outcome = await service.generate(request, identity)
    return GenerateResponse(result=outcome.result, remaining=outcome.remaining)
