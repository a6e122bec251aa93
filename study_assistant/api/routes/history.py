"""
History routes
"""
from typing import List
from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import JSONResponse
from loguru import logger

from study_assistant.core.interfaces.history_repository import HistoryRepository
from study_assistant.models.responses import HistoryItem
from study_assistant.utils.dependencies import get_history_repository

router = APIRouter(prefix="/history", tags=["History"])


@router.get("", response_model=List[HistoryItem])
async def list_history(history: HistoryRepository = Depends(get_history_repository)):
    """
    List generated items, newest first

    A storage failure yields an empty list.
    """
    records = await history.list()
    return [HistoryItem.from_record(record) for record in records]


@router.delete("/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_history(record_id: str, history: HistoryRepository = Depends(get_history_repository)):
    """
    Delete one history item

    Deleting an id that does not exist still succeeds.
    """
    try:
        parsed_id = int(record_id)
    except ValueError:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": "Invalid ID"}
        )

    try:
        await history.delete(parsed_id)
    except Exception as e:
        logger.error(f"Failed to delete history #{parsed_id}: {e}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Failed to delete history item"}
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
