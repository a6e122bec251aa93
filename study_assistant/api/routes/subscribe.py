"""
Premium subscription route

Payment verification is manual: the transaction id is logged and an
acknowledgment returned. Nothing is verified or stored.
"""
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from loguru import logger

from study_assistant.models.requests import SubscribeRequest
from study_assistant.models.responses import MessageResponse
from study_assistant.utils.dependencies import get_client_identity, require_authenticated

router = APIRouter(tags=["Subscription"])


@router.post("/subscribe", response_model=MessageResponse)
async def subscribe(
    request: SubscribeRequest,
    _: str = Depends(require_authenticated),
    identity: str = Depends(get_client_identity),
):
    """
    Submit a payment transaction id for manual verification
    """
    if not request.transaction_id:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": "Transaction ID required"}
        )

    logger.info(f"💳 Payment verification requested from {identity} with TID: {request.transaction_id}")
    return MessageResponse(message="Payment submitted for verification. Premium will be unlocked shortly.")
