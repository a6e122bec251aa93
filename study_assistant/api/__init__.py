"""
API main router
"""
from fastapi import APIRouter
from study_assistant.api.routes import generate, history, subscribe

router = APIRouter(prefix="/api")

router.include_router(generate.router)
router.include_router(history.router)
router.include_router(subscribe.router)


@router.get("/")
async def api_root():
    """
    API root endpoint
    """
    return {
        "message": "Study Assistant API",
        "endpoints": {
            "generate": "POST /api/generate",
            "history": "GET /api/history",
            "delete_history": "DELETE /api/history/{id}",
            "subscribe": "POST /api/subscribe"
        },
        "docs": "/docs",
        "redoc": "/redoc"
    }
