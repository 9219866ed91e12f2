# routers/health.py

from fastapi import APIRouter

from core.config import settings

router = APIRouter(
    prefix="/health",
    tags=["Health"],
)


# -----------------------------------------------------
# GET /health/app
# Simple API health check for uptime monitors
# -----------------------------------------------------
@router.get("/app", summary="App health check")
async def health_app():
    """
    Lightweight health check. No auth required.
    """
    return {
        "service": settings.PROJECT_NAME,
        "status": "ok",
    }
