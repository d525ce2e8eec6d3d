"""
Canteen Console — Health endpoint
"""
import asyncio
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from canteen.core.config import get_settings
from canteen.core.dependencies import get_repository
from canteen.db.repository import DocumentRepository

settings = get_settings()
router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(repository: DocumentRepository = Depends(get_repository)):
    deps: dict[str, str] = {}
    healthy = True

    try:
        await asyncio.wait_for(repository.ping(), timeout=settings.HEALTH_CHECK_TIMEOUT)
        deps[repository.name] = "ok"
    except Exception as e:
        deps[repository.name] = f"error: {str(e)[:100]}"
        healthy = False

    return JSONResponse(
        content={
            "status": "healthy" if healthy else "degraded",
            "service": settings.SERVICE_NAME,
            "version": settings.SERVICE_VERSION,
            "dependencies": deps,
        },
        status_code=200 if healthy else 503,
    )
