import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from resume_tools.core.scoring import get_scoring_config
from resume_tools.taxonomy import get_default_taxonomy_provider

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health", summary="Health Check", description="Report whether scoring config and catalogs are loadable.")
async def health_check():
    try:
        get_scoring_config()
        get_default_taxonomy_provider()
    except (RuntimeError, OSError, ValueError) as exc:
        logger.error("health_check_failed error=%s", type(exc).__name__)
        return JSONResponse(status_code=503, content={"status": "unhealthy", "detail": str(exc)})
    return {"status": "healthy"}
