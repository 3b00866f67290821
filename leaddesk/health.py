"""
Health check and monitoring endpoints.
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from leaddesk.config import config
from leaddesk.dependencies import get_store
from leaddesk.logging_config import logger

router = APIRouter(tags=["Health & Monitoring"])


# GET /health
# Gets: nothing
# Returns: {status, service, version}
# Example:
#   curl http://localhost:8080/health
@router.get("/health")
async def health_check():
    """
    Basic health check - returns 200 if service is running.
    Use this for basic liveness probes.
    """
    return {
        "status": "healthy",
        "service": "leaddesk",
        "version": "1.0.0"
    }


# GET /health/ready
# Gets: nothing
# Returns: readiness checks; 503 if the lead store cannot be built
# Example:
#   curl http://localhost:8080/health/ready
@router.get("/health/ready")
async def readiness_check():
    """
    Readiness check.

    The scoring backend is optional: when it is down the store serves its
    cached leads, so it does not affect readiness.
    """
    checks = {
        "lead_store": False,
        "scoring_backend": "configured" if config.has_scoring_backend() else "not_configured",
        "ready": False,
    }

    try:
        store = get_store()
        checks["lead_store"] = True
        checks["cached_leads"] = len(store)
        logger.debug("readiness_check_store", status="ok")
    except Exception as e:
        logger.warning("readiness_check_store", status="error", error=str(e))

    checks["ready"] = checks["lead_store"] is True
    status_code = 200 if checks["ready"] else 503
    return JSONResponse(content=checks, status_code=status_code)


# GET /health/info
# Gets: nothing
# Returns: service configuration summary
# Example:
#   curl http://localhost:8080/health/info
@router.get("/health/info")
async def system_info():
    """
    System information and configuration status.
    """
    return {
        "service": "leaddesk",
        "version": "1.0.0",
        "configuration": {
            "scoring_backend_configured": config.has_scoring_backend(),
            "scoring_api_base_url": config.SCORING_API_BASE_URL or None,
            "scoring_api_timeout_seconds": config.SCORING_API_TIMEOUT_SECONDS,
            "debug_mode": config.DEBUG
        },
        "features": {
            "demo_seed_data": config.SEED_DEMO_DATA,
            "sync_on_startup": config.SYNC_ON_STARTUP,
            "deterministic_scores": config.LEAD_RANDOM_SEED is not None,
        }
    }
