"""Main FastAPI application."""

from contextlib import asynccontextmanager
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from leaddesk.config import config
from leaddesk.dependencies import get_store
from leaddesk.health import router as health_router
from leaddesk.logging_config import logger
from leaddesk.metrics import api_requests_total, api_request_duration
from leaddesk.routers.analytics import router as analytics_router
from leaddesk.routers.core import router as core_router
from leaddesk.routers.leads import router as leads_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - startup and shutdown."""
    logger.info("application_starting", version="1.0.0")
    store = get_store()
    logger.info(
        "lead_store_ready",
        leads=len(store),
        scoring_backend=config.SCORING_API_BASE_URL if config.has_scoring_backend() else None,
    )
    if config.SYNC_ON_STARTUP:
        leads = await store.fetch_and_merge_remote()
        logger.info("startup_sync_complete", leads=len(leads))

    yield

    logger.info("application_shutting_down")


app = FastAPI(
    title="LeadDesk API",
    description="Lead cache and analytics for the CRM dashboard",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def record_request_metrics(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    route = request.scope.get("route")
    endpoint = getattr(route, "path", request.url.path)
    api_requests_total.labels(
        method=request.method,
        endpoint=endpoint,
        status=str(response.status_code),
    ).inc()
    api_request_duration.observe(time.perf_counter() - start)
    return response


app.include_router(health_router)
app.include_router(core_router)
app.include_router(leads_router)
app.include_router(analytics_router)


# GET /metrics
# Gets: nothing
# Returns: Prometheus text exposition
# Example:
#   curl http://localhost:8080/metrics
@app.get("/metrics")
async def metrics():
    """Prometheus metrics endpoint."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8080)
