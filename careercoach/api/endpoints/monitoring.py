"""
Monitoring API endpoints

Provides:
- Performance and cost reports for external model calls
- Call reporting from services outside the core
- Model health checks and cache statistics
"""

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel

from careercoach.api.dependencies import get_service, to_http_error
from careercoach.core.errors import CoachingError
from careercoach.core.task_queues import CallCompleted

router = APIRouter()


class ReportResponse(BaseModel):
    report: str


@router.get("/performance", response_model=ReportResponse)
async def performance_report() -> ReportResponse:
    return ReportResponse(report=get_service().performance_report())


@router.get("/cost", response_model=ReportResponse)
async def cost_report() -> ReportResponse:
    return ReportResponse(report=get_service().cost_report())


@router.post("/calls", status_code=status.HTTP_202_ACCEPTED)
async def report_call(event: CallCompleted):
    """Queue a call record for the monitor."""
    try:
        get_service().publish(event)
    except CoachingError as e:
        raise to_http_error(e)
    return {"status": "accepted"}


@router.get("/health/{service_name}")
async def model_health(service_name: str):
    """
    Run a real health check against one model.

    This sends a throwaway prompt; do not poll it.
    """
    try:
        healthy = await get_service().health_check(service_name)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unknown service: {service_name}")
    return {"service": service_name, "healthy": healthy}


@router.get("/cache")
async def cache_stats():
    """Hit, miss and eviction counts per result kind."""
    stats = get_service().cache.stats()
    return {kind: vars(s) for kind, s in stats.items()}
