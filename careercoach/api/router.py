"""
Main API router for CareerCoach

Aggregates all API routes and provides the main application router.
"""

from fastapi import APIRouter

from careercoach.api.endpoints import coaching, assessment, monitoring

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(
    coaching.router,
    prefix="/coaching",
    tags=["Coaching"]
)

api_router.include_router(
    assessment.router,
    prefix="/assessment",
    tags=["Assessment"]
)

api_router.include_router(
    monitoring.router,
    prefix="/monitoring",
    tags=["Monitoring"]
)
