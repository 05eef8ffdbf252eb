"""
API layer for CareerCoach

Contains FastAPI routers for:
- Coaching content generation
- Answer assessment
- Call monitoring
"""

from careercoach.api.router import api_router

__all__ = ["api_router"]
