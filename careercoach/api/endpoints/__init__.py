"""
API endpoint modules for CareerCoach
"""

from careercoach.api.endpoints import coaching, assessment, monitoring

__all__ = ["coaching", "assessment", "monitoring"]
