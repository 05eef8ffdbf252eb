"""
CareerCoach - AI orchestration core for career coaching

Turns candidate profiles into interview questions and learning paths,
and adapts them to answer quality and emotional state.
"""

__version__ = "0.1.0"
__author__ = "CareerCoach Team"
