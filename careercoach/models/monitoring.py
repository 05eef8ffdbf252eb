"""
Model call and monitoring models for CareerCoach
"""

from pydantic import BaseModel, Field


class ModelResponse(BaseModel):
    """Outcome of one model invocation. Lives for a single call."""

    text: str = ""
    service: str
    latency_ms: int = Field(default=0, ge=0)
    success: bool = True
    error: str | None = None


class ServiceMetrics(BaseModel):
    """Snapshot of one service's lifetime counters."""

    service: str
    calls: int = 0
    errors: int = 0
    total_duration_ms: int = 0
    max_duration_ms: int | None = None
    min_duration_ms: int | None = None
    total_cost: int = 0

    @property
    def error_rate(self) -> float:
        return self.errors / self.calls if self.calls else 0.0

    @property
    def success_rate(self) -> float:
        return 1.0 - self.error_rate if self.calls else 0.0

    @property
    def average_duration_ms(self) -> float:
        return self.total_duration_ms / self.calls if self.calls else 0.0
