"""
Call Monitor for CareerCoach

Records the outcome of every external model call and keeps per-service
lifetime aggregates (calls, errors, durations, cost).

Counters are purely additive and live for the process lifetime. Updates
happen under a lock so concurrent callers never lose increments.

Warnings (logged, never raised):
- a single call slower than slow_call_threshold_ms (strict >)
- a service error rate above error_rate_threshold (strict >, so exactly
  10% does not warn)
"""

import logging
import threading
from dataclasses import dataclass

from careercoach.models.monitoring import ServiceMetrics

logger = logging.getLogger(__name__)


DEFAULT_BASE_COSTS = {"OpenAI": 100, "Claude": 150}


@dataclass
class _Accumulator:
    calls: int = 0
    errors: int = 0
    total_duration_ms: int = 0
    max_duration_ms: int | None = None
    min_duration_ms: int | None = None  # None until the first call
    total_cost: int = 0


class CallMonitor:
    """
    Per-service call statistics and cost accounting.

    Cost of one call = base fee for the service + cost_per_second for every
    whole second of duration. Unknown services pay default_base_cost.
    """

    def __init__(
        self,
        base_costs: dict[str, int] | None = None,
        default_base_cost: int = 50,
        cost_per_second: int = 10,
        slow_call_threshold_ms: int = 10000,
        error_rate_threshold: float = 0.1,
    ):
        self.base_costs = dict(DEFAULT_BASE_COSTS if base_costs is None else base_costs)
        self.default_base_cost = default_base_cost
        self.cost_per_second = cost_per_second
        self.slow_call_threshold_ms = slow_call_threshold_ms
        self.error_rate_threshold = error_rate_threshold

        self._lock = threading.Lock()
        self._services: dict[str, _Accumulator] = {}

    # =========================================================================
    # RECORDING
    # =========================================================================

    def call_cost(self, service: str, duration_ms: int) -> int:
        base = self.base_costs.get(service, self.default_base_cost)
        return base + (duration_ms // 1000) * self.cost_per_second

    def is_slow_call(self, duration_ms: int) -> bool:
        return duration_ms > self.slow_call_threshold_ms

    def record_call(
        self,
        service: str,
        duration_ms: int,
        success: bool,
        error: str | None = None,
    ) -> None:
        """
        Record one external call.

        Args:
            service: Service name (e.g. "OpenAI", "Claude", "Gemini")
            duration_ms: Wall-clock duration of the call
            success: Whether the call succeeded
            error: Optional error detail for failed calls
        """
        duration_ms = max(0, int(duration_ms))
        cost = self.call_cost(service, duration_ms)

        with self._lock:
            acc = self._services.setdefault(service, _Accumulator())
            acc.calls += 1
            if not success:
                acc.errors += 1
            acc.total_duration_ms += duration_ms
            acc.total_cost += cost
            if acc.max_duration_ms is None or duration_ms > acc.max_duration_ms:
                acc.max_duration_ms = duration_ms
            if acc.min_duration_ms is None or duration_ms < acc.min_duration_ms:
                acc.min_duration_ms = duration_ms
            error_rate = acc.errors / acc.calls

        if not success:
            logger.info(f"{service} call failed after {duration_ms}ms: {error or 'unknown error'}")

        if self.is_slow_call(duration_ms):
            logger.warning(f"Slow {service} call: {duration_ms}ms")

        if error_rate > self.error_rate_threshold:
            logger.warning(f"High {service} error rate: {error_rate:.1%}")

    # =========================================================================
    # QUERIES
    # =========================================================================

    def metrics(self, service: str) -> ServiceMetrics:
        with self._lock:
            acc = self._services.get(service) or _Accumulator()
            return ServiceMetrics(service=service, **vars(acc))

    def all_metrics(self) -> list[ServiceMetrics]:
        with self._lock:
            names = sorted(self._services)
        return [self.metrics(name) for name in names]

    def error_rate(self, service: str) -> float:
        return self.metrics(service).error_rate

    def is_error_rate_high(self, service: str) -> bool:
        return self.error_rate(service) > self.error_rate_threshold

    @property
    def total_calls(self) -> int:
        with self._lock:
            return sum(acc.calls for acc in self._services.values())

    @property
    def total_cost(self) -> int:
        with self._lock:
            return sum(acc.total_cost for acc in self._services.values())

    # =========================================================================
    # REPORTS
    # =========================================================================

    def performance_report(self) -> str:
        """Lifetime latency and success statistics per service."""
        lines = ["=== AI Service Performance Report ==="]
        metrics = self.all_metrics()
        if not metrics:
            lines.append("No calls recorded.")
            return "\n".join(lines)

        for m in metrics:
            lines.append(
                f"{m.service}: {m.calls} calls, "
                f"success rate {m.success_rate:.1%}, "
                f"avg {m.average_duration_ms:.0f}ms, "
                f"max {m.max_duration_ms}ms, "
                f"min {m.min_duration_ms}ms"
            )
        return "\n".join(lines)

    def cost_report(self) -> str:
        """Lifetime cost totals, overall and per service."""
        metrics = self.all_metrics()
        lines = [
            "=== AI Service Cost Report ===",
            f"Total calls: {sum(m.calls for m in metrics)}",
            f"Total cost: {sum(m.total_cost for m in metrics)}",
        ]
        for m in metrics:
            lines.append(f"{m.service}: {m.total_cost} ({m.calls} calls)")
        return "\n".join(lines)
