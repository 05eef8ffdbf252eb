"""
Error types for the coaching core.

TransientCallFailure is recovered inside the orchestrator through the
fallback path. Every other error propagates to the immediate caller.
"""


class CoachingError(Exception):
    """Base class for all coaching core errors."""
    pass


class TransientCallFailure(CoachingError):
    """A model call failed (network, timeout, non-2xx, malformed envelope)."""

    def __init__(self, service: str, detail: str):
        self.service = service
        self.detail = detail
        super().__init__(f"{service} call failed: {detail}")


class ResponseFormatError(CoachingError):
    """Model output could not be mapped to the expected schema."""
    pass


class StructuralInvariantError(CoachingError):
    """A result would violate its data-model invariants (e.g. an empty path)."""
    pass


class ConfigurationError(CoachingError):
    """Missing credentials or endpoints. Fatal at startup."""
    pass


class QueueOverflowError(CoachingError):
    """A bounded task queue rejected a job because it was full."""
    pass


class PromptFieldError(CoachingError):
    """A prompt template references a field that is missing or unset."""
    pass
