"""
Exception hierarchy for the sensor advisor.

Absent sensor readings are NOT errors - they are a recognised data state
that produces a Critical status.  The exceptions below cover I/O and the
optional external advisor only.  Advisor errors never escape
``AdvisorService``; they are caught there and replaced by the rule engine.
"""

from __future__ import annotations


class SensorAdvisorError(RuntimeError):
    """Base class for all sensor advisor errors."""


class SnapshotLoadError(SensorAdvisorError):
    """Raised when a reading snapshot file cannot be read or validated.

    Attributes:
        source: File path or label of the offending input.
    """

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        super().__init__(f"Could not load snapshot from '{source}': {reason}")


class TextGenerationError(SensorAdvisorError):
    """Raised when the external text-generation service call fails.

    Attributes:
        status_code: HTTP status of the failed response, or ``None`` for
            transport-level failures.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class AdvisorResponseError(SensorAdvisorError):
    """Raised when generated text carries none of the expected labelled lines."""
