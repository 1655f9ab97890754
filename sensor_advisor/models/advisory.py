"""
Advisory output model.

An ``Advisory`` is one piece of actionable guidance derived from a reading
snapshot: a severity, a short title, an explanatory message, and the
recommended action.

``confidence`` is static metadata attached to the rule (or advisor path) that
produced the advisory - it is NOT computed from the readings.

``source`` records which path produced the advisory: ``"rules"`` for the
deterministic engine, ``"advisor"`` for the external text-generation path.

Advisories are produced fresh for every snapshot and never persisted.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, field_validator

from sensor_advisor.taxonomy.sensor_taxonomy import Status

AdvisorySource = Literal["rules", "advisor"]


class Advisory(BaseModel):
    """A single care recommendation.

    Attributes:
        severity: ``Status`` of the condition (``GOOD`` for positive feedback).
        title: Short headline, e.g. ``"Water Tank Nearly Empty"``.
        message: Why the advisory was raised.
        action: What the grower should do next.
        confidence: Fixed annotation in ``[0.0, 1.0]``.
        source: Producing path, ``"rules"`` or ``"advisor"``.
    """

    model_config = ConfigDict(frozen=True)

    severity: Status
    title: str
    message: str
    action: str
    confidence: float
    source: AdvisorySource = "rules"

    @field_validator("title", "message", "action")
    @classmethod
    def validate_not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Advisory text fields must not be empty.")
        return v.strip()

    @field_validator("confidence")
    @classmethod
    def validate_confidence_range(cls, v: float) -> float:
        if not 0.0 <= v <= 1.0:
            raise ValueError(f"confidence must be in [0.0, 1.0], got {v}.")
        return v
