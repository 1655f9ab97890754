"""
Per-field status classifier.

Maps one (field, value) pair to a ``Status`` using a fixed threshold table.

Threshold table (canonical)
---------------------------
    field           critical            warning                    good
    soil_moisture   v < 20              20 <= v < 50               v >= 50
    temperature     v < 5  or v > 40    5 <= v < 10 or 35 < v <= 40  10 <= v <= 35
    humidity        v < 20 or v > 90    20 <= v < 30 or 80 < v <= 90 30 <= v <= 80
    water_level     v < 20              20 <= v < 40               v >= 40
    rain            never               v > 70                     v <= 70
    light           v < 100             100 <= v < 200             v >= 200

Evaluation order (first match wins)
-----------------------------------
    1. CRITICAL : value absent
    2. CRITICAL : v < critical_below  OR  v > critical_above
    3. WARNING  : v < warning_below   OR  v > warning_above
    4. GOOD     : everything else

Cutoffs are strict inequalities, so a value sitting exactly on a cutoff falls
into the less severe band (soil_moisture 20.0 -> WARNING, 19.999 -> CRITICAL).
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from sensor_advisor.models.snapshot import ReadingSnapshot
from sensor_advisor.taxonomy.sensor_taxonomy import SensorField, Status, parse_sensor_field


@dataclass(frozen=True)
class ThresholdBand:
    """Cutoffs for one field.  ``None`` disables that side of the band."""

    critical_below: Optional[float] = None
    warning_below:  Optional[float] = None
    warning_above:  Optional[float] = None
    critical_above: Optional[float] = None

    def evaluate(self, value: float) -> Status:
        if self.critical_below is not None and value < self.critical_below:
            return Status.CRITICAL
        if self.critical_above is not None and value > self.critical_above:
            return Status.CRITICAL
        if self.warning_below is not None and value < self.warning_below:
            return Status.WARNING
        if self.warning_above is not None and value > self.warning_above:
            return Status.WARNING
        return Status.GOOD


THRESHOLDS: dict[SensorField, ThresholdBand] = {
    SensorField.SOIL_MOISTURE: ThresholdBand(critical_below=20.0, warning_below=50.0),
    SensorField.TEMPERATURE:   ThresholdBand(
        critical_below=5.0, warning_below=10.0, warning_above=35.0, critical_above=40.0,
    ),
    SensorField.HUMIDITY:      ThresholdBand(
        critical_below=20.0, warning_below=30.0, warning_above=80.0, critical_above=90.0,
    ),
    SensorField.WATER_LEVEL:   ThresholdBand(critical_below=20.0, warning_below=40.0),
    SensorField.RAIN:          ThresholdBand(warning_above=70.0),
    SensorField.LIGHT:         ThresholdBand(critical_below=100.0, warning_below=200.0),
}


def classify(field: SensorField | str, value: Optional[float]) -> Status:
    """Classify a single reading.

    Args:
        field: ``SensorField`` member, snake_case value, or camelCase alias.
        value: The reading, or ``None`` when absent.

    Returns:
        ``Status.CRITICAL`` for absent values, otherwise the band verdict.

    Raises:
        ValueError: If ``field`` is not one of the six sensor fields, or
            ``value`` is NaN or infinite.
    """
    band = THRESHOLDS[parse_sensor_field(field)]
    if value is None:
        return Status.CRITICAL
    value = float(value)
    if not math.isfinite(value):
        raise ValueError(f"Reading for '{field}' must be finite, got {value}.")
    return band.evaluate(value)


def classify_snapshot(snapshot: ReadingSnapshot) -> dict[SensorField, Status]:
    """Classify every field of ``snapshot``, in ``SensorField`` order."""
    return {field: classify(field, snapshot.value(field)) for field in SensorField}


def worst_status(statuses: dict[SensorField, Status]) -> Status:
    """Most severe status in ``statuses`` (``GOOD`` for an empty mapping)."""
    return max(statuses.values(), key=lambda s: s.rank, default=Status.GOOD)
