"""
Sensor taxonomy for the environmental dashboard.

Two enumerations describe every reading:
  - ``SensorField`` - which of the six environmental channels a value belongs to.
  - ``Status``      - the three-level verdict derived from a value.

``SENSOR_SPECS`` carries per-field display metadata (label, unit, description,
display range) used by the CLI formatters.  The display range is the gauge
range shown to the user, NOT a validation bound: readings outside it are
still classified normally.

Usage example::

    from sensor_advisor.taxonomy.sensor_taxonomy import SensorField, Status

    field  = SensorField.SOIL_MOISTURE
    status = Status.WARNING
    status.label   # "Attention"

This module has NO imports from any other ``sensor_advisor`` package.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class SensorField(StrEnum):
    """One of the six environmental channels in a reading snapshot."""

    SOIL_MOISTURE = "soil_moisture"
    """Volumetric soil water content in the root zone (%)."""

    TEMPERATURE = "temperature"
    """Ambient air temperature (°C)."""

    HUMIDITY = "humidity"
    """Relative air humidity (%)."""

    WATER_LEVEL = "water_level"
    """Irrigation reservoir fill level (%)."""

    RAIN = "rain"
    """Rain sensor wetness (%)."""

    LIGHT = "light"
    """Ambient light intensity (lux)."""

    @property
    def alias(self) -> str:
        """camelCase key used by the dashboard JSON payloads."""
        head, *rest = self.value.split("_")
        return head + "".join(part.capitalize() for part in rest)


class Status(StrEnum):
    """Three-level verdict for a reading or an advisory."""

    GOOD = "good"
    WARNING = "warning"
    CRITICAL = "critical"

    @property
    def label(self) -> str:
        """User-facing badge text."""
        return _STATUS_LABELS[self]

    @property
    def rank(self) -> int:
        """Severity ordering: good=0, warning=1, critical=2."""
        return _STATUS_RANKS[self]


_STATUS_LABELS: dict[Status, str] = {
    Status.GOOD:     "Optimal",
    Status.WARNING:  "Attention",
    Status.CRITICAL: "Critical",
}

_STATUS_RANKS: dict[Status, int] = {
    Status.GOOD:     0,
    Status.WARNING:  1,
    Status.CRITICAL: 2,
}


@dataclass(frozen=True)
class SensorSpec:
    """Display metadata for one sensor channel."""

    label: str
    unit: str
    description: str
    display_min: float
    display_max: float
    decimals: int = 1


SENSOR_SPECS: dict[SensorField, SensorSpec] = {
    SensorField.SOIL_MOISTURE: SensorSpec(
        "Soil Moisture", "%", "Plant root zone hydration", 0, 100,
    ),
    SensorField.TEMPERATURE: SensorSpec(
        "Temperature", "°C", "Ambient air temperature", -10, 50,
    ),
    SensorField.HUMIDITY: SensorSpec(
        "Humidity", "%", "Relative air humidity", 0, 100,
    ),
    SensorField.WATER_LEVEL: SensorSpec(
        "Water Level", "%", "Irrigation tank capacity", 0, 100,
    ),
    SensorField.RAIN: SensorSpec(
        "Rain Sensor", "%", "Precipitation detection", 0, 100,
    ),
    SensorField.LIGHT: SensorSpec(
        "Light Intensity", "lux", "Ambient light levels", 0, 1000, decimals=0,
    ),
}


def parse_sensor_field(name: str | SensorField) -> SensorField:
    """Resolve a field from its enum, snake_case value, or camelCase alias.

    Raises:
        ValueError: If ``name`` does not identify one of the six fields.
    """
    if isinstance(name, SensorField):
        return name
    for field in SensorField:
        if name == field.value or name == field.alias:
            return field
    raise ValueError(
        f"Unknown sensor field '{name}'. "
        f"Must be one of {[f.value for f in SensorField]}."
    )
