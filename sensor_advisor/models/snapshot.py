"""
Reading snapshot - one complete set of the six sensor values at a point in time.

Each field is ``Optional[float]``: ``None`` means "no data yet" and is kept
distinct from ``0.0``.  Consumers must never substitute a numeric placeholder
for ``None``; the classifier and the rule engine both treat absence as its own
Critical condition.

The model is frozen.  Producers publish a *new* snapshot for every update so
no consumer ever sees a partially updated record.  ``replace()`` is the
supported way to derive a modified copy.

Both snake_case field names and the dashboard's camelCase keys are accepted::

    ReadingSnapshot(soil_moisture=65.4, temperature=24.8)
    ReadingSnapshot.model_validate({"soilMoisture": 65.4, "waterLevel": 78.9})
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from sensor_advisor.taxonomy.sensor_taxonomy import SensorField, parse_sensor_field


class ReadingSnapshot(BaseModel):
    """Immutable set of environmental readings.

    Attributes:
        soil_moisture: Soil moisture in percent, or ``None`` if absent.
        temperature: Air temperature in °C, or ``None``.
        humidity: Relative humidity in percent, or ``None``.
        water_level: Reservoir level in percent, or ``None``.
        rain: Rain sensor wetness in percent, or ``None``.
        light: Light intensity in lux, or ``None``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    soil_moisture: Optional[float] = Field(default=None, alias="soilMoisture", allow_inf_nan=False)
    temperature: Optional[float] = Field(default=None, allow_inf_nan=False)
    humidity: Optional[float] = Field(default=None, allow_inf_nan=False)
    water_level: Optional[float] = Field(default=None, alias="waterLevel", allow_inf_nan=False)
    rain: Optional[float] = Field(default=None, allow_inf_nan=False)
    light: Optional[float] = Field(default=None, allow_inf_nan=False)

    def value(self, field: SensorField | str) -> Optional[float]:
        """Return the reading for ``field`` (``None`` when absent)."""
        return getattr(self, parse_sensor_field(field).value)

    def missing_fields(self) -> list[SensorField]:
        """Fields with no reading, in ``SensorField`` declaration order."""
        return [f for f in SensorField if self.value(f) is None]

    @property
    def is_complete(self) -> bool:
        return not self.missing_fields()

    def replace(self, **changes: Any) -> "ReadingSnapshot":
        """Return a new validated snapshot with ``changes`` applied."""
        data = self.model_dump()
        data.update(changes)
        return ReadingSnapshot.model_validate(data)

    def as_dict(self, by_alias: bool = False) -> dict[str, Optional[float]]:
        """Plain dict of the six readings, optionally keyed by camelCase alias."""
        return self.model_dump(by_alias=by_alias)
