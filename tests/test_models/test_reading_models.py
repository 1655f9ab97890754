"""Tests for ReadingSnapshot and Advisory models."""

from __future__ import annotations

import math

import pytest
from pydantic import ValidationError

from sensor_advisor.models.advisory import Advisory
from sensor_advisor.models.snapshot import ReadingSnapshot
from sensor_advisor.taxonomy.sensor_taxonomy import SensorField, Status


class TestReadingSnapshot:
    def test_defaults_are_absent(self):
        s = ReadingSnapshot()
        assert s.missing_fields() == list(SensorField)
        assert not s.is_complete

    def test_zero_is_not_absent(self):
        s = ReadingSnapshot(
            soil_moisture=0.0, temperature=0.0, humidity=0.0,
            water_level=0.0, rain=0.0, light=0.0,
        )
        assert s.is_complete
        assert s.soil_moisture == 0.0

    def test_accepts_camel_case_keys(self):
        s = ReadingSnapshot.model_validate({"soilMoisture": 40.0, "waterLevel": 55.5})
        assert s.soil_moisture == 40.0
        assert s.water_level == 55.5

    def test_value_by_field_or_alias(self, optimal_snapshot):
        assert optimal_snapshot.value(SensorField.LIGHT) == 450
        assert optimal_snapshot.value("waterLevel") == pytest.approx(78.9)

    def test_missing_fields_in_declaration_order(self):
        s = ReadingSnapshot(soil_moisture=50.0, humidity=50.0, rain=0.0)
        assert s.missing_fields() == [
            SensorField.TEMPERATURE, SensorField.WATER_LEVEL, SensorField.LIGHT,
        ]

    def test_frozen(self, optimal_snapshot):
        with pytest.raises(ValidationError):
            optimal_snapshot.temperature = 99.0  # type: ignore[misc]

    def test_replace_returns_new_snapshot(self, optimal_snapshot):
        updated = optimal_snapshot.replace(temperature=30.0)
        assert updated.temperature == 30.0
        assert optimal_snapshot.temperature == pytest.approx(24.8)
        assert updated.light == optimal_snapshot.light

    def test_replace_can_clear_field(self, optimal_snapshot):
        assert optimal_snapshot.replace(light=None).missing_fields() == [SensorField.LIGHT]

    @pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf])
    def test_non_finite_rejected(self, bad):
        with pytest.raises(ValidationError):
            ReadingSnapshot(temperature=bad)

    def test_as_dict_by_alias(self, optimal_snapshot):
        d = optimal_snapshot.as_dict(by_alias=True)
        assert d["soilMoisture"] == pytest.approx(65.4)
        assert set(d) == {f.alias for f in SensorField}


class TestAdvisory:
    def _advisory(self, **overrides) -> Advisory:
        fields = dict(
            severity=Status.WARNING,
            title="Soil Moisture Low",
            message="Consider watering soon.",
            action="Water within 2-4 hours",
            confidence=0.85,
        )
        fields.update(overrides)
        return Advisory(**fields)

    def test_valid_construction(self):
        a = self._advisory()
        assert a.severity is Status.WARNING
        assert a.source == "rules"

    def test_severity_from_string(self):
        assert self._advisory(severity="critical").severity is Status.CRITICAL

    @pytest.mark.parametrize("confidence", [-0.01, 1.01])
    def test_confidence_out_of_range_raises(self, confidence):
        with pytest.raises(ValidationError, match="confidence"):
            self._advisory(confidence=confidence)

    def test_confidence_bounds_inclusive(self):
        assert self._advisory(confidence=0.0).confidence == 0.0
        assert self._advisory(confidence=1.0).confidence == 1.0

    def test_blank_title_raises(self):
        with pytest.raises(ValidationError, match="must not be empty"):
            self._advisory(title="   ")

    def test_text_is_stripped(self):
        assert self._advisory(action="  Refill tank  ").action == "Refill tank"

    def test_unknown_source_raises(self):
        with pytest.raises(ValidationError):
            self._advisory(source="oracle")
