"""Tests for sensor_advisor/taxonomy/sensor_taxonomy.py."""

from __future__ import annotations

import pytest

from sensor_advisor.taxonomy.sensor_taxonomy import (
    SENSOR_SPECS,
    SensorField,
    Status,
    parse_sensor_field,
)


class TestSensorField:
    def test_six_fields(self):
        assert len(SensorField) == 6

    def test_alias_is_camel_case(self):
        assert SensorField.SOIL_MOISTURE.alias == "soilMoisture"
        assert SensorField.WATER_LEVEL.alias == "waterLevel"
        assert SensorField.LIGHT.alias == "light"

    def test_every_field_has_spec(self):
        assert set(SENSOR_SPECS) == set(SensorField)

    def test_light_displayed_without_decimals(self):
        assert SENSOR_SPECS[SensorField.LIGHT].decimals == 0
        assert SENSOR_SPECS[SensorField.LIGHT].unit == "lux"


class TestParseSensorField:
    @pytest.mark.parametrize("name, expected", [
        ("soil_moisture", SensorField.SOIL_MOISTURE),
        ("soilMoisture", SensorField.SOIL_MOISTURE),
        ("waterLevel", SensorField.WATER_LEVEL),
        (SensorField.RAIN, SensorField.RAIN),
    ])
    def test_resolves_all_spellings(self, name, expected):
        assert parse_sensor_field(name) is expected

    def test_unknown_field_raises(self):
        with pytest.raises(ValueError, match="Unknown sensor field"):
            parse_sensor_field("ph")


class TestStatus:
    def test_labels(self):
        assert Status.GOOD.label == "Optimal"
        assert Status.WARNING.label == "Attention"
        assert Status.CRITICAL.label == "Critical"

    def test_rank_order(self):
        assert Status.GOOD.rank < Status.WARNING.rank < Status.CRITICAL.rank

    def test_string_values(self):
        assert Status("critical") is Status.CRITICAL
