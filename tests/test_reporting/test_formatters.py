"""Tests for sensor_advisor.reporting.formatters."""

from __future__ import annotations

import pytest

from sensor_advisor.engine.classifier import classify_snapshot
from sensor_advisor.engine.recommender import recommend
from sensor_advisor.engine.rules import PLANTS_UNAVAILABLE
from sensor_advisor.reporting.formatters import (
    format_advisories,
    format_plants,
    format_status_board,
    format_value,
)
from sensor_advisor.taxonomy.sensor_taxonomy import SensorField


# ── format_value ──────────────────────────────────────────────────────────────


@pytest.mark.parametrize("field, value, expected", [
    (SensorField.TEMPERATURE, 24.84, "24.8"),
    (SensorField.LIGHT, 450.6, "451"),
    (SensorField.RAIN, 0.0, "0.0"),
    (SensorField.HUMIDITY, None, "null"),
])
def test_format_value(field, value, expected) -> None:
    """Display precision follows the field spec; absent readings show null."""
    assert format_value(field, value) == expected


# ── format_status_board ───────────────────────────────────────────────────────


def test_status_board_lists_every_sensor(optimal_snapshot) -> None:
    """One row per field, with label, value, unit, and badge."""
    board = format_status_board(optimal_snapshot, classify_snapshot(optimal_snapshot))
    assert "=== Sensor Status ===" in board
    for label in ("Soil Moisture", "Temperature", "Humidity",
                  "Water Level", "Rain Sensor", "Light Intensity"):
        assert label in board
    assert "65.4" in board
    assert "lux" in board
    assert "Critical" not in board


def test_status_board_absent_reading(partial_snapshot) -> None:
    """Absent rain reading renders as null with a Critical badge."""
    board = format_status_board(partial_snapshot, classify_snapshot(partial_snapshot))
    rain_row = next(line for line in board.splitlines() if "Rain Sensor" in line)
    assert "null" in rain_row
    assert "Critical" in rain_row


def test_status_board_overall_and_descriptions(optimal_snapshot, partial_snapshot) -> None:
    """Footer reports the most severe status; rows carry the field description."""
    good = format_status_board(optimal_snapshot, classify_snapshot(optimal_snapshot))
    assert "Overall: Optimal" in good
    assert "Plant root zone hydration" in good

    bad = format_status_board(partial_snapshot, classify_snapshot(partial_snapshot))
    assert "Overall: Critical" in bad


def test_status_board_shows_display_range(optimal_snapshot) -> None:
    """Temperature row carries its -10..50 display range."""
    board = format_status_board(optimal_snapshot, classify_snapshot(optimal_snapshot))
    temp_row = next(line for line in board.splitlines() if "Temperature" in line)
    assert "-10-50" in temp_row


# ── format_advisories ─────────────────────────────────────────────────────────


def test_advisories_tags_and_actions(stressed_snapshot) -> None:
    """Each advisory shows its severity tag, title, and action."""
    text = format_advisories(recommend(stressed_snapshot))
    assert "(basic mode)" in text
    assert "[CRIT] Urgent: Soil Critically Dry" in text
    assert "-> Refill water tank immediately" in text
    assert "[WARN] High Temperature Alert" in text
    assert "confidence 95% | source rules" in text


def test_advisories_optimal(optimal_snapshot) -> None:
    """Optimal snapshot shows the single [OK] advisory."""
    text = format_advisories(recommend(optimal_snapshot), mode_label="advisor")
    assert "(advisor mode)" in text
    assert "[OK]" in text
    assert "Optimal Growing Conditions" in text


def test_advisories_empty() -> None:
    """Empty list renders a placeholder instead of nothing."""
    assert "(no recommendations)" in format_advisories([])


# ── format_plants ─────────────────────────────────────────────────────────────


def test_format_plants() -> None:
    """Plants render as a bulleted list under the heading."""
    text = format_plants(["Tomatoes", "Basil"])
    assert "=== Suitable Plants & Crops ===" in text
    assert "  - Tomatoes" in text
    assert "  - Basil" in text


def test_format_plants_sentinel() -> None:
    """The no-data sentinel is shown as-is."""
    assert PLANTS_UNAVAILABLE in format_plants([PLANTS_UNAVAILABLE])
