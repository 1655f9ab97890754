"""
Rule tables for the recommendation engine.

Rules are data, not nested conditionals: each rule pairs a predicate over a
complete snapshot with the output it contributes.  List order IS priority
order, so re-ordering a list re-prioritises the engine without touching
``recommender.py``.

Advisory rules (evaluated in order, every match appends one advisory)
---------------------------------------------------------------------
    soil_dry_critical   soil_moisture < 30             CRITICAL  0.95
    soil_dry_warning    30 <= soil_moisture < 50       WARNING   0.85
    tank_empty          water_level < 20               CRITICAL  0.90
    heat_stress         temperature > 35               WARNING   0.80
    cold_stress         temperature < 10               WARNING   0.80
    low_light           light < 200                    WARNING   0.75

Two advisories sit outside the table:
  - ``no_data_advisory()``  - short-circuits everything when a field is absent.
  - ``OPTIMAL_ADVISORY``    - emitted when no rule fires.

Plant rules (independent, non-exclusive)
----------------------------------------
    warm_sunny_moist   20 <= t <= 30, light > 500, soil > 50
    warm_humid         20 <= t <= 30, humidity > 60
    cool_season        15 <= t < 25
    full_sun           light > 800
    bright             400 < light <= 800
    partial_shade      200 < light <= 400
    low_light          light <= 200
    wet_tolerant       soil > 70
    drought_tolerant   soil < 40
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from sensor_advisor.models.advisory import Advisory
from sensor_advisor.models.snapshot import ReadingSnapshot
from sensor_advisor.taxonomy.sensor_taxonomy import SENSOR_SPECS, SensorField, Status

# Predicates only ever see complete snapshots; the engine checks absence first.
SnapshotPredicate = Callable[[ReadingSnapshot], bool]


@dataclass(frozen=True)
class AdvisoryRule:
    """One advisory rule.

    Attributes:
        name:      Stable identifier (used in logs and tests).
        field:     The sensor field the predicate inspects.
        predicate: Returns ``True`` when the rule fires.
        advisory:  Advisory appended when the rule fires.
    """

    name:      str
    field:     SensorField
    predicate: SnapshotPredicate
    advisory:  Advisory


@dataclass(frozen=True)
class PlantRule:
    """One plant suitability rule.

    Attributes:
        name:      Stable identifier.
        predicate: Returns ``True`` when the plant set applies.
        plants:    Plant / crop names contributed, in display order.
    """

    name:      str
    predicate: SnapshotPredicate
    plants:    tuple[str, ...]


# ── Advisory rules ────────────────────────────────────────────────────────────

ADVISORY_RULES: list[AdvisoryRule] = [
    AdvisoryRule(
        name="soil_dry_critical",
        field=SensorField.SOIL_MOISTURE,
        predicate=lambda s: s.soil_moisture < 30,
        advisory=Advisory(
            severity=Status.CRITICAL,
            title="Urgent: Soil Critically Dry",
            message="Soil moisture is dangerously low. Plants are at risk of severe stress or death.",
            action="Water immediately and check irrigation system",
            confidence=0.95,
        ),
    ),
    AdvisoryRule(
        name="soil_dry_warning",
        field=SensorField.SOIL_MOISTURE,
        predicate=lambda s: 30 <= s.soil_moisture < 50,
        advisory=Advisory(
            severity=Status.WARNING,
            title="Soil Moisture Low",
            message="Consider watering soon to maintain optimal moisture levels.",
            action="Schedule watering within 2-4 hours",
            confidence=0.85,
        ),
    ),
    AdvisoryRule(
        name="tank_empty",
        field=SensorField.WATER_LEVEL,
        predicate=lambda s: s.water_level < 20,
        advisory=Advisory(
            severity=Status.CRITICAL,
            title="Water Tank Nearly Empty",
            message="Irrigation reservoir is critically low. Watering system may fail.",
            action="Refill water tank immediately",
            confidence=0.90,
        ),
    ),
    AdvisoryRule(
        name="heat_stress",
        field=SensorField.TEMPERATURE,
        predicate=lambda s: s.temperature > 35,
        advisory=Advisory(
            severity=Status.WARNING,
            title="High Temperature Alert",
            message="Excessive heat can stress plants and increase water needs.",
            action="Provide shade or increase ventilation",
            confidence=0.80,
        ),
    ),
    AdvisoryRule(
        name="cold_stress",
        field=SensorField.TEMPERATURE,
        predicate=lambda s: s.temperature < 10,
        advisory=Advisory(
            severity=Status.WARNING,
            title="Low Temperature",
            message="Temperature is low. Consider protection for sensitive plants.",
            action="Use frost protection or heating",
            confidence=0.80,
        ),
    ),
    AdvisoryRule(
        name="low_light",
        field=SensorField.LIGHT,
        predicate=lambda s: s.light < 200,
        advisory=Advisory(
            severity=Status.WARNING,
            title="Insufficient Light",
            message="Low light levels may slow plant growth and photosynthesis.",
            action="Add supplemental lighting or relocate plants",
            confidence=0.75,
        ),
    ),
]

OPTIMAL_ADVISORY = Advisory(
    severity=Status.GOOD,
    title="Optimal Growing Conditions",
    message="All environmental parameters are within healthy ranges for plant growth.",
    action="Continue current care routine and monitor regularly",
    confidence=0.85,
)


def no_data_advisory(missing: list[SensorField]) -> Advisory:
    """Critical advisory for a snapshot with absent readings."""
    names = ", ".join(SENSOR_SPECS[f].label.lower() for f in missing) or "unknown"
    return Advisory(
        severity=Status.CRITICAL,
        title="No Sensor Data",
        message=f"No readings received for: {names}. Recommendations need complete data.",
        action="Check sensor connections and the selected data source",
        confidence=0.95,
    )


# ── Plant rules ───────────────────────────────────────────────────────────────

PLANTS_REQUIRED_FIELDS: tuple[SensorField, ...] = (
    SensorField.TEMPERATURE,
    SensorField.HUMIDITY,
    SensorField.LIGHT,
    SensorField.SOIL_MOISTURE,
)

PLANTS_UNAVAILABLE = "Waiting for sensor data to suggest plants"


def _warm(s: ReadingSnapshot) -> bool:
    return 20 <= s.temperature <= 30


PLANT_RULES: list[PlantRule] = [
    PlantRule(
        name="warm_sunny_moist",
        predicate=lambda s: _warm(s) and s.light > 500 and s.soil_moisture > 50,
        plants=("Tomatoes", "Peppers", "Basil", "Cucumbers"),
    ),
    PlantRule(
        name="warm_humid",
        predicate=lambda s: _warm(s) and s.humidity > 60,
        plants=("Tropical herbs", "Lettuce", "Spinach"),
    ),
    PlantRule(
        name="cool_season",
        predicate=lambda s: 15 <= s.temperature < 25,
        plants=("Broccoli", "Cabbage", "Peas", "Carrots"),
    ),
    PlantRule(
        name="full_sun",
        predicate=lambda s: s.light > 800,
        plants=("Sunflowers", "Marigolds", "Zinnias"),
    ),
    PlantRule(
        name="bright",
        predicate=lambda s: 400 < s.light <= 800,
        plants=("Herbs", "Leafy greens", "Strawberries"),
    ),
    PlantRule(
        name="partial_shade",
        predicate=lambda s: 200 < s.light <= 400,
        plants=("Lettuce", "Arugula", "Microgreens"),
    ),
    PlantRule(
        name="low_light",
        predicate=lambda s: s.light <= 200,
        plants=("Pothos", "Snake Plant", "ZZ Plant"),
    ),
    PlantRule(
        name="wet_tolerant",
        predicate=lambda s: s.soil_moisture > 70,
        plants=("Rice", "Watercress", "Mint"),
    ),
    PlantRule(
        name="drought_tolerant",
        predicate=lambda s: s.soil_moisture < 40,
        plants=("Succulents", "Lavender", "Rosemary"),
    ),
]
