"""
Prompt construction and response parsing for the external advisor.

The generative model is asked for exactly four labelled lines::

    PRIORITY: [Critical/Warning/Good]
    TITLE: [Brief descriptive title]
    ACTION: [Specific action to take]
    REASON: [Why this action is needed]

Parsing is best-effort: each missing label falls back to a safe literal, and
the priority word is mapped to a ``Status`` by substring match.  Only a reply
with NONE of the four labels is treated as malformed.
"""

from __future__ import annotations

from sensor_advisor.errors import AdvisorResponseError
from sensor_advisor.models.advisory import Advisory
from sensor_advisor.models.snapshot import ReadingSnapshot
from sensor_advisor.taxonomy.sensor_taxonomy import Status

ADVISOR_CONFIDENCE = 0.85
OPTIMAL_CONDITIONS = "optimal conditions"

_DEFAULTS: dict[str, str] = {
    "PRIORITY": "good",
    "TITLE":    "System Analysis",
    "ACTION":   "Continue monitoring",
    "REASON":   "Conditions are stable",
}


def describe_conditions(snapshot: ReadingSnapshot) -> str:
    """Summarise notable conditions as a comma-joined phrase.

    Expects a complete snapshot.  Returns ``"optimal conditions"`` when
    nothing notable is found.
    """
    s = snapshot
    conditions: list[str] = []

    if s.soil_moisture < 30:
        conditions.append("critically dry soil")
    elif s.soil_moisture < 50:
        conditions.append("moderately dry soil")
    elif s.soil_moisture > 80:
        conditions.append("very wet soil")

    if s.temperature < 10:
        conditions.append("cold temperature")
    elif s.temperature > 30:
        conditions.append("hot temperature")

    if s.humidity < 40:
        conditions.append("low humidity")
    elif s.humidity > 70:
        conditions.append("high humidity")

    if s.water_level < 20:
        conditions.append("low water tank level")

    if s.rain > 60:
        conditions.append("heavy rain detected")

    if s.light < 200:
        conditions.append("low light conditions")
    elif s.light > 800:
        conditions.append("very bright conditions")

    return ", ".join(conditions) or OPTIMAL_CONDITIONS


def build_prompt(snapshot: ReadingSnapshot) -> str:
    """Render the advisor prompt for a complete snapshot."""
    s = snapshot
    return (
        "You are an expert agricultural advisor analyzing IoT sensor data. "
        "Based on the current readings:\n"
        "\n"
        f"Soil Moisture: {s.soil_moisture:.1f}%\n"
        f"Temperature: {s.temperature:.1f}°C\n"
        f"Humidity: {s.humidity:.1f}%\n"
        f"Water Tank: {s.water_level:.1f}%\n"
        f"Rain: {s.rain:.1f}%\n"
        f"Light: {s.light:.0f} lux\n"
        "\n"
        f"Current conditions: {describe_conditions(s)}\n"
        "\n"
        "Provide specific, actionable advice in exactly this format:\n"
        "PRIORITY: [Critical/Warning/Good]\n"
        "TITLE: [Brief descriptive title]\n"
        "ACTION: [Specific action to take]\n"
        "REASON: [Why this action is needed]\n"
        "\n"
        "Focus on the most important issue. Be concise and practical."
    )


def map_priority(priority: str) -> Status:
    """Map a free-text priority word to a ``Status`` by substring match."""
    lowered = priority.lower()
    if "critical" in lowered:
        return Status.CRITICAL
    if "warning" in lowered:
        return Status.WARNING
    return Status.GOOD


def parse_response(text: str) -> Advisory:
    """Parse generated text into a single advisor ``Advisory``.

    Raises:
        AdvisorResponseError: If no labelled line is present at all.
    """
    found: dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        for label in _DEFAULTS:
            prefix = f"{label}:"
            if line.upper().startswith(prefix):
                value = line[len(prefix):].strip()
                if value:
                    found[label] = value
                break

    if not found:
        raise AdvisorResponseError(
            f"Advisor reply had no PRIORITY/TITLE/ACTION/REASON lines "
            f"({len(text)} chars)."
        )

    fields = {**_DEFAULTS, **found}
    return Advisory(
        severity=map_priority(fields["PRIORITY"]),
        title=fields["TITLE"],
        message=fields["REASON"],
        action=fields["ACTION"],
        confidence=ADVISOR_CONFIDENCE,
        source="advisor",
    )
