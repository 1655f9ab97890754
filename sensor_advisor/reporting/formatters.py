"""
ASCII terminal formatters for CLI reporting commands.

All formatters accept domain objects and return plain multi-line strings
suitable for ``typer.echo()``.

No third-party dependencies (no ``rich``, no ``colorama``).

Status board
------------
One row per sensor channel, then the most severe status overall::

    Sensor               Value  Unit   Status     Range    About
    ----------------------------------------------------------------------------
    Soil Moisture         65.4  %      Optimal    0-100    Plant root zone hydration
    Light Intensity        450  lux    Optimal    0-1000   Ambient light levels
    Rain Sensor           null  %      Critical   0-100    Precipitation detection

    Overall: Critical
"""

from __future__ import annotations

from typing import Optional

from sensor_advisor.engine.classifier import worst_status
from sensor_advisor.models.advisory import Advisory
from sensor_advisor.models.snapshot import ReadingSnapshot
from sensor_advisor.taxonomy.sensor_taxonomy import SENSOR_SPECS, SensorField, Status

_SEVERITY_TAGS: dict[Status, str] = {
    Status.GOOD:     "[OK]",
    Status.WARNING:  "[WARN]",
    Status.CRITICAL: "[CRIT]",
}


def format_value(field: SensorField, value: Optional[float]) -> str:
    """Render a reading with the field's display precision (``null`` if absent)."""
    if value is None:
        return "null"
    return f"{value:.{SENSOR_SPECS[field].decimals}f}"


# ── Status board ──────────────────────────────────────────────────────────────


def format_status_board(
    snapshot: ReadingSnapshot,
    statuses: dict[SensorField, Status],
) -> str:
    """Format per-field readings, their statuses, and the overall verdict."""
    lines: list[str] = []
    lines.append("")
    lines.append("=== Sensor Status ===")
    header = f"  {'Sensor':<16}  {'Value':>8}  {'Unit':<5}  {'Status':<9}  {'Range':<7}  About"
    lines.append(header)
    lines.append("  " + "-" * (len(header) - 2))
    for field in SensorField:
        spec   = SENSOR_SPECS[field]
        status = statuses[field]
        rng    = f"{spec.display_min:g}-{spec.display_max:g}"
        lines.append(
            f"  {spec.label:<16}  {format_value(field, snapshot.value(field)):>8}  "
            f"{spec.unit:<5}  {status.label:<9}  {rng:<7}  {spec.description}"
        )
    lines.append("")
    lines.append(f"  Overall: {worst_status(statuses).label}")
    return "\n".join(lines)


# ── Advisories ────────────────────────────────────────────────────────────────


def format_advisories(advisories: list[Advisory], mode_label: str = "basic") -> str:
    """Format advisories in priority order, one block each."""
    lines: list[str] = []
    lines.append("")
    lines.append(f"=== Smart Recommendations ({mode_label} mode) ===")

    if not advisories:
        lines.append("  (no recommendations)")
        return "\n".join(lines)

    for adv in advisories:
        lines.append("")
        lines.append(f"  {_SEVERITY_TAGS[adv.severity]:<6} {adv.title}")
        lines.append(f"         {adv.message}")
        lines.append(f"         -> {adv.action}")
        lines.append(f"         confidence {adv.confidence:.0%} | source {adv.source}")
    return "\n".join(lines)


# ── Plants ────────────────────────────────────────────────────────────────────


def format_plants(plants: list[str]) -> str:
    """Format the suitable-plant list as a bulleted block."""
    lines = ["", "=== Suitable Plants & Crops ==="]
    lines.extend(f"  - {p}" for p in plants)
    return "\n".join(lines)
