"""
Report export helpers.

``build_report()`` assembles one JSON-serialisable dict covering the
snapshot, per-field statuses, advisories, and plant suggestions.  The
``_meta`` / ``data`` envelope matches what ``ingestion.snapshot`` accepts, so
an exported report can be fed straight back into the CLI with ``--file``.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

from sensor_advisor.models.advisory import Advisory
from sensor_advisor.models.snapshot import ReadingSnapshot
from sensor_advisor.taxonomy.sensor_taxonomy import SensorField, Status


def build_report(
    snapshot:   ReadingSnapshot,
    statuses:   dict[SensorField, Status],
    advisories: list[Advisory],
    plants:     list[str],
    mode:       str = "basic",
) -> dict:
    """Assemble a JSON-serialisable report dict."""
    return {
        "_meta": {
            "generated_at": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
            "mode": mode,
        },
        "data": snapshot.as_dict(by_alias=True),
        "statuses": {field.alias: status.value for field, status in statuses.items()},
        "advisories": [adv.model_dump(mode="json") for adv in advisories],
        "plants": list(plants),
    }


def write_report_json(report: dict, path: Path) -> Path:
    """Write ``report`` as pretty-printed JSON (parent dirs created)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(report, indent=2, default=str), encoding="utf-8")
    return path
