"""Tests for sensor_advisor.reporting.export."""

from __future__ import annotations

import json
from pathlib import Path

from sensor_advisor.engine.classifier import classify_snapshot
from sensor_advisor.engine.recommender import recommend, suitable_plants
from sensor_advisor.reporting.export import build_report, write_report_json


def _report(snapshot, mode: str = "basic") -> dict:
    return build_report(
        snapshot,
        classify_snapshot(snapshot),
        recommend(snapshot),
        suitable_plants(snapshot),
        mode=mode,
    )


def test_build_report_sections(optimal_snapshot) -> None:
    """Report carries meta, camelCase data, statuses, advisories, plants."""
    report = _report(optimal_snapshot, mode="advisor")

    assert set(report) == {"_meta", "data", "statuses", "advisories", "plants"}
    assert report["_meta"]["mode"] == "advisor"
    assert report["_meta"]["generated_at"].endswith("Z")
    assert report["data"]["soilMoisture"] == 65.4
    assert report["statuses"]["waterLevel"] == "good"
    assert report["advisories"][0]["severity"] == "good"
    assert report["advisories"][0]["source"] == "rules"
    assert "Herbs" in report["plants"]


def test_build_report_absent_reading_is_null(partial_snapshot) -> None:
    """Absent readings serialise as null, statuses as critical."""
    report = _report(partial_snapshot)
    assert report["data"]["rain"] is None
    assert report["statuses"]["rain"] == "critical"


def test_write_report_json(tmp_path: Path, stressed_snapshot) -> None:
    """Writes pretty JSON and creates parent directories."""
    out = tmp_path / "reports" / "latest.json"
    result = write_report_json(_report(stressed_snapshot), out)

    assert result == out
    loaded = json.loads(out.read_text(encoding="utf-8"))
    assert len(loaded["advisories"]) == 3
    assert loaded["advisories"][0]["title"] == "Urgent: Soil Critically Dry"
