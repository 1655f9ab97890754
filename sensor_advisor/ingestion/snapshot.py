"""
Snapshot loading - read a reading snapshot from JSON.

Accepted shapes::

    {"soilMoisture": 65.4, "temperature": 24.8, ...}          # dashboard keys
    {"soil_moisture": 65.4, "temperature": 24.8, ...}         # snake_case keys
    {"_meta": {"source": "manual", ...}, "data": {...}}        # envelope

Missing keys and explicit ``null`` values both load as absent readings.  The
``_meta`` envelope is the format produced by ``reporting.export`` so a saved
report can be replayed through the CLI.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Mapping

from pydantic import ValidationError

from sensor_advisor.errors import SnapshotLoadError
from sensor_advisor.models.snapshot import ReadingSnapshot

logger = logging.getLogger(__name__)


def snapshot_from_mapping(data: Mapping[str, Any], source: str = "<mapping>") -> ReadingSnapshot:
    """Validate a mapping (flat or ``{"data": ...}`` envelope) into a snapshot.

    Raises:
        SnapshotLoadError: If the mapping is not an object or fails validation.
    """
    if not isinstance(data, Mapping):
        raise SnapshotLoadError(source, f"expected a JSON object, got {type(data).__name__}")

    payload = data["data"] if "data" in data else data
    if not isinstance(payload, Mapping):
        raise SnapshotLoadError(source, "'data' must be a JSON object")

    try:
        return ReadingSnapshot.model_validate(dict(payload))
    except ValidationError as exc:
        raise SnapshotLoadError(source, str(exc)) from exc


def load_snapshot(path: str | Path) -> ReadingSnapshot:
    """Load a reading snapshot from a JSON file.

    Args:
        path: JSON file path.

    Returns:
        Validated ``ReadingSnapshot``.

    Raises:
        SnapshotLoadError: If the file is missing, not UTF-8, not valid JSON, or
            fails validation.
    """
    path = Path(path)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise SnapshotLoadError(str(path), exc.strerror or str(exc)) from exc
    except UnicodeDecodeError as exc:
        raise SnapshotLoadError(str(path), f"not UTF-8 ({exc.reason})") from exc
    except json.JSONDecodeError as exc:
        raise SnapshotLoadError(str(path), f"invalid JSON ({exc.msg})") from exc

    snapshot = snapshot_from_mapping(raw, source=str(path))
    logger.debug(
        "Loaded snapshot from %s (missing=%s)",
        path, [f.value for f in snapshot.missing_fields()],
    )
    return snapshot
