"""
Sensor Advisor - CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Build a ``ReadingSnapshot`` from ``--file`` or the per-field options.
  4. Run the classifier / rule engine (and optionally the external advisor).
  5. Report result to stdout.

Install and run::

    pip install -e .
    sensor-advisor --help
    sensor-advisor validate-config
    sensor-advisor status --soil-moisture 18 --temperature 24 ...
    sensor-advisor recommend --file snapshot.json --advisor
    sensor-advisor plants --file snapshot.json
    sensor-advisor report --file snapshot.json --json out/report.json

Fields left unset on the command line are treated as absent readings.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(
    name="sensor-advisor",
    help="Environmental sensor status, care advisories, and plant suggestions.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from sensor_advisor.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except Exception as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from sensor_advisor.utils.logging import configure_logging
    configure_logging(config.logging)


def _snapshot_or_exit(
    file: Optional[str],
    soil_moisture: Optional[float],
    temperature: Optional[float],
    humidity: Optional[float],
    water_level: Optional[float],
    rain: Optional[float],
    light: Optional[float],
):
    """Build a snapshot from ``--file`` or field options, exiting on error."""
    from pydantic import ValidationError

    from sensor_advisor.errors import SnapshotLoadError
    from sensor_advisor.ingestion.snapshot import load_snapshot
    from sensor_advisor.models.snapshot import ReadingSnapshot

    if file:
        try:
            return load_snapshot(file)
        except SnapshotLoadError as exc:
            typer.echo(f"[ERROR] {exc}", err=True)
            raise typer.Exit(code=1)

    try:
        return ReadingSnapshot(
            soil_moisture=soil_moisture,
            temperature=temperature,
            humidity=humidity,
            water_level=water_level,
            rain=rain,
            light=light,
        )
    except ValidationError as exc:
        typer.echo(f"[ERROR] Invalid reading: {exc}", err=True)
        raise typer.Exit(code=1)


async def _advise_with_external(config, snapshot):
    """Initialise the external advisor and return (advisories, mode_label)."""
    from sensor_advisor.advisor.capability import AdvisorCapability
    from sensor_advisor.advisor.client import TextGenerationClient
    from sensor_advisor.advisor.service import AdvisorService

    async with TextGenerationClient(config.advisor) as client:
        capability = AdvisorCapability(client)
        await capability.initialize()
        service = AdvisorService(capability, max_advisories=config.engine.max_advisories)
        advisories = await service.advise(snapshot)
        return advisories, capability.mode_label


def _compute_advisories(config, snapshot, use_advisor: bool):
    from sensor_advisor.engine.recommender import recommend

    if use_advisor and config.advisor.enabled:
        return asyncio.run(_advise_with_external(config, snapshot))
    if use_advisor:
        typer.echo(
            "[WARN] External advisor is disabled in config ([advisor] enabled = false); "
            "using rule engine.",
            err=True,
        )
    return recommend(snapshot, max_results=config.engine.max_advisories), "basic"


# Shared per-field options
_FILE_OPT = typer.Option(None, "--file", "-f", help="JSON snapshot file (camelCase or snake_case keys).")
_CONFIG_OPT = typer.Option(None, "--config", help="Path to TOML config file.")
_SOIL_OPT = typer.Option(None, "--soil-moisture", help="Soil moisture (%).")
_TEMP_OPT = typer.Option(None, "--temperature", help="Air temperature (°C).")
_HUM_OPT = typer.Option(None, "--humidity", help="Relative humidity (%).")
_WATER_OPT = typer.Option(None, "--water-level", help="Water tank level (%).")
_RAIN_OPT = typer.Option(None, "--rain", help="Rain sensor (%).")
_LIGHT_OPT = typer.Option(None, "--light", help="Light intensity (lux).")


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file (default: config/default.toml).",
    ),
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file and print parsed values.

    Exits with code 1 if the config fails validation.
    """
    config = _load_config_or_exit(config_path)

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Max advisories:   {config.engine.max_advisories}")
    typer.echo(f"  Max plants:       {config.engine.max_plants}")
    typer.echo(f"  Advisor enabled:  {config.advisor.enabled}")
    typer.echo(f"  Advisor model:    {config.advisor.model}")
    typer.echo(f"  Log level:        {config.logging.level}")
    typer.echo(f"  Debug mode:       {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(), indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config valid.")


@app.command("status")
def status(
    file: Optional[str] = _FILE_OPT,
    soil_moisture: Optional[float] = _SOIL_OPT,
    temperature: Optional[float] = _TEMP_OPT,
    humidity: Optional[float] = _HUM_OPT,
    water_level: Optional[float] = _WATER_OPT,
    rain: Optional[float] = _RAIN_OPT,
    light: Optional[float] = _LIGHT_OPT,
    config_path: Optional[str] = _CONFIG_OPT,
) -> None:
    """Classify each sensor reading as Optimal / Attention / Critical."""
    from sensor_advisor.engine.classifier import classify_snapshot
    from sensor_advisor.reporting.formatters import format_status_board

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    snapshot = _snapshot_or_exit(file, soil_moisture, temperature, humidity, water_level, rain, light)

    typer.echo(format_status_board(snapshot, classify_snapshot(snapshot)))


@app.command("recommend")
def recommend_cmd(
    file: Optional[str] = _FILE_OPT,
    soil_moisture: Optional[float] = _SOIL_OPT,
    temperature: Optional[float] = _TEMP_OPT,
    humidity: Optional[float] = _HUM_OPT,
    water_level: Optional[float] = _WATER_OPT,
    rain: Optional[float] = _RAIN_OPT,
    light: Optional[float] = _LIGHT_OPT,
    use_advisor: bool = typer.Option(
        False,
        "--advisor",
        help="Try the external text-generation advisor first (falls back to rules).",
    ),
    config_path: Optional[str] = _CONFIG_OPT,
) -> None:
    """Print prioritised care advisories for a snapshot."""
    from sensor_advisor.reporting.formatters import format_advisories

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    snapshot = _snapshot_or_exit(file, soil_moisture, temperature, humidity, water_level, rain, light)

    advisories, mode = _compute_advisories(config, snapshot, use_advisor)
    typer.echo(format_advisories(advisories, mode_label=mode))


@app.command("plants")
def plants(
    file: Optional[str] = _FILE_OPT,
    soil_moisture: Optional[float] = _SOIL_OPT,
    temperature: Optional[float] = _TEMP_OPT,
    humidity: Optional[float] = _HUM_OPT,
    water_level: Optional[float] = _WATER_OPT,
    rain: Optional[float] = _RAIN_OPT,
    light: Optional[float] = _LIGHT_OPT,
    config_path: Optional[str] = _CONFIG_OPT,
) -> None:
    """List plants and crops suited to the current conditions."""
    from sensor_advisor.engine.recommender import suitable_plants
    from sensor_advisor.reporting.formatters import format_plants

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    snapshot = _snapshot_or_exit(file, soil_moisture, temperature, humidity, water_level, rain, light)

    typer.echo(format_plants(suitable_plants(snapshot, limit=config.engine.max_plants)))


@app.command("report")
def report(
    file: Optional[str] = _FILE_OPT,
    soil_moisture: Optional[float] = _SOIL_OPT,
    temperature: Optional[float] = _TEMP_OPT,
    humidity: Optional[float] = _HUM_OPT,
    water_level: Optional[float] = _WATER_OPT,
    rain: Optional[float] = _RAIN_OPT,
    light: Optional[float] = _LIGHT_OPT,
    use_advisor: bool = typer.Option(
        False,
        "--advisor",
        help="Try the external text-generation advisor first (falls back to rules).",
    ),
    json_path: Optional[str] = typer.Option(
        None,
        "--json",
        help="Also write the full report as JSON to this path.",
    ),
    config_path: Optional[str] = _CONFIG_OPT,
) -> None:
    """Print the status board, advisories, and plant suggestions together."""
    from sensor_advisor.engine.classifier import classify_snapshot
    from sensor_advisor.engine.recommender import suitable_plants
    from sensor_advisor.reporting.export import build_report, write_report_json
    from sensor_advisor.reporting.formatters import (
        format_advisories,
        format_plants,
        format_status_board,
    )

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    snapshot = _snapshot_or_exit(file, soil_moisture, temperature, humidity, water_level, rain, light)

    statuses = classify_snapshot(snapshot)
    advisories, mode = _compute_advisories(config, snapshot, use_advisor)
    plant_list = suitable_plants(snapshot, limit=config.engine.max_plants)

    typer.echo(format_status_board(snapshot, statuses))
    typer.echo(format_advisories(advisories, mode_label=mode))
    typer.echo(format_plants(plant_list))

    if json_path:
        out = write_report_json(
            build_report(snapshot, statuses, advisories, plant_list, mode=mode),
            Path(json_path),
        )
        typer.echo("")
        typer.echo(f"[OK] Report written to {out}")


# ── Entry point ───────────────────────────────────────────────────────────────

if __name__ == "__main__":
    app()
