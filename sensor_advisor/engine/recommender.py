"""
Deterministic recommendation engine.

Usage flow
----------
1. recommend(snapshot)
   -> list[Advisory]  (at most ``max_results``, rule-priority order)

2. suitable_plants(snapshot)
   -> list[str]  (deduplicated, first-seen order, at most ``limit``)

Both functions are pure: the same snapshot always yields the same output,
so a stale in-flight computation can simply be discarded when a newer
snapshot arrives.
"""

from __future__ import annotations

import logging

from sensor_advisor.engine.rules import (
    ADVISORY_RULES,
    OPTIMAL_ADVISORY,
    PLANT_RULES,
    PLANTS_REQUIRED_FIELDS,
    PLANTS_UNAVAILABLE,
    AdvisoryRule,
    PlantRule,
    no_data_advisory,
)
from sensor_advisor.models.advisory import Advisory
from sensor_advisor.models.snapshot import ReadingSnapshot

logger = logging.getLogger(__name__)

DEFAULT_MAX_ADVISORIES = 3
DEFAULT_MAX_PLANTS = 8


def recommend(
    snapshot:    ReadingSnapshot,
    max_results: int = DEFAULT_MAX_ADVISORIES,
    rules:       list[AdvisoryRule] | None = None,
) -> list[Advisory]:
    """Evaluate advisory rules against ``snapshot``.

    Rules (evaluated in priority order):
        1. Any field absent -> exactly one CRITICAL "No Sensor Data" advisory.
        2. Every rule in ``rules`` whose predicate holds appends its advisory.
        3. No rule fired    -> exactly one GOOD "Optimal Growing Conditions".

    Args:
        snapshot:    Reading snapshot to evaluate.
        max_results: Truncation limit for the returned list.
        rules:       Override rule table (defaults to ``ADVISORY_RULES``).

    Returns:
        Non-empty list of advisories, at most ``max_results`` long.
    """
    if max_results < 1:
        raise ValueError(f"max_results must be >= 1, got {max_results}.")

    missing = snapshot.missing_fields()
    if missing:
        logger.debug("recommend: missing fields %s", [f.value for f in missing])
        return [no_data_advisory(missing)]

    advisories: list[Advisory] = []
    for rule in ADVISORY_RULES if rules is None else rules:
        if rule.predicate(snapshot):
            logger.debug("recommend: rule '%s' fired", rule.name)
            advisories.append(rule.advisory)

    if not advisories:
        advisories.append(OPTIMAL_ADVISORY)

    return advisories[:max_results]


def suitable_plants(
    snapshot: ReadingSnapshot,
    limit:    int = DEFAULT_MAX_PLANTS,
    rules:    list[PlantRule] | None = None,
) -> list[str]:
    """List plants suited to the current conditions.

    Only temperature, humidity, light, and soil moisture are consulted.  If
    any of those is absent the single-element sentinel list
    ``[PLANTS_UNAVAILABLE]`` is returned instead.

    Args:
        snapshot: Reading snapshot to evaluate.
        limit:    Maximum number of plant names to return.
        rules:    Override rule table (defaults to ``PLANT_RULES``).

    Returns:
        Unique plant names in first-seen order, at most ``limit`` long.
    """
    if limit < 1:
        raise ValueError(f"limit must be >= 1, got {limit}.")

    if any(snapshot.value(f) is None for f in PLANTS_REQUIRED_FIELDS):
        return [PLANTS_UNAVAILABLE]

    plants: list[str] = []
    for rule in PLANT_RULES if rules is None else rules:
        if rule.predicate(snapshot):
            plants.extend(rule.plants)

    # dict preserves insertion order -> first-seen dedupe
    return list(dict.fromkeys(plants))[:limit]
