"""
Advisor service and live recommendation feed.

``AdvisorService.advise(snapshot)`` tries the external advisor and degrades to
the deterministic engine on every failure path:

    1. capability not READY           -> recommend(snapshot)
    2. snapshot has absent fields     -> recommend(snapshot)  (no-data advisory)
    3. generation raises              -> recommend(snapshot)
    4. reply is malformed             -> recommend(snapshot)
    5. otherwise                      -> [parsed advisor advisory]

``RecommendationFeed`` is what a display layer polls.  ``submit()`` always
stores the deterministic result synchronously, so ``current`` is never empty
or older than the latest snapshot.  When the advisor is READY a refinement
task is scheduled; its result only replaces ``current`` if no newer snapshot
was submitted in the meantime (last result wins).
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from sensor_advisor.advisor.capability import AdvisorCapability
from sensor_advisor.advisor.prompt import build_prompt, parse_response
from sensor_advisor.engine.recommender import DEFAULT_MAX_ADVISORIES, recommend
from sensor_advisor.models.advisory import Advisory
from sensor_advisor.models.snapshot import ReadingSnapshot

logger = logging.getLogger(__name__)


class AdvisorService:
    """Best-effort external advice with a deterministic fallback.

    Attributes:
        capability: Gate for the external path.
        max_advisories: Truncation limit passed to the rule engine.
    """

    def __init__(
        self,
        capability: AdvisorCapability,
        max_advisories: int = DEFAULT_MAX_ADVISORIES,
    ) -> None:
        self.capability = capability
        self.max_advisories = max_advisories

    def fallback(self, snapshot: ReadingSnapshot) -> list[Advisory]:
        return recommend(snapshot, max_results=self.max_advisories)

    async def advise(self, snapshot: ReadingSnapshot) -> list[Advisory]:
        """Return advisories for ``snapshot``; never raises on advisor failure."""
        if not self.capability.is_ready or not snapshot.is_complete:
            return self.fallback(snapshot)

        prompt = build_prompt(snapshot)
        try:
            text = await self.capability.client.generate(prompt)
            advisory = parse_response(text)
        except Exception as exc:
            logger.warning(
                "AdvisorService: external advice unavailable, using rules - %s", exc
            )
            return self.fallback(snapshot)

        return [advisory]


class RecommendationFeed:
    """Latest-wins holder of the advisories for the most recent snapshot.

    Attributes:
        service: ``AdvisorService`` used for refinements and fallbacks.
        current: Advisories for the latest submitted snapshot.
        generation: Count of snapshots submitted so far.
    """

    def __init__(self, service: AdvisorService) -> None:
        self.service = service
        self.current: list[Advisory] = []
        self.generation = 0
        self._pending: Optional[asyncio.Task] = None
        # strong refs until each refinement finishes
        self._tasks: set[asyncio.Task] = set()

    def submit(self, snapshot: ReadingSnapshot) -> list[Advisory]:
        """Publish a new snapshot.

        Stores and returns the deterministic advisories immediately.  If the
        advisor is READY and an event loop is running, an external
        refinement is scheduled in the background.
        """
        self.generation += 1
        self.current = self.service.fallback(snapshot)

        if self.service.capability.is_ready and snapshot.is_complete:
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError:
                logger.debug("RecommendationFeed: no running loop, skipping refinement")
            else:
                self._pending = loop.create_task(self._refine(self.generation, snapshot))
                self._tasks.add(self._pending)
                self._pending.add_done_callback(self._tasks.discard)
        return self.current

    async def settle(self) -> list[Advisory]:
        """Wait for any in-flight refinement, then return ``current``."""
        if self._pending is not None:
            await self._pending
            self._pending = None
        return self.current

    async def _refine(self, generation: int, snapshot: ReadingSnapshot) -> None:
        advisories = await self.service.advise(snapshot)
        if generation != self.generation:
            logger.debug(
                "RecommendationFeed: discarding result for generation %d (latest %d)",
                generation, self.generation,
            )
            return
        self.current = advisories
