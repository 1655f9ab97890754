"""
Advisor capability - lifecycle of the optional external advisor.

State machine::

    UNINITIALIZED --initialize()--> INITIALIZING --warm-up ok----> READY
                                                 +-warm-up fails-> FAILED
    FAILED --initialize()--> INITIALIZING  (retry allowed)

``initialize()`` is a no-op while INITIALIZING or READY, so concurrent
callers share one warm-up.  Only READY opens the external path; every other
state means the rule engine alone is used ("basic mode").
"""

from __future__ import annotations

import logging
from enum import StrEnum
from typing import Optional

from sensor_advisor.advisor.client import TextGenerationClient

logger = logging.getLogger(__name__)


class AdvisorState(StrEnum):
    """Lifecycle state of the external advisor."""

    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"
    FAILED = "failed"


class AdvisorCapability:
    """Tracks whether the external advisor may be used.

    Attributes:
        client: Text-generation client, or ``None`` when the advisor is
            disabled in config (the capability then never leaves
            UNINITIALIZED).
        state: Current ``AdvisorState``.
        last_error: Message from the most recent failed warm-up, if any.
    """

    def __init__(self, client: Optional[TextGenerationClient]) -> None:
        self.client = client
        self.state = AdvisorState.UNINITIALIZED
        self.last_error: Optional[str] = None

    @property
    def is_ready(self) -> bool:
        return self.state is AdvisorState.READY and self.client is not None

    @property
    def available(self) -> bool:
        """User-visible toggle: ``True`` = advisor mode, ``False`` = basic mode."""
        return self.is_ready

    @property
    def mode_label(self) -> str:
        return "advisor" if self.available else "basic"

    async def initialize(self) -> AdvisorState:
        """Warm up the external service and move to READY or FAILED.

        Never raises; warm-up failures are recorded in ``last_error``.

        Returns:
            The state after the attempt.
        """
        if self.client is None:
            logger.debug("AdvisorCapability: no client configured, staying %s", self.state)
            return self.state
        if self.state in (AdvisorState.INITIALIZING, AdvisorState.READY):
            return self.state

        self._transition(AdvisorState.INITIALIZING)
        try:
            await self.client.warm_up()
        except Exception as exc:
            self.last_error = str(exc)
            self._transition(AdvisorState.FAILED)
            logger.warning("AdvisorCapability: warm-up failed - %s", exc)
        else:
            self.last_error = None
            self._transition(AdvisorState.READY)
        return self.state

    def _transition(self, new_state: AdvisorState) -> None:
        logger.info("AdvisorCapability: %s -> %s", self.state, new_state)
        self.state = new_state
