"""
Text-generation service client (Hugging Face Inference API shape).

Endpoint::

    POST {base_url}/models/{model}
    Authorization: Bearer {HF_API_TOKEN}        (optional)
    {"inputs": "<prompt>",
     "parameters": {"max_new_tokens": 200, "temperature": 0.3, "do_sample": true,
                    "top_p": 0.9, "repetition_penalty": 1.1,
                    "return_full_text": false}}

Response is either ``[{"generated_text": "..."}]`` or
``{"generated_text": "..."}``.  Some backends ignore ``return_full_text`` and
echo the prompt, so the prompt is stripped from the reply when present.

Credential setup (.env, gitignored):
  HF_API_TOKEN=hf_xxx

Every failure (transport, non-2xx status, unexpected JSON shape) is raised as
``TextGenerationError`` so callers only need to catch one type.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Optional

import httpx

from sensor_advisor.config import AdvisorConfig
from sensor_advisor.errors import TextGenerationError

logger = logging.getLogger(__name__)


class TextGenerationClient:
    """Async client for a hosted text-generation model.

    Usage::

        async with TextGenerationClient(config.advisor) as client:
            text = await client.generate(prompt)

    Attributes:
        config: Advisor settings (endpoint, model, sampling parameters).
        api_token: Bearer token, defaulting to ``HF_API_TOKEN`` from the env.
    """

    def __init__(
        self,
        config: AdvisorConfig,
        api_token: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Initialise the client.

        Args:
            config: ``AdvisorConfig`` section from ``AppConfig``.
            api_token: Explicit token; ``None`` reads ``HF_API_TOKEN``.
            transport: Optional httpx transport (tests pass ``MockTransport``).
        """
        self.config = config
        self.api_token = api_token if api_token is not None else os.environ.get("HF_API_TOKEN")
        headers = {"Content-Type": "application/json"}
        if self.api_token:
            headers["Authorization"] = f"Bearer {self.api_token}"
        self._http = httpx.AsyncClient(
            base_url=config.base_url.rstrip("/"),
            headers=headers,
            timeout=config.timeout_s,
            transport=transport,
        )

    @property
    def endpoint(self) -> str:
        return f"/models/{self.config.model}"

    async def __aenter__(self) -> "TextGenerationClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    # ── Public API ─────────────────────────────────────────────────────────────

    async def generate(self, prompt: str, max_new_tokens: Optional[int] = None) -> str:
        """Generate a continuation of ``prompt``.

        Args:
            prompt: Plain-text prompt.
            max_new_tokens: Override for ``config.max_new_tokens``.

        Returns:
            Generated text with any echoed prompt removed, stripped.

        Raises:
            TextGenerationError: On transport failure, non-2xx status, or an
                unexpected response body.
        """
        cfg = self.config
        payload = {
            "inputs": prompt,
            "parameters": {
                "max_new_tokens": max_new_tokens or cfg.max_new_tokens,
                "temperature": cfg.temperature,
                "do_sample": cfg.do_sample,
                "top_p": cfg.top_p,
                "repetition_penalty": cfg.repetition_penalty,
                "return_full_text": False,
            },
        }

        try:
            resp = await self._http.post(self.endpoint, json=payload)
        except httpx.HTTPError as exc:
            raise TextGenerationError(f"Text generation request failed: {exc}") from exc

        if resp.is_error:
            raise TextGenerationError(
                f"Text generation service returned HTTP {resp.status_code}.",
                status_code=resp.status_code,
            )

        try:
            body = resp.json()
        except ValueError as exc:
            raise TextGenerationError("Text generation response was not JSON.") from exc

        text = _extract_generated_text(body)
        logger.debug("TextGenerationClient: %d chars generated", len(text))
        return text.replace(prompt, "").strip()

    async def warm_up(self) -> None:
        """Probe the service with a one-token generation.

        Raises:
            TextGenerationError: If the service is unreachable or unusable.
        """
        await self.generate("Hello", max_new_tokens=1)


def _extract_generated_text(body: Any) -> str:
    """Pull ``generated_text`` out of a list- or dict-shaped response."""
    output = body[0] if isinstance(body, list) and body else body
    if isinstance(output, dict):
        if "error" in output and "generated_text" not in output:
            raise TextGenerationError(f"Text generation service error: {output['error']}")
        text = output.get("generated_text")
        if isinstance(text, str):
            return text
    raise TextGenerationError("Text generation response missing 'generated_text'.")
