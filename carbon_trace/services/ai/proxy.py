"""
Prompt Proxy

Sits between the HTTP layer and whichever AI service is configured,
and decides what the client sees when the provider fails:

    - carbon estimate / reduction suggestion prompts: fallback answer, 200
    - anything else: apology text plus the error, 500
"""

import logging
import random
from dataclasses import dataclass
from typing import Optional

from carbon_trace.services.ai.base import BaseAIService, PromptKind
from carbon_trace.services.ai.fallback import classify_prompt, fallback_answer

logger = logging.getLogger(__name__)


@dataclass
class PromptAnswer:
    """
    Result handed back to the route.

    Attributes:
        response: Text for the client
        status_code: HTTP status to send
        error: Provider error message when the failure is not masked
    """
    response: str
    status_code: int = 200
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error is None


class PromptProxy:
    """Forward prompts to the AI service and apply the fallback rules."""

    def __init__(self, service: BaseAIService, rng: Optional[random.Random] = None):
        self.service = service
        self.rng = rng or random.Random()

    @property
    def provider_name(self) -> str:
        return self.service.provider_name

    async def answer(self, prompt: str, kind: Optional[PromptKind] = None) -> PromptAnswer:
        if not self.service.is_live:
            logger.info("Using fallback responses - no valid API key configured")

        try:
            text = await self.service.generate(prompt, kind=kind)
        except Exception as e:
            logger.error(f"AI Error: {e}")
            resolved = kind or classify_prompt(prompt)
            fallback = fallback_answer(resolved, self.rng)

            if resolved is PromptKind.GENERAL:
                return PromptAnswer(response=fallback, status_code=500, error=str(e))
            return PromptAnswer(response=fallback)

        return PromptAnswer(response=text)
