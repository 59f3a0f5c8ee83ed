"""
Fallback AI Service Implementation

Answers prompts locally without calling any model.
Used when GOOGLE_API_KEY is missing or still the placeholder value,
and by the proxy when the real provider fails.

Behavior:
    - "Estimate the carbon footprint" prompts get a random
      kgCO2e figure between 0.5 and 5.5, two decimals
    - "suggestions to reduce carbon footprint" prompts get fixed advice
    - Everything else gets an apology
"""

import logging
import random
from typing import Optional

from carbon_trace.services.ai.base import BaseAIService, PromptKind

logger = logging.getLogger(__name__)


CARBON_ESTIMATE_MARKER = "Estimate the carbon footprint"
REDUCTION_SUGGESTIONS_MARKER = "suggestions to reduce carbon footprint"

ESTIMATE_MIN_KG = 0.5
ESTIMATE_MAX_KG = 5.5

REDUCTION_SUGGESTIONS_TEXT = (
    "1. Consider choosing more sustainable alternatives. "
    "2. Reduce consumption where possible. "
    "3. Look for locally produced options to reduce transportation emissions."
)
UNAVAILABLE_TEXT = "I'm unable to provide a response at this time. Please try again later."


def classify_prompt(prompt: str) -> PromptKind:
    """Pick a fallback category by plain substring match (case-sensitive)."""
    if CARBON_ESTIMATE_MARKER in prompt:
        return PromptKind.CARBON_ESTIMATE
    if REDUCTION_SUGGESTIONS_MARKER in prompt:
        return PromptKind.REDUCTION_SUGGESTIONS
    return PromptKind.GENERAL


def fallback_answer(kind: PromptKind, rng: Optional[random.Random] = None) -> str:
    """Local answer for a prompt category."""
    if kind is PromptKind.CARBON_ESTIMATE:
        estimate = (rng or random).uniform(ESTIMATE_MIN_KG, ESTIMATE_MAX_KG)
        return f"{estimate:.2f}"
    if kind is PromptKind.REDUCTION_SUGGESTIONS:
        return REDUCTION_SUGGESTIONS_TEXT
    return UNAVAILABLE_TEXT


class FallbackAIService(BaseAIService):
    """
    Local stand-in for the generative model.

    Attributes:
        rng: Random source for carbon estimates (seedable for tests)
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()
        logger.info("FallbackAIService initialized")

    @property
    def provider_name(self) -> str:
        """Return the provider name."""
        return "fallback"

    async def generate(self, prompt: str, kind: Optional[PromptKind] = None) -> str:
        """Answer from the canned responses; never fails."""
        kind = kind or classify_prompt(prompt)
        logger.debug(f"Fallback: answering {kind.value} prompt")
        return fallback_answer(kind, self.rng)
