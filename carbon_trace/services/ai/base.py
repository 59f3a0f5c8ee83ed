"""
AI Service Abstract Base Class

Defines the interface contract for all text-generation implementations.
Both FallbackAIService and GeminiAIService must implement these methods.

Use Cases:
    - Carbon footprint estimates for order items
    - Suggestions for reducing an order's footprint
    - Free-form questions from the front-end
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional


class PromptKind(str, Enum):
    """Prompt categories that have a local fallback answer."""
    CARBON_ESTIMATE = "carbon_estimate"
    REDUCTION_SUGGESTIONS = "reduction_suggestions"
    GENERAL = "general"


class BaseAIService(ABC):
    """
    Abstract base class for text-generation services.

    Example:
        >>> service = create_ai_service(settings)
        >>> text = await service.generate("Estimate the carbon footprint of a mug")
    """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """
        Return the name of the AI provider.

        Returns:
            str: Provider name (e.g., "fallback", "gemini")
        """
        pass

    @property
    def is_live(self) -> bool:
        """Whether answers come from a real model."""
        return False

    @abstractmethod
    async def generate(self, prompt: str, kind: Optional[PromptKind] = None) -> str:
        """
        Produce an answer for a prompt.

        Args:
            prompt: Free-text prompt
            kind: Explicit category; only local fallbacks use it

        Returns:
            str: Answer text, returned to the client verbatim

        Raises:
            Exception: Any provider failure; the proxy decides how to mask it
        """
        pass
