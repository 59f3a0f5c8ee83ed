"""
Gemini AI Service Implementation

Production implementation using the Google Gen AI SDK.
Used whenever GOOGLE_API_KEY holds a real credential.

API Documentation:
    https://ai.google.dev/gemini-api/docs
"""

import logging
from datetime import datetime
from typing import Optional

from google import genai
from google.genai import types

from carbon_trace.core.config import Settings
from carbon_trace.services.ai.base import BaseAIService, PromptKind

logger = logging.getLogger(__name__)


class GeminiAIService(BaseAIService):
    """
    Text generation through a Gemini model.

    Generation parameters (model, output bound, temperature) come from
    settings and are the same for every prompt.

    Example:
        >>> service = GeminiAIService(settings)
        >>> text = await service.generate("Estimate the carbon footprint of a mug")
    """

    def __init__(self, settings: Settings):
        """
        Initialize the Gen AI client with the configured key.

        Raises:
            ValueError: If no usable GOOGLE_API_KEY is configured
        """
        if not settings.has_ai_credential:
            raise ValueError(
                "GOOGLE_API_KEY is required for GeminiAIService. "
                "Set it in your .env file or environment variables."
            )

        self._client = genai.Client(api_key=settings.google_api_key)
        self._model = settings.gemini_model
        self._config = types.GenerateContentConfig(
            max_output_tokens=settings.ai_max_output_tokens,
            temperature=settings.ai_temperature,
        )

        logger.info(f"GeminiAIService initialized (model={self._model})")

    @property
    def provider_name(self) -> str:
        """Return the provider name."""
        return "gemini"

    @property
    def is_live(self) -> bool:
        return True

    async def generate(self, prompt: str, kind: Optional[PromptKind] = None) -> str:
        """
        Send the prompt to Gemini and return its text.

        Raises:
            google.genai.errors.APIError: On provider errors
            ValueError: If the model returned no text (e.g. blocked output)
        """
        start_time = datetime.now()

        try:
            response = await self._client.aio.models.generate_content(
                model=self._model,
                contents=prompt,
                config=self._config,
            )
        except Exception as e:
            logger.error(f"Gemini: Error generating response - {e}")
            raise

        elapsed_ms = (datetime.now() - start_time).total_seconds() * 1000
        text = response.text

        if text is None:
            logger.error("Gemini: Response contained no text")
            raise ValueError("Gemini returned an empty response")

        logger.info(f"Gemini: Response received in {elapsed_ms:.0f}ms")
        logger.debug(f"Gemini: {text}")
        return text
