"""
AI Service Factory

Provides a single entry point for obtaining an AI service instance.
Selects Gemini or the local fallback based on the configured credential.

Usage:
    from carbon_trace.services.ai import create_ai_service, PromptProxy

    proxy = PromptProxy(create_ai_service(settings))
    answer = await proxy.answer("Estimate the carbon footprint of a mug")
"""

import logging

from carbon_trace.core.config import Settings
from carbon_trace.services.ai.base import BaseAIService, PromptKind
from carbon_trace.services.ai.fallback import (
    FallbackAIService,
    classify_prompt,
    fallback_answer,
)
from carbon_trace.services.ai.gemini import GeminiAIService
from carbon_trace.services.ai.proxy import PromptAnswer, PromptProxy

logger = logging.getLogger(__name__)


def create_ai_service(settings: Settings) -> BaseAIService:
    """
    Build the AI service for these settings.

    Called once per application instance; the result is shared by
    all requests.

    Returns:
        BaseAIService: GeminiAIService with a credential, FallbackAIService otherwise
    """
    if not settings.has_ai_credential:
        logger.info("AI Service: Using FallbackAIService (no API key configured)")
        return FallbackAIService()

    logger.info(f"AI Service: Using GeminiAIService ({settings.gemini_model})")
    return GeminiAIService(settings)


__all__ = [
    "create_ai_service",
    "BaseAIService",
    "FallbackAIService",
    "GeminiAIService",
    "PromptAnswer",
    "PromptKind",
    "PromptProxy",
    "classify_prompt",
    "fallback_answer",
]
