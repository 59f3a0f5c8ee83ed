"""AI service layer without HTTP."""

import random
from types import SimpleNamespace

import pytest

from carbon_trace.core.config import Settings
from carbon_trace.schemas import PromptRequest
from carbon_trace.services.ai import (
    FallbackAIService,
    PromptKind,
    PromptProxy,
    classify_prompt,
    create_ai_service,
    fallback_answer,
)
from carbon_trace.services.ai.fallback import REDUCTION_SUGGESTIONS_TEXT, UNAVAILABLE_TEXT
from carbon_trace.services.ai.gemini import GeminiAIService
from tests.fakes import BrokenAIService, StaticAIService


@pytest.mark.parametrize(
    "prompt, expected",
    [
        ("Estimate the carbon footprint of jeans", PromptKind.CARBON_ESTIMATE),
        ("Please list suggestions to reduce carbon footprint.", PromptKind.REDUCTION_SUGGESTIONS),
        ("estimate the carbon footprint of jeans", PromptKind.GENERAL),
        ("Hello", PromptKind.GENERAL),
        ("", PromptKind.GENERAL),
    ],
)
def test_classify_prompt(prompt, expected):
    assert classify_prompt(prompt) is expected


def test_estimate_marker_wins_when_both_present():
    prompt = "Estimate the carbon footprint and give suggestions to reduce carbon footprint"

    assert classify_prompt(prompt) is PromptKind.CARBON_ESTIMATE


def test_fallback_estimate_is_seedable_and_in_range():
    first = fallback_answer(PromptKind.CARBON_ESTIMATE, random.Random(7))
    second = fallback_answer(PromptKind.CARBON_ESTIMATE, random.Random(7))

    assert first == second
    assert 0.5 <= float(first) <= 5.5
    assert len(first.split(".")[1]) == 2


def test_prompt_request_parses_kind_into_service_enum():
    request = PromptRequest(prompt="hi", kind="reduction_suggestions")

    assert request.kind is PromptKind.REDUCTION_SUGGESTIONS
    assert PromptRequest(prompt="hi").kind is None


def test_fallback_fixed_answers():
    assert fallback_answer(PromptKind.REDUCTION_SUGGESTIONS) == REDUCTION_SUGGESTIONS_TEXT
    assert fallback_answer(PromptKind.GENERAL) == UNAVAILABLE_TEXT


async def test_fallback_service_uses_explicit_kind():
    service = FallbackAIService()

    text = await service.generate("no marker", kind=PromptKind.REDUCTION_SUGGESTIONS)

    assert text == REDUCTION_SUGGESTIONS_TEXT
    assert service.is_live is False


def test_factory_without_credential_returns_fallback():
    service = create_ai_service(Settings(_env_file=None, google_api_key=None))

    assert isinstance(service, FallbackAIService)
    assert service.provider_name == "fallback"


def test_factory_with_placeholder_returns_fallback():
    settings = Settings(_env_file=None, google_api_key="your-fallback-key-here")

    assert isinstance(create_ai_service(settings), FallbackAIService)


def test_factory_with_credential_returns_gemini():
    settings = Settings(_env_file=None, google_api_key="AIza-test-key")

    service = create_ai_service(settings)

    assert isinstance(service, GeminiAIService)
    assert service.is_live is True
    assert service.provider_name == "gemini"


def test_gemini_requires_credential():
    with pytest.raises(ValueError):
        GeminiAIService(Settings(_env_file=None, google_api_key=None))


async def test_proxy_passes_live_answer_through():
    proxy = PromptProxy(StaticAIService("hello"))

    answer = await proxy.answer("anything")

    assert answer.success
    assert answer.status_code == 200
    assert answer.response == "hello"


async def test_proxy_masks_failure_for_known_kinds():
    proxy = PromptProxy(BrokenAIService(), rng=random.Random(1))

    answer = await proxy.answer("suggestions to reduce carbon footprint please")

    assert answer.success
    assert answer.response == REDUCTION_SUGGESTIONS_TEXT


async def test_proxy_reports_failure_for_general_prompts():
    proxy = PromptProxy(BrokenAIService("boom"))

    answer = await proxy.answer("Tell me a joke")

    assert not answer.success
    assert answer.status_code == 500
    assert answer.error == "boom"
    assert answer.response == UNAVAILABLE_TEXT


# =============================================================================
# GEMINI SERVICE
# =============================================================================

class FakeModels:
    """Records generate_content calls and replays a canned outcome."""

    def __init__(self, text=None, error=None):
        self.text = text
        self.error = error
        self.calls = []

    async def generate_content(self, model, contents, config):
        self.calls.append({"model": model, "contents": contents, "config": config})
        if self.error is not None:
            raise self.error
        return SimpleNamespace(text=self.text)


def _gemini_with(models: FakeModels) -> GeminiAIService:
    service = GeminiAIService(Settings(_env_file=None, google_api_key="AIza-test-key"))
    service._client = SimpleNamespace(aio=SimpleNamespace(models=models))
    return service


async def test_gemini_sends_configured_generation_parameters():
    models = FakeModels(text="2.75")
    service = _gemini_with(models)

    text = await service.generate("Estimate the carbon footprint of a mug")

    assert text == "2.75"
    assert len(models.calls) == 1
    call = models.calls[0]
    assert call["model"] == "gemini-2.5-flash-lite"
    assert call["contents"] == "Estimate the carbon footprint of a mug"
    assert call["config"].max_output_tokens == 2048
    assert call["config"].temperature == 0.7


async def test_gemini_returns_text_verbatim():
    service = _gemini_with(FakeModels(text="  Line one\nLine two  "))

    assert await service.generate("anything") == "  Line one\nLine two  "


async def test_gemini_empty_response_raises():
    service = _gemini_with(FakeModels(text=None))

    with pytest.raises(ValueError):
        await service.generate("anything")


async def test_gemini_error_propagates():
    service = _gemini_with(FakeModels(error=RuntimeError("503 UNAVAILABLE")))

    with pytest.raises(RuntimeError, match="503 UNAVAILABLE"):
        await service.generate("anything")


async def test_gemini_failure_is_masked_by_proxy_for_estimates():
    service = _gemini_with(FakeModels(error=RuntimeError("503 UNAVAILABLE")))
    proxy = PromptProxy(service, rng=random.Random(3))

    answer = await proxy.answer("Estimate the carbon footprint of a mug")

    assert answer.success
    assert answer.status_code == 200
    assert 0.5 <= float(answer.response) <= 5.5


async def test_gemini_empty_response_is_500_for_general_prompts():
    proxy = PromptProxy(_gemini_with(FakeModels(text=None)))

    answer = await proxy.answer("Tell me a joke")

    assert answer.status_code == 500
    assert answer.error == "Gemini returned an empty response"
    assert answer.response == UNAVAILABLE_TEXT
