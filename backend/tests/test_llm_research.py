"""LLM research provider with the LLM call mocked out."""

import pytest

from labelscan.errors import ResearchProviderFailure
from labelscan.services.personalization import ADULT_DAILY_LIMIT, CHILD_CAVEAT
from labelscan.services.reference.models import SafetyLevel
from labelscan.services.research.llm_research import LlmResearchProvider, _parse_safety_level, _parse_sources


class FakePrediction:
    def __init__(self, **fields):
        self.__dict__.update(fields)


def _mock_llm(monkeypatch, **fields):
    captured = {}

    def fake_run(*args, **kwargs):
        captured.update(kwargs)
        return FakePrediction(**fields)

    monkeypatch.setattr("labelscan.services.research.llm_research.run_with_logging", fake_run)
    return captured


def test_llm_research_parses_prediction(monkeypatch):
    captured = _mock_llm(
        monkeypatch,
        definition="Gellan gum is a thickener made by fermentation.",
        health_impacts="Considered safe at normal intake.",
        safety_level="Safe",
        daily_limit="none",
        sources="FDA, EFSA",
    )
    result = LlmResearchProvider().research("Gellan gum", 30)
    assert captured["prompt_name"] == "ingredient_research"
    assert captured["user_age"] == "30"
    assert result.safety_level is SafetyLevel.SAFE
    assert result.daily_limit == ADULT_DAILY_LIMIT
    assert result.sources == ("FDA", "EFSA")
    assert result.health_impacts == "Considered safe at normal intake."


def test_llm_research_adds_child_caveat(monkeypatch):
    captured = _mock_llm(
        monkeypatch,
        definition="d",
        health_impacts="Limit intake.",
        safety_level="caution",
        daily_limit="10mg/kg",
        sources="",
    )
    result = LlmResearchProvider().research("Carrageenan", 9)
    assert result.health_impacts.endswith(CHILD_CAVEAT)
    assert result.daily_limit == "10mg/kg"
    assert result.sources == ("LLM research",)
    assert captured["user_age"] == "9"


def test_llm_failure_raises_provider_failure(monkeypatch):
    def boom(*args, **kwargs):
        raise TimeoutError("llm timed out")

    monkeypatch.setattr("labelscan.services.research.llm_research.run_with_logging", boom)
    with pytest.raises(ResearchProviderFailure) as exc_info:
        LlmResearchProvider().research("Carrageenan", None)
    assert exc_info.value.ingredient_text == "Carrageenan"


def test_empty_llm_response_is_failure(monkeypatch):
    _mock_llm(monkeypatch, definition="", health_impacts="  ", safety_level="", daily_limit="", sources="")
    with pytest.raises(ResearchProviderFailure):
        LlmResearchProvider().research("???", 30)


def test_parse_safety_level():
    assert _parse_safety_level("Warning.") is SafetyLevel.WARNING
    assert _parse_safety_level("level: safe") is SafetyLevel.SAFE
    assert _parse_safety_level("dangerous") is SafetyLevel.CAUTION
    assert _parse_safety_level(None) is SafetyLevel.CAUTION


def test_parse_sources():
    assert _parse_sources("- FDA\n- WHO") == ["FDA", "WHO"]
    assert _parse_sources("") == []
