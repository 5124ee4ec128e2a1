from __future__ import annotations

from decimal import Decimal

import pytest
import requests

from toga_legal.core import ai_provider
from toga_legal.core.ai_provider import ModelProvider
from toga_legal.core.config import AISettings, ImportSettings, ToolsSettings
from toga_legal.core.errors import GenerationFailure
from toga_legal.services.llm import LLMService


class FakeResponse:
    def __init__(self, payload: dict, status: int = 200):
        self.payload = payload
        self.status_code = status

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Server Error")

    def json(self):
        return self.payload


def _capture_post(monkeypatch, response: FakeResponse) -> list[dict]:
    calls: list[dict] = []

    def fake_post(url, headers=None, json=None, timeout=None):
        calls.append({"url": url, "headers": headers or {}, "json": json, "timeout": timeout})
        return response

    monkeypatch.setattr(ai_provider.requests, "post", fake_post)
    return calls


def test_missing_key_fails_without_network(monkeypatch):
    calls = _capture_post(monkeypatch, FakeResponse({}))
    with pytest.raises(GenerationFailure) as info:
        ModelProvider.generate(AISettings(provider="gemini", api_key=""), "hola")
    assert info.value.masked_key == "<sin clave>"
    assert calls == []


def test_gemini_response_text_is_joined(monkeypatch):
    payload = {
        "candidates": [{"content": {"parts": [{"text": '[{"radicado": '}, {"text": '"52059"}]'}]}}],
        "usageMetadata": {"promptTokenCount": 10, "candidatesTokenCount": 5},
    }
    calls = _capture_post(monkeypatch, FakeResponse(payload))
    settings = AISettings(api_key="AIza-test-abcd", timeout=30)

    out = ModelProvider.generate(settings, "extrae", system="solo JSON")

    assert out == '[{"radicado": "52059"}]'
    assert calls[0]["url"].endswith("gemini-1.5-flash-001:generateContent")
    assert calls[0]["headers"] == {"x-goog-api-key": "AIza-test-abcd"}
    assert calls[0]["json"]["systemInstruction"]["parts"][0]["text"] == "solo JSON"
    assert calls[0]["timeout"] == 30


def test_gemini_without_candidates_is_a_generation_failure(monkeypatch):
    _capture_post(monkeypatch, FakeResponse({"candidates": []}))
    with pytest.raises(GenerationFailure):
        ModelProvider.generate(AISettings(api_key="k"), "extrae")


def test_openrouter_uses_bearer_token(monkeypatch):
    payload = {"choices": [{"message": {"content": "[]"}}], "usage": {"total_tokens": 3}}
    calls = _capture_post(monkeypatch, FakeResponse(payload))
    settings = AISettings(provider="openrouter", model="openrouter/auto", api_key="sk-or-1234")

    assert ModelProvider.generate(settings, "extrae") == "[]"
    assert calls[0]["url"] == ai_provider.OPENROUTER_URL
    assert calls[0]["headers"]["Authorization"] == "Bearer sk-or-1234"
    assert calls[0]["json"]["model"] == "openrouter/auto"


def test_ollama_needs_no_key(monkeypatch):
    calls = _capture_post(monkeypatch, FakeResponse({"response": " [] "}))
    settings = AISettings(provider="ollama", model="llama3.2:1b", ollama_url="http://localhost:11434/")
    assert ModelProvider.generate(settings, "extrae") == "[]"
    assert calls[0]["url"] == "http://localhost:11434/api/generate"


def test_llm_service_wraps_http_errors(monkeypatch):
    _capture_post(monkeypatch, FakeResponse({}, status=503))
    settings = AISettings(api_key="AIza-test-abcd")
    with pytest.raises(GenerationFailure) as info:
        LLMService.generate_jurisprudence_records("texto", "bulletin", settings)
    assert info.value.model == "gemini-1.5-flash-001"
    assert info.value.masked_key == "...abcd"
    assert "503" in str(info.value)


def test_llm_service_picks_prompt_by_source_type(monkeypatch):
    payload = {"candidates": [{"content": {"parts": [{"text": "[]"}]}}]}
    calls = _capture_post(monkeypatch, FakeResponse(payload))
    settings = AISettings(api_key="k")

    LLMService.generate_jurisprudence_records("BOLETIN X", "bulletin", settings)
    LLMService.generate_jurisprudence_records("SENTENCIA Y", "upload", settings)

    bulletin_prompt = calls[0]["json"]["contents"][0]["parts"][0]["text"]
    sentence_prompt = calls[1]["json"]["contents"][0]["parts"][0]["text"]
    assert "Boletín Jurisprudencial" in bulletin_prompt
    assert bulletin_prompt.rstrip().endswith("BOLETIN X")
    assert "UNA sola ficha" in sentence_prompt
    assert sentence_prompt.rstrip().endswith("SENTENCIA Y")


def test_ai_settings_from_env(monkeypatch):
    monkeypatch.setenv("AI_PROVIDER", "Groq")
    monkeypatch.setenv("GROQ_API_KEY", "gsk_abc9876")
    monkeypatch.setenv("LLM_TIMEOUT_SECONDS", "45")
    monkeypatch.delenv("GROQ_EXTRACT_MODEL", raising=False)

    settings = AISettings.from_env()

    assert settings.provider == "groq"
    assert settings.model == "llama-3.3-70b-versatile"
    assert settings.timeout == 45
    assert settings.masked_key() == "...9876"


def test_invalid_provider_is_rejected(monkeypatch):
    monkeypatch.setenv("AI_PROVIDER", "watson")
    with pytest.raises(ValueError):
        AISettings.from_env()


def test_import_settings_from_env(monkeypatch):
    monkeypatch.setenv("AI_PROVIDER", "ollama")
    monkeypatch.setenv("JURIS_MAX_INPUT_CHARS", "1000")
    settings = ImportSettings.from_env()
    assert settings.max_input_chars == 1000
    assert settings.min_text_chars == 50
    assert settings.ai.provider == "ollama"


def test_tools_settings_from_env(monkeypatch):
    monkeypatch.delenv("TOGA_AUXILIO_TRANSPORTE", raising=False)
    assert ToolsSettings.from_env().auxilio_transporte == Decimal("162000")
    monkeypatch.setenv("TOGA_AUXILIO_TRANSPORTE", "200000")
    assert ToolsSettings.from_env().auxilio_transporte == Decimal("200000")
