from __future__ import annotations

import logging
import time

import requests

from toga_legal.core.config import AISettings
from toga_legal.core.errors import GenerationFailure

logger = logging.getLogger(__name__)

GEMINI_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
GROQ_URL = "https://api.groq.com/openai/v1/chat/completions"
OPENROUTER_URL = "https://openrouter.ai/api/v1/chat/completions"


class ModelProvider:
    """
    Proveedor de texto generativo: Gemini por defecto, Groq/OpenRouter como
    alternativas compatibles con OpenAI y Ollama para modelos locales.
    """

    @staticmethod
    def _require_key(settings: AISettings) -> str:
        if not settings.api_key:
            raise GenerationFailure(
                f"API Key de {settings.provider} no encontrada.",
                provider=settings.provider,
                model=settings.model,
                masked_key=settings.masked_key(),
            )
        return settings.api_key

    @staticmethod
    def _gemini_generate(settings: AISettings, prompt: str, *, system: str | None = None) -> str:
        started = time.perf_counter()
        api_key = ModelProvider._require_key(settings)
        payload: dict = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {"temperature": 0},
        }
        if system:
            payload["systemInstruction"] = {"parts": [{"text": system}]}
        res = requests.post(
            GEMINI_URL.format(model=settings.model),
            headers={"x-goog-api-key": api_key},
            json=payload,
            timeout=settings.timeout,
        )
        res.raise_for_status()
        data = res.json()
        usage = data.get("usageMetadata", {})
        elapsed_ms = int((time.perf_counter() - started) * 1000)
        logger.info(
            "llm_call provider=gemini model=%s latency_ms=%s prompt_tokens=%s completion_tokens=%s",
            settings.model,
            elapsed_ms,
            usage.get("promptTokenCount"),
            usage.get("candidatesTokenCount"),
        )
        candidates = data.get("candidates") or []
        if not candidates:
            raise GenerationFailure(
                "Gemini no devolvió candidatos.",
                provider=settings.provider,
                model=settings.model,
                masked_key=settings.masked_key(),
            )
        parts = candidates[0].get("content", {}).get("parts", [])
        return "".join(p.get("text", "") for p in parts).strip()

    @staticmethod
    def _chat_completions_generate(
        settings: AISettings, url: str, prompt: str, *, system: str | None = None
    ) -> str:
        started = time.perf_counter()
        api_key = ModelProvider._require_key(settings)
        messages = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})
        res = requests.post(
            url,
            headers={"Authorization": f"Bearer {api_key}"},
            json={"model": settings.model, "messages": messages, "temperature": 0},
            timeout=settings.timeout,
        )
        res.raise_for_status()
        data = res.json()
        usage = data.get("usage", {})
        elapsed_ms = int((time.perf_counter() - started) * 1000)
        logger.info(
            "llm_call provider=%s model=%s latency_ms=%s prompt_tokens=%s completion_tokens=%s total_tokens=%s",
            settings.provider,
            settings.model,
            elapsed_ms,
            usage.get("prompt_tokens"),
            usage.get("completion_tokens"),
            usage.get("total_tokens"),
        )
        return data["choices"][0]["message"]["content"]

    @staticmethod
    def _ollama_generate(settings: AISettings, prompt: str, *, system: str | None = None) -> str:
        started = time.perf_counter()
        url = f"{settings.ollama_url.rstrip('/')}/api/generate"
        payload = {"model": settings.model, "prompt": prompt, "stream": False}
        if system:
            payload["system"] = system
        res = requests.post(url, json=payload, timeout=settings.timeout)
        res.raise_for_status()
        data = res.json()
        elapsed_ms = int((time.perf_counter() - started) * 1000)
        logger.info(
            "llm_call provider=ollama model=%s latency_ms=%s eval_count=%s prompt_eval_count=%s",
            settings.model,
            elapsed_ms,
            data.get("eval_count"),
            data.get("prompt_eval_count"),
        )
        return data.get("response", "").strip()

    @staticmethod
    def generate(settings: AISettings, prompt: str, *, system: str | None = None) -> str:
        provider = settings.provider
        if provider == "gemini":
            return ModelProvider._gemini_generate(settings, prompt, system=system)
        if provider == "groq":
            return ModelProvider._chat_completions_generate(settings, GROQ_URL, prompt, system=system)
        if provider == "openrouter":
            return ModelProvider._chat_completions_generate(settings, OPENROUTER_URL, prompt, system=system)
        if provider == "ollama":
            return ModelProvider._ollama_generate(settings, prompt, system=system)
        raise GenerationFailure(
            f"Proveedor de IA desconocido: {provider}",
            provider=provider,
            model=settings.model,
            masked_key=settings.masked_key(),
        )
