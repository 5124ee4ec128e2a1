"""Configuración explícita leída del entorno.

Los servicios reciben estos objetos como argumento; ninguno lee variables de
entorno por su cuenta.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from decimal import Decimal

from toga_legal.core.legal_constants import AUXILIO_TRANSPORTE_2024, TASA_INTERESES_CESANTIAS

AI_PROVIDERS = {"gemini", "groq", "openrouter", "ollama"}


@dataclass(frozen=True)
class ToolsSettings:
    auxilio_transporte: Decimal = AUXILIO_TRANSPORTE_2024
    tasa_intereses_cesantias: Decimal = TASA_INTERESES_CESANTIAS

    @classmethod
    def from_env(cls) -> "ToolsSettings":
        raw = os.getenv("TOGA_AUXILIO_TRANSPORTE")
        if not raw:
            return cls()
        return cls(auxilio_transporte=Decimal(raw))


@dataclass(frozen=True)
class AISettings:
    provider: str = "gemini"
    model: str = "gemini-1.5-flash-001"
    api_key: str = ""
    ollama_url: str = "http://ollama:11434"
    timeout: int = 120

    def masked_key(self) -> str:
        if not self.api_key:
            return "<sin clave>"
        return f"...{self.api_key[-4:]}"

    @classmethod
    def from_env(cls) -> "AISettings":
        provider = os.getenv("AI_PROVIDER", "gemini").lower()
        if provider not in AI_PROVIDERS:
            raise ValueError("AI_PROVIDER inválido. Usa: gemini, groq, openrouter, ollama.")
        if provider == "groq":
            model = os.getenv("GROQ_EXTRACT_MODEL", "llama-3.3-70b-versatile")
            api_key = os.getenv("GROQ_API_KEY", "")
        elif provider == "openrouter":
            model = os.getenv("OPENROUTER_EXTRACT_MODEL", "openrouter/auto")
            api_key = os.getenv("OPENROUTER_API_KEY", "")
        elif provider == "ollama":
            model = os.getenv("OLLAMA_LLM_MODEL", "llama3.2:1b")
            api_key = ""
        else:
            model = os.getenv("GEMINI_MODEL", "gemini-1.5-flash-001")
            api_key = os.getenv("GEMINI_API_KEY", "")
        return cls(
            provider=provider,
            model=model,
            api_key=api_key,
            ollama_url=os.getenv("OLLAMA_URL", "http://ollama:11434").rstrip("/"),
            timeout=int(os.getenv("LLM_TIMEOUT_SECONDS", "120")),
        )


@dataclass(frozen=True)
class ImportSettings:
    min_text_chars: int = 50
    max_input_chars: int = 30000
    ai: AISettings = field(default_factory=AISettings)

    @classmethod
    def from_env(cls) -> "ImportSettings":
        return cls(
            min_text_chars=int(os.getenv("JURIS_MIN_TEXT_CHARS", "50")),
            max_input_chars=int(os.getenv("JURIS_MAX_INPUT_CHARS", "30000")),
            ai=AISettings.from_env(),
        )


@dataclass(frozen=True)
class StorageSettings:
    endpoint: str = "http://minio:9000"
    access_key: str = "minioadmin"
    secret_key: str = "minioadmin"
    region: str = "us-east-1"
    bucket: str = "toga-jurisprudencia"

    @classmethod
    def from_env(cls) -> "StorageSettings":
        return cls(
            endpoint=os.getenv("S3_ENDPOINT", "http://minio:9000"),
            access_key=os.getenv("S3_ACCESS_KEY", "minioadmin"),
            secret_key=os.getenv("S3_SECRET_KEY", "minioadmin"),
            region=os.getenv("S3_REGION", "us-east-1"),
            bucket=os.getenv("S3_BUCKET", "toga-jurisprudencia"),
        )


def build_database_url() -> str:
    user = os.getenv("POSTGRES_USER", "postgres")
    password = os.getenv("POSTGRES_PASSWORD", "postgres")
    host = os.getenv("POSTGRES_SERVER", "localhost")
    port = os.getenv("POSTGRES_PORT", "5432")
    db_name = os.getenv("POSTGRES_DB", "postgres")
    return f"postgresql+psycopg2://{user}:{password}@{host}:{port}/{db_name}"
