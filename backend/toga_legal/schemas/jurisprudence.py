"""Pydantic schemas for jurisprudence import."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator

SourceType = Literal["bulletin", "upload"]


def _clean_text(v: Any) -> str | None:
    if v is None:
        return None
    if isinstance(v, (dict, list)):
        return None
    text = str(v).strip()
    if text.lower() in {"", "null", "none", "n/a"}:
        return None
    return text


class JurisprudenciaExtraida(BaseModel):
    """Ficha devuelta por la IA. Sin ``radicado`` la ficha no es utilizable."""

    model_config = ConfigDict(extra="ignore")

    radicado: str
    sentencia_id: str | None = None
    ddp_number: str | None = None
    tema: str | None = None
    tesis: str | None = None
    source_url: str | None = None

    @field_validator("radicado", mode="before")
    @classmethod
    def radicado_presente(cls, v: Any) -> str:
        text = _clean_text(v)
        if not text:
            raise ValueError("radicado vacío")
        return text

    @field_validator("sentencia_id", "ddp_number", "tema", "tesis", "source_url", mode="before")
    @classmethod
    def texto_opcional(cls, v: Any) -> str | None:
        return _clean_text(v)


class NuevaJurisprudencia(JurisprudenciaExtraida):
    source_type: SourceType = "bulletin"
    uploaded_by: str | None = None


class ImportStage(str, Enum):
    EXTRACTING = "EXTRACTING"
    GENERATING = "GENERATING"
    PARSING = "PARSING"
    COMPLETED = "COMPLETED"


class ResultadoImportacion(BaseModel):
    """Conteos de una importación.

    ``stage`` es la etapa en la que terminó la corrida: ``COMPLETED`` para
    éxito total o parcial, o la etapa que falló. ``extracted_text`` solo se
    conserva si falló la generación, para poder reintentarla.
    """

    saved: int = 0
    skipped: int = 0
    errors: list[str] = []
    stage: ImportStage = ImportStage.COMPLETED
    extracted_text: str | None = None


class JurisprudenciaResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    radicado: str
    sentencia_id: str | None = None
    ddp_number: str | None = None
    tema: str | None = None
    tesis: str | None = None
    source_url: str | None = None
    source_type: str
    analysis_level: str
    created_at: datetime | None = None


class ImportQueuedResponse(BaseModel):
    status: str
    task_id: str
    filename: str
