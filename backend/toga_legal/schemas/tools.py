"""Pydantic schemas for the legal calculators."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class LiquidacionRequest(BaseModel):
    salario_mensual: Decimal
    auxilio_transporte: bool = True
    fecha_inicio: date
    fecha_fin: date


class LiquidacionResponse(BaseModel):
    dias: int
    cesantias: Decimal
    intereses_cesantias: Decimal
    prima_servicios: Decimal
    vacaciones: Decimal
    total: Decimal
    total_formateado: str
    detalle_markdown: str


class TerminoRequest(BaseModel):
    fecha_inicio: date
    dias_habiles: int = Field(..., description="Días hábiles del término")


class TerminoResponse(BaseModel):
    fecha_inicio: date
    dias_habiles: int
    fecha_vencimiento: date
    fecha_legible: str
    calendario_cubierto: bool


class IndexacionRequest(BaseModel):
    capital: Decimal
    ipc_inicial: Decimal
    ipc_final: Decimal


class IndexacionResponse(BaseModel):
    valor_indexado: Decimal
    valor_formateado: str


class DocumentoGuardadoResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    content: str
    doc_type: str
    created_at: datetime | None = None
