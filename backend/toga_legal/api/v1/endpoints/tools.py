"""Legal calculator endpoints (liquidación, términos, indexación)."""

from __future__ import annotations

from decimal import Decimal

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from toga_legal.core.config import ToolsSettings
from toga_legal.core.errors import InvalidInput
from toga_legal.db.models import DocumentoGuardado
from toga_legal.db.session import get_db
from toga_legal.schemas.tools import (
    DocumentoGuardadoResponse,
    IndexacionRequest,
    IndexacionResponse,
    LiquidacionRequest,
    LiquidacionResponse,
    TerminoRequest,
    TerminoResponse,
)
from toga_legal.services.business_days import add_business_days, calendar_covers, format_fecha_larga
from toga_legal.services.indexation import DatosIndexacion, compute_indexed_value, format_cop
from toga_legal.services.labor_settlement import (
    DatosLiquidacion,
    compute_settlement,
    render_settlement_markdown,
)

router = APIRouter(tags=["tools"])

DOC_TYPE_LIQUIDACION = "Liquidación Laboral"


def get_tools_settings() -> ToolsSettings:
    return ToolsSettings.from_env()


def _liquidacion(payload: LiquidacionRequest, settings: ToolsSettings) -> LiquidacionResponse:
    datos = DatosLiquidacion(
        salario_mensual=payload.salario_mensual,
        auxilio_transporte=payload.auxilio_transporte,
        fecha_inicio=payload.fecha_inicio,
        fecha_fin=payload.fecha_fin,
    )
    try:
        resultado = compute_settlement(datos, settings)
    except InvalidInput as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
    return LiquidacionResponse(
        dias=resultado.dias,
        cesantias=resultado.cesantias,
        intereses_cesantias=resultado.intereses_cesantias,
        prima_servicios=resultado.prima_servicios,
        vacaciones=resultado.vacaciones,
        total=resultado.total,
        total_formateado=format_cop(resultado.total),
        detalle_markdown=render_settlement_markdown(datos, resultado),
    )


@router.post("/liquidacion-laboral", response_model=LiquidacionResponse)
def labor_settlement(
    payload: LiquidacionRequest,
    settings: ToolsSettings = Depends(get_tools_settings),
) -> LiquidacionResponse:
    return _liquidacion(payload, settings)


@router.post(
    "/liquidacion-laboral/guardar",
    response_model=DocumentoGuardadoResponse,
    status_code=status.HTTP_201_CREATED,
)
def save_labor_settlement(
    payload: LiquidacionRequest,
    settings: ToolsSettings = Depends(get_tools_settings),
    db: Session = Depends(get_db),
) -> DocumentoGuardadoResponse:
    resultado = _liquidacion(payload, settings)
    doc = DocumentoGuardado(
        title=f"Liquidación {payload.fecha_inicio.isoformat()} a {payload.fecha_fin.isoformat()}",
        content=resultado.detalle_markdown,
        doc_type=DOC_TYPE_LIQUIDACION,
    )
    db.add(doc)
    db.commit()
    db.refresh(doc)
    return DocumentoGuardadoResponse.model_validate(doc)


@router.get("/liquidaciones", response_model=list[DocumentoGuardadoResponse])
def list_saved_settlements(db: Session = Depends(get_db)) -> list[DocumentoGuardadoResponse]:
    docs = db.scalars(
        select(DocumentoGuardado)
        .where(DocumentoGuardado.doc_type == DOC_TYPE_LIQUIDACION)
        .order_by(DocumentoGuardado.created_at.desc())
    ).all()
    return [DocumentoGuardadoResponse.model_validate(d) for d in docs]


@router.post("/vencimiento-terminos", response_model=TerminoResponse)
def judicial_term(payload: TerminoRequest) -> TerminoResponse:
    try:
        vencimiento = add_business_days(payload.fecha_inicio, payload.dias_habiles)
    except InvalidInput as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
    return TerminoResponse(
        fecha_inicio=payload.fecha_inicio,
        dias_habiles=payload.dias_habiles,
        fecha_vencimiento=vencimiento,
        fecha_legible=format_fecha_larga(vencimiento),
        calendario_cubierto=calendar_covers(payload.fecha_inicio, vencimiento),
    )


@router.post("/indexacion", response_model=IndexacionResponse)
def indexation(payload: IndexacionRequest) -> IndexacionResponse:
    try:
        valor: Decimal = compute_indexed_value(
            DatosIndexacion(
                capital=payload.capital,
                ipc_inicial=payload.ipc_inicial,
                ipc_final=payload.ipc_final,
            )
        )
    except InvalidInput as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
    return IndexacionResponse(valor_indexado=valor, valor_formateado=format_cop(valor))
