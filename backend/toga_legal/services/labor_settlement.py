from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from toga_legal.core.config import ToolsSettings
from toga_legal.core.errors import InvalidInput
from toga_legal.core.legal_constants import DIAS_ANIO_COMERCIAL, DIVISOR_VACACIONES
from toga_legal.services.indexation import format_cop


@dataclass(frozen=True)
class DatosLiquidacion:
    salario_mensual: Decimal
    auxilio_transporte: bool
    fecha_inicio: date
    fecha_fin: date


@dataclass(frozen=True)
class ResultadoLiquidacion:
    dias: int
    cesantias: Decimal
    intereses_cesantias: Decimal
    prima_servicios: Decimal
    vacaciones: Decimal
    total: Decimal


def days_worked(fecha_inicio: date, fecha_fin: date) -> int:
    """Días calendario inclusivos: el mismo día de inicio y fin cuenta como 1."""
    return (fecha_fin - fecha_inicio).days + 1


def compute_settlement(
    datos: DatosLiquidacion,
    settings: ToolsSettings | None = None,
) -> ResultadoLiquidacion:
    """
    Liquidación simplificada de prestaciones sociales (CST).

    Las cesantías y la prima se calculan sobre salario + auxilio de transporte;
    las vacaciones solo sobre el salario. Los intereses aplican el 12% anual
    sobre el mismo número de días del periodo (un solo periodo, sin cortes anuales).
    Los valores no se redondean; el redondeo es cosa de la presentación.
    """
    settings = settings or ToolsSettings()
    salario = Decimal(datos.salario_mensual)
    if salario < 0:
        raise InvalidInput("El salario mensual no puede ser negativo")
    if datos.fecha_fin < datos.fecha_inicio:
        raise InvalidInput("La fecha de retiro debe ser igual o posterior a la de ingreso")

    dias = days_worked(datos.fecha_inicio, datos.fecha_fin)
    auxilio = settings.auxilio_transporte if datos.auxilio_transporte else Decimal(0)
    base = salario + auxilio

    cesantias = base * dias / DIAS_ANIO_COMERCIAL
    intereses = cesantias * dias * settings.tasa_intereses_cesantias / DIAS_ANIO_COMERCIAL
    prima = base * dias / DIAS_ANIO_COMERCIAL
    vacaciones = salario * dias / DIVISOR_VACACIONES

    return ResultadoLiquidacion(
        dias=dias,
        cesantias=cesantias,
        intereses_cesantias=intereses,
        prima_servicios=prima,
        vacaciones=vacaciones,
        total=cesantias + intereses + prima + vacaciones,
    )


def render_settlement_markdown(
    datos: DatosLiquidacion,
    resultado: ResultadoLiquidacion,
    fecha_calculo: date | None = None,
) -> str:
    fecha_calculo = fecha_calculo or date.today()
    rows = [
        ("**Salario Base**", format_cop(Decimal(datos.salario_mensual))),
        ("**Inicio**", datos.fecha_inicio.isoformat()),
        ("**Fin**", datos.fecha_fin.isoformat()),
        ("**Días**", str(resultado.dias)),
        ("**Cesantías**", format_cop(resultado.cesantias)),
        ("**Intereses**", format_cop(resultado.intereses_cesantias)),
        ("**Prima**", format_cop(resultado.prima_servicios)),
        ("**Vacaciones**", format_cop(resultado.vacaciones)),
        ("**TOTAL**", f"**{format_cop(resultado.total)}**"),
    ]
    lines = [
        "### Liquidación Laboral",
        f"**Fecha:** {fecha_calculo.isoformat()}",
        "",
        "| Concepto | Valor |",
        "|---|---|",
    ]
    lines.extend(f"| {concepto} | {valor} |" for concepto, valor in rows)
    return "\n".join(lines)
