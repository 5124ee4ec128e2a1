"""Vencimiento de términos judiciales en días hábiles.

Un día es hábil si no es sábado, ni domingo, ni está en la tabla de
festivos. La tabla es cerrada: para años fuera de ella ningún día se
considera festivo, y ``calendar_covers`` permite advertirlo al usuario.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import AbstractSet

from toga_legal.core.errors import InvalidInput
from toga_legal.core.legal_constants import ANIOS_CALENDARIO_FESTIVOS, FESTIVOS_COLOMBIA

DIAS_SEMANA = ("lunes", "martes", "miércoles", "jueves", "viernes", "sábado", "domingo")
MESES = (
    "enero",
    "febrero",
    "marzo",
    "abril",
    "mayo",
    "junio",
    "julio",
    "agosto",
    "septiembre",
    "octubre",
    "noviembre",
    "diciembre",
)


def _as_date(value: date) -> date:
    # datetime hereda de date; se descarta la hora.
    if isinstance(value, datetime):
        return value.date()
    return value


def is_business_day(day: date, festivos: AbstractSet[date] = FESTIVOS_COLOMBIA) -> bool:
    day = _as_date(day)
    if day.weekday() >= 5:
        return False
    return day not in festivos


def add_business_days(
    start: date,
    dias_habiles: int,
    festivos: AbstractSet[date] = FESTIVOS_COLOMBIA,
) -> date:
    """Fecha en que vence un término de ``dias_habiles`` contado desde ``start``.

    El día de inicio no se cuenta; el conteo empieza al día siguiente.
    ``add_business_days(d, 0) == d``.

    Raises:
        InvalidInput: si ``dias_habiles`` es negativo.
    """
    if dias_habiles < 0:
        raise InvalidInput("El término en días hábiles no puede ser negativo")

    current = _as_date(start)
    count = 0
    while count < dias_habiles:
        current += timedelta(days=1)
        if is_business_day(current, festivos):
            count += 1
    return current


def business_days_between(
    start: date,
    end: date,
    festivos: AbstractSet[date] = FESTIVOS_COLOMBIA,
) -> int:
    """Días hábiles en el intervalo ``(start, end]``; 0 si ``end <= start``."""
    start, end = _as_date(start), _as_date(end)
    days = 0
    cursor = start
    while cursor < end:
        cursor += timedelta(days=1)
        if is_business_day(cursor, festivos):
            days += 1
    return days


def calendar_covers(*days: date) -> bool:
    return all(_as_date(d).year in ANIOS_CALENDARIO_FESTIVOS for d in days)


def format_fecha_larga(day: date) -> str:
    """Ej.: ``lunes, 15 de enero de 2024``."""
    day = _as_date(day)
    return f"{DIAS_SEMANA[day.weekday()]}, {day.day} de {MESES[day.month - 1]} de {day.year}"
