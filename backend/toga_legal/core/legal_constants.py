"""Constantes legales centralizadas según el Código Sustantivo del Trabajo (CST) Colombia.

Este módulo agrupa los parámetros numéricos y tablas usados por las
herramientas de liquidación laboral y de vencimiento de términos.
Cada constante documenta la norma que la sustenta.
"""

from datetime import date
from decimal import Decimal
from typing import Final

# ---------------------------------------------------------------------------
# Año comercial
# Las prestaciones sociales se liquidan sobre un año de 360 días.
# ---------------------------------------------------------------------------
"""Días del año comercial usados en cesantías, intereses y prima."""
DIAS_ANIO_COMERCIAL: Final[int] = 360

# ---------------------------------------------------------------------------
# Art. 186 CST: Vacaciones
# 15 días hábiles de vacaciones remuneradas por año de servicio, es decir,
# medio salario mensual por cada 360 días (salario * días / 720).
# ---------------------------------------------------------------------------
"""Art. 186 CST: Divisor de la liquidación proporcional de vacaciones."""
DIVISOR_VACACIONES: Final[int] = 720

# ---------------------------------------------------------------------------
# Ley 52 de 1975: Intereses sobre cesantías
# 12% anual sobre el saldo de cesantías.
# ---------------------------------------------------------------------------
"""Ley 52/1975: Tasa anual nominal de intereses sobre cesantías."""
TASA_INTERESES_CESANTIAS: Final[Decimal] = Decimal("0.12")

# ---------------------------------------------------------------------------
# Ley 15 de 1959: Auxilio de transporte
# Valor fijado por decreto cada año. Se suma a la base de cesantías y prima
# pero no a la de vacaciones.
# ---------------------------------------------------------------------------
"""Decreto 2293/2023: Auxilio de transporte mensual vigente para 2024 (aprox.)."""
AUXILIO_TRANSPORTE_2024: Final[Decimal] = Decimal("162000")

# ---------------------------------------------------------------------------
# Ley 51 de 1983: Festivos en Colombia
# Tabla cerrada para los años que soporta la herramienta. Fuera de estos años
# ningún día se considera festivo.
# ---------------------------------------------------------------------------
_FESTIVOS_2024: list[str] = [
    "2024-01-01", "2024-01-08", "2024-03-25", "2024-03-28", "2024-03-29",
    "2024-05-01", "2024-05-13", "2024-06-03", "2024-06-10", "2024-07-01",
    "2024-07-20", "2024-08-07", "2024-08-19", "2024-10-14", "2024-11-04",
    "2024-11-11", "2024-12-08", "2024-12-25",
]
# 2025 (estimados)
_FESTIVOS_2025: list[str] = [
    "2025-01-01", "2025-01-06", "2025-03-24", "2025-04-17", "2025-04-18",
    "2025-05-01", "2025-06-02", "2025-06-23", "2025-06-30", "2025-07-20",
    "2025-08-07", "2025-08-18", "2025-10-13", "2025-11-03", "2025-11-17",
    "2025-12-08", "2025-12-25",
]

"""Ley 51/1983: Festivos de Colombia 2024-2025."""
FESTIVOS_COLOMBIA: Final[frozenset[date]] = frozenset(
    date.fromisoformat(d) for d in _FESTIVOS_2024 + _FESTIVOS_2025
)

"""Años cubiertos por la tabla de festivos."""
ANIOS_CALENDARIO_FESTIVOS: Final[frozenset[int]] = frozenset(d.year for d in FESTIVOS_COLOMBIA)
