from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, localcontext

from toga_legal.core.errors import InvalidInput


@dataclass(frozen=True)
class DatosIndexacion:
    capital: Decimal
    ipc_inicial: Decimal
    ipc_final: Decimal


def compute_indexed_value(datos: DatosIndexacion) -> Decimal:
    """Valor presente = capital * (IPC final / IPC inicial), sin redondear."""
    ipc_inicial = Decimal(datos.ipc_inicial)
    if ipc_inicial <= 0:
        raise InvalidInput("El IPC inicial debe ser mayor que cero")
    return Decimal(datos.capital) * (Decimal(datos.ipc_final) / ipc_inicial)


def format_cop(valor: Decimal) -> str:
    """Formato de pesos colombianos: ``$ 1.234.567,89``."""
    valor = Decimal(valor)
    with localcontext() as ctx:
        # la precisión por defecto (28) no alcanza para montos muy grandes
        ctx.prec = max(ctx.prec, valor.adjusted() + 5)
        rounded = valor.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
        sign = "-" if rounded < 0 else ""
        entero, decimales = f"{abs(rounded):.2f}".split(".")
    grupos = f"{int(entero):,}".replace(",", ".")
    return f"{sign}$ {grupos},{decimales}"
