"""Taxonomía de errores de Toga.

Las calculadoras fallan de inmediato con ``InvalidInput``. El importador de
jurisprudencia trata ``ExtractionFailure``, ``GenerationFailure`` y
``ParseFailure`` como fatales para el lote, y ``PersistenceFailure`` como
recuperable por registro.
"""

from __future__ import annotations


class TogaError(Exception):
    """Error base del dominio."""


class InvalidInput(TogaError, ValueError):
    """Argumentos inválidos para una calculadora."""


class ExtractionFailure(TogaError):
    """El archivo no se pudo leer o no contiene texto utilizable."""


class GenerationFailure(TogaError):
    """El servicio de IA no respondió o devolvió algo inutilizable."""

    def __init__(
        self,
        message: str,
        *,
        provider: str | None = None,
        model: str | None = None,
        masked_key: str | None = None,
    ) -> None:
        super().__init__(message)
        self.provider = provider
        self.model = model
        self.masked_key = masked_key


class ParseFailure(TogaError):
    """La respuesta de la IA no es un arreglo JSON válido."""


class PersistenceFailure(TogaError):
    """Un registro concreto no se pudo consultar o guardar."""
