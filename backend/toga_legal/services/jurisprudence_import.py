"""Importación de boletines jurisprudenciales con deduplicación por radicado.

Etapas: extracción de texto -> generación (IA) -> parseo estricto -> por cada
ficha, consulta por radicado e inserción si no existe. Las fichas se procesan
una a una, en orden, para que una ficha repetida dentro del mismo lote vea la
inserción de la anterior. Lo ya insertado no se revierte si la corrida se
abandona.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Protocol, Union

from pydantic import ValidationError

from toga_legal.core.config import ImportSettings
from toga_legal.core.errors import (
    ExtractionFailure,
    GenerationFailure,
    InvalidInput,
    ParseFailure,
    PersistenceFailure,
)
from toga_legal.schemas.jurisprudence import (
    ImportStage,
    JurisprudenciaExtraida,
    NuevaJurisprudencia,
    ResultadoImportacion,
)

logger = logging.getLogger(__name__)

SOURCE_TYPES = ("bulletin", "upload")
CODE_FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)


class TextExtractor(Protocol):
    def __call__(self, content: bytes, filename: str | None, content_type: str | None) -> str: ...


class RecordGenerator(Protocol):
    def __call__(self, text: str, source_type: str) -> str: ...


class RecordStore(Protocol):
    def find_by_case_number(self, radicado: str) -> Any | None: ...

    def insert(self, record: NuevaJurisprudencia) -> Any: ...


@dataclass(frozen=True)
class ArchivoSubido:
    filename: str
    content: bytes
    content_type: str | None = None


@dataclass(frozen=True)
class ParseOk:
    records: list[JurisprudenciaExtraida] = field(default_factory=list)
    dropped: int = 0


@dataclass(frozen=True)
class ParseError:
    reason: str


ParseResult = Union[ParseOk, ParseError]


def _check_source_type(source_type: str) -> None:
    if source_type not in SOURCE_TYPES:
        raise InvalidInput(f"source_type inválido: {source_type}. Usa: bulletin, upload.")


def parse_records(raw: str | None) -> ParseResult:
    """
    Parseo estricto de la respuesta de la IA.

    Quita cercas de código, toma desde el primer ``[`` hasta el último ``]`` y
    valida cada elemento. Los elementos que no son objetos o no traen radicado
    se descartan (``dropped``); nunca se inventan valores.
    """
    if not raw or not raw.strip():
        return ParseError("respuesta vacía")
    cleaned = CODE_FENCE_RE.sub("", raw).strip()
    start = cleaned.find("[")
    end = cleaned.rfind("]")
    if start == -1 or end < start:
        return ParseError("no se encontró un arreglo JSON")
    try:
        payload = json.loads(cleaned[start : end + 1])
    except json.JSONDecodeError as exc:
        return ParseError(f"JSON inválido ({exc.msg})")
    if not isinstance(payload, list):
        return ParseError("se esperaba un arreglo JSON")

    records: list[JurisprudenciaExtraida] = []
    dropped = 0
    for item in payload:
        if not isinstance(item, dict):
            dropped += 1
            continue
        try:
            records.append(JurisprudenciaExtraida.model_validate(item))
        except ValidationError:
            dropped += 1
    return ParseOk(records=records, dropped=dropped)


def require_records(raw: str | None) -> ParseOk:
    """Como ``parse_records``, pero un ``ParseError`` se lanza como ``ParseFailure``."""
    parsed = parse_records(raw)
    if isinstance(parsed, ParseError):
        raise ParseFailure(parsed.reason)
    return parsed


class JurisprudenceImporter:

    def __init__(
        self,
        extract_text: TextExtractor,
        generate_records: RecordGenerator,
        store: RecordStore,
        settings: ImportSettings | None = None,
    ) -> None:
        self.extract_text = extract_text
        self.generate_records = generate_records
        self.store = store
        self.settings = settings or ImportSettings()

    @staticmethod
    def _failed(stage: ImportStage, message: str, *, extracted_text: str | None = None) -> ResultadoImportacion:
        return ResultadoImportacion(errors=[message], stage=stage, extracted_text=extracted_text)

    def _generation_error(self, exc: Exception) -> str:
        ai = self.settings.ai
        provider = ai.provider
        model = ai.model
        key = ai.masked_key()
        if isinstance(exc, GenerationFailure):
            provider = exc.provider or provider
            model = exc.model or model
            key = exc.masked_key or key
        return f"Error procesando el documento con IA (proveedor={provider}, modelo={model}, clave={key}): {exc}"

    def import_document(
        self,
        archivo: ArchivoSubido,
        source_type: str = "bulletin",
        uploaded_by: str | None = None,
    ) -> ResultadoImportacion:
        _check_source_type(source_type)
        logger.info(
            "jurisprudence_import_start filename=%s source_type=%s bytes=%s",
            archivo.filename,
            source_type,
            len(archivo.content),
        )
        try:
            text = self.extract_text(archivo.content, archivo.filename, archivo.content_type)
        except ExtractionFailure as exc:
            logger.error("jurisprudence_import_failed stage=EXTRACTING filename=%s error=%s", archivo.filename, exc)
            return self._failed(ImportStage.EXTRACTING, f"Archivo ilegible: {exc}")

        if len((text or "").strip()) < self.settings.min_text_chars:
            logger.error(
                "jurisprudence_import_failed stage=EXTRACTING filename=%s chars=%s",
                archivo.filename,
                len((text or "").strip()),
            )
            return self._failed(
                ImportStage.EXTRACTING,
                "El documento está vacío o es un escaneo sin texto seleccionable.",
            )
        return self.import_text(text, source_type=source_type, uploaded_by=uploaded_by)

    def import_text(
        self,
        text: str,
        source_type: str = "bulletin",
        uploaded_by: str | None = None,
    ) -> ResultadoImportacion:
        """Etapas de generación en adelante; sirve para reintentar con el texto ya extraído."""
        _check_source_type(source_type)
        truncated = text[: self.settings.max_input_chars]
        try:
            raw = self.generate_records(truncated, source_type)
        except Exception as exc:
            message = self._generation_error(exc)
            logger.error("jurisprudence_import_failed stage=GENERATING error=%s", message)
            return self._failed(ImportStage.GENERATING, message, extracted_text=text)

        try:
            parsed = require_records(raw)
        except ParseFailure as exc:
            logger.error("jurisprudence_import_failed stage=PARSING reason=%s raw=%s", exc, (raw or "")[:300])
            return self._failed(ImportStage.PARSING, f"Formato de respuesta de IA inválido: {exc}")

        if parsed.dropped:
            logger.info("jurisprudence_import_dropped count=%s", parsed.dropped)
        return self._persist(parsed.records, source_type, uploaded_by)

    def _persist(
        self,
        records: list[JurisprudenciaExtraida],
        source_type: str,
        uploaded_by: str | None,
    ) -> ResultadoImportacion:
        saved = 0
        skipped = 0
        errors: list[str] = []
        for record in records:
            try:
                if self.store.find_by_case_number(record.radicado) is not None:
                    skipped += 1
                    continue
                self.store.insert(
                    NuevaJurisprudencia(
                        **record.model_dump(),
                        source_type=source_type,
                        uploaded_by=uploaded_by,
                    )
                )
                saved += 1
            except PersistenceFailure as exc:
                logger.warning("jurisprudence_record_failed radicado=%s error=%s", record.radicado, exc)
                errors.append(f"Error guardando Rad. {record.radicado}: {exc}")

        logger.info(
            "jurisprudence_import_done saved=%s skipped=%s errors=%s",
            saved,
            skipped,
            len(errors),
        )
        return ResultadoImportacion(saved=saved, skipped=skipped, errors=errors)


def import_document(
    archivo: ArchivoSubido,
    extract_text: TextExtractor,
    generate_records: RecordGenerator,
    store: RecordStore,
    settings: ImportSettings | None = None,
    *,
    source_type: str = "bulletin",
    uploaded_by: str | None = None,
) -> ResultadoImportacion:
    importer = JurisprudenceImporter(extract_text, generate_records, store, settings)
    return importer.import_document(archivo, source_type=source_type, uploaded_by=uploaded_by)
