"""Extracción de texto de boletines y sentencias (PDF, DOCX, texto plano)."""

from __future__ import annotations

import io
import logging
from pathlib import Path

import docx
import pdfplumber

from toga_legal.core.errors import ExtractionFailure

logger = logging.getLogger(__name__)

PDF_TYPES = {"application/pdf"}
DOCX_TYPES = {"application/vnd.openxmlformats-officedocument.wordprocessingml.document"}
TEXT_TYPES = {"text/plain", "text/markdown"}


class DocumentParser:

    @staticmethod
    def _kind(filename: str | None, content_type: str | None) -> str:
        suffix = Path(filename or "").suffix.lower()
        ctype = (content_type or "").split(";")[0].strip().lower()
        if suffix == ".pdf" or ctype in PDF_TYPES:
            return "pdf"
        if suffix == ".docx" or ctype in DOCX_TYPES:
            return "docx"
        if suffix in {".txt", ".md"} or ctype in TEXT_TYPES:
            return "text"
        return "unsupported"

    @staticmethod
    def _pdf_text(content: bytes) -> str:
        try:
            parts: list[str] = []
            with pdfplumber.open(io.BytesIO(content)) as pdf:
                for i, page in enumerate(pdf.pages):
                    page_text = (page.extract_text() or "").strip()
                    # páginas escaneadas no aportan marcador
                    if page_text:
                        parts.append(f"[PÁGINA {i + 1}]\n{page_text}")
            return "\n\n".join(parts)
        except Exception as exc:
            logger.error("Error leyendo PDF: %s", exc)
            raise ExtractionFailure(
                "No se pudo leer el archivo PDF. Asegúrate de que no esté protegido o dañado."
            ) from exc

    @staticmethod
    def _docx_text(content: bytes) -> str:
        try:
            document = docx.Document(io.BytesIO(content))
            return "\n".join(p.text for p in document.paragraphs).strip()
        except Exception as exc:
            logger.error("Error leyendo DOCX: %s", exc)
            raise ExtractionFailure(
                "No se pudo leer el archivo Word. Asegúrate de que sea .docx (no .doc antiguo)."
            ) from exc

    @staticmethod
    def _plain_text(content: bytes) -> str:
        try:
            return content.decode("utf-8").strip()
        except UnicodeDecodeError as exc:
            raise ExtractionFailure("El archivo de texto no está codificado en UTF-8.") from exc

    @staticmethod
    def extract_text(content: bytes, filename: str | None = None, content_type: str | None = None) -> str:
        kind = DocumentParser._kind(filename, content_type)
        logger.info("extract_text filename=%s content_type=%s kind=%s bytes=%s", filename, content_type, kind, len(content))
        if kind == "pdf":
            return DocumentParser._pdf_text(content)
        if kind == "docx":
            return DocumentParser._docx_text(content)
        if kind == "text":
            return DocumentParser._plain_text(content)
        raise ExtractionFailure(f"Formato no soportado: {filename or content_type or 'desconocido'}. Usa PDF, DOCX o TXT.")
