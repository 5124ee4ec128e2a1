"""SQLAlchemy models for Toga."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import DateTime, String, Text, Uuid, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for declarative SQLAlchemy models."""


class Jurisprudencia(Base):
    """Ficha jurisprudencial importada; ``radicado`` es la llave de negocio."""

    __tablename__ = "jurisprudence"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    radicado: Mapped[str] = mapped_column(String, nullable=False, unique=True, index=True)
    sentencia_id: Mapped[str | None] = mapped_column(String, nullable=True)
    ddp_number: Mapped[str | None] = mapped_column(String, nullable=True)
    tema: Mapped[str | None] = mapped_column(String, nullable=True)
    tesis: Mapped[str | None] = mapped_column(Text, nullable=True)
    source_url: Mapped[str | None] = mapped_column(String, nullable=True)
    source_type: Mapped[str] = mapped_column(String, nullable=False, default="bulletin")
    analysis_level: Mapped[str] = mapped_column(String, nullable=False, default="basic")
    uploaded_by: Mapped[str | None] = mapped_column(String, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )


class DocumentoGuardado(Base):
    """Documento generado por las herramientas (p. ej. una liquidación)."""

    __tablename__ = "saved_documents"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    title: Mapped[str] = mapped_column(String, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    doc_type: Mapped[str] = mapped_column(String, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
