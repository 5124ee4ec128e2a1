from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from toga_legal.core.errors import PersistenceFailure
from toga_legal.db.models import Jurisprudencia
from toga_legal.schemas.jurisprudence import NuevaJurisprudencia

logger = logging.getLogger(__name__)


class SqlAlchemyJurisprudenceStore:
    """Tabla ``jurisprudence``: solo consulta por radicado e inserta, cada ficha en su propia transacción."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def find_by_case_number(self, radicado: str) -> Jurisprudencia | None:
        try:
            return self.db.scalar(select(Jurisprudencia).where(Jurisprudencia.radicado == radicado))
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise PersistenceFailure(f"consulta fallida ({exc.__class__.__name__})") from exc

    def insert(self, record: NuevaJurisprudencia) -> Jurisprudencia:
        row = Jurisprudencia(**record.model_dump(), analysis_level="basic")
        try:
            self.db.add(row)
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.warning("jurisprudence_insert_failed radicado=%s error=%s", record.radicado, exc)
            raise PersistenceFailure(f"inserción rechazada ({exc.__class__.__name__})") from exc
        return row

    def recent(self, limit: int = 10) -> list[Jurisprudencia]:
        stmt = select(Jurisprudencia).order_by(Jurisprudencia.created_at.desc()).limit(limit)
        return list(self.db.scalars(stmt).all())
