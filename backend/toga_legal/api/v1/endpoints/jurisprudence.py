"""Jurisprudence import endpoints."""

from __future__ import annotations

from uuid import uuid4

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from toga_legal.db.models import Jurisprudencia
from toga_legal.db.session import get_db
from toga_legal.schemas.jurisprudence import ImportQueuedResponse, JurisprudenciaResponse, SourceType
from toga_legal.services.jurisprudence_store import SqlAlchemyJurisprudenceStore
from toga_legal.services.storage import StorageService
from toga_legal.tasks import import_jurisprudence as import_jurisprudence_task

router = APIRouter(tags=["jurisprudence"])


@router.post("/", response_model=ImportQueuedResponse, status_code=status.HTTP_202_ACCEPTED)
def upload_jurisprudence(
    file: UploadFile = File(...),
    source_type: SourceType = Form("bulletin"),
    uploaded_by: str | None = Form(None),
) -> ImportQueuedResponse:
    """
    Guarda el boletín y encola su importación.
    """
    try:
        content = file.file.read()
    finally:
        file.file.close()
    if not content:
        raise HTTPException(status_code=400, detail="El archivo está vacío")

    key = f"jurisprudencia/{uuid4()}_{file.filename}"
    s3_url = StorageService().upload_bytes(key, content, content_type=file.content_type)
    task = import_jurisprudence_task.delay(
        s3_url,
        file.filename,
        file.content_type,
        source_type,
        uploaded_by,
    )
    return ImportQueuedResponse(status="queued", task_id=task.id, filename=file.filename or "")


@router.get("/", response_model=list[JurisprudenciaResponse])
def list_recent(limit: int = 10, db: Session = Depends(get_db)) -> list[JurisprudenciaResponse]:
    rows = SqlAlchemyJurisprudenceStore(db).recent(limit=limit)
    return [JurisprudenciaResponse.model_validate(r) for r in rows]


@router.get("/{radicado}", response_model=JurisprudenciaResponse)
def get_by_radicado(radicado: str, db: Session = Depends(get_db)) -> JurisprudenciaResponse:
    row = db.scalar(select(Jurisprudencia).where(Jurisprudencia.radicado == radicado))
    if row is None:
        raise HTTPException(status_code=404, detail="Radicado no encontrado")
    return JurisprudenciaResponse.model_validate(row)
