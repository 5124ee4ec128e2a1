from __future__ import annotations

import logging
from functools import partial

from toga_legal.celery_app import celery_app
from toga_legal.core.config import ImportSettings, StorageSettings
from toga_legal.db.session import SessionLocal
from toga_legal.services.document_parser import DocumentParser
from toga_legal.services.jurisprudence_import import ArchivoSubido, JurisprudenceImporter
from toga_legal.services.jurisprudence_store import SqlAlchemyJurisprudenceStore
from toga_legal.services.llm import LLMService
from toga_legal.services.storage import StorageService

logger = logging.getLogger(__name__)


def _get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@celery_app.task(name="toga_legal.tasks.import_jurisprudence", bind=True)
def import_jurisprudence(
    self,
    s3_url: str,
    filename: str,
    content_type: str | None = None,
    source_type: str = "bulletin",
    uploaded_by: str | None = None,
):
    task_id = getattr(self.request, "id", None)
    logger.info("task_start name=import_jurisprudence task_id=%s filename=%s", task_id, filename)
    settings = ImportSettings.from_env()
    storage = StorageService(StorageSettings.from_env())
    content = storage.download_bytes(s3_url)

    try:
        for db in _get_db():
            importer = JurisprudenceImporter(
                extract_text=DocumentParser.extract_text,
                generate_records=partial(LLMService.generate_jurisprudence_records, settings=settings.ai),
                store=SqlAlchemyJurisprudenceStore(db),
                settings=settings,
            )
            result = importer.import_document(
                ArchivoSubido(filename=filename, content=content, content_type=content_type),
                source_type=source_type,
                uploaded_by=uploaded_by,
            )
    finally:
        storage.delete_object(s3_url)
    logger.info(
        "task_done name=import_jurisprudence task_id=%s saved=%s skipped=%s errors=%s",
        task_id,
        result.saved,
        result.skipped,
        len(result.errors),
    )
    return result.model_dump(mode="json")
