from __future__ import annotations

from fastapi import APIRouter
from celery.result import AsyncResult

from toga_legal.celery_app import celery_app

router = APIRouter(tags=["tasks"])


@router.get("/{task_id}")
def get_task_status(task_id: str):
    """Estado de una importación encolada; ``result`` trae saved/skipped/errors al terminar."""
    result = AsyncResult(task_id, app=celery_app)
    return {
        "task_id": task_id,
        "status": result.status,
        "result": result.result if result.successful() else None,
        "error": str(result.result) if result.failed() else None,
    }
