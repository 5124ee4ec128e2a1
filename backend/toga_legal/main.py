"""FastAPI application for Toga.

Expone las calculadoras legales (liquidación laboral, vencimiento de
términos, indexación IPC), la importación de jurisprudencia y un endpoint
de ping que verifica la conectividad con PostgreSQL.
"""

import logging
import os

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from toga_legal.api.v1.endpoints.jurisprudence import router as jurisprudence_router
from toga_legal.api.v1.endpoints.tasks import router as tasks_router
from toga_legal.api.v1.endpoints.tools import router as tools_router
from toga_legal.db.session import engine, init_db

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)


class PingResponse(BaseModel):
    """Response model for the ping endpoint.

    Attributes:
        message: Human readable message.
        database: Database connectivity status.
    """

    message: str
    database: str


app: FastAPI = FastAPI(title=os.getenv("PROJECT_NAME", "Toga"))

app.include_router(tools_router, prefix="/api/v1/tools", tags=["Herramientas"])
app.include_router(jurisprudence_router, prefix="/api/v1/jurisprudence", tags=["Jurisprudencia"])
app.include_router(tasks_router, prefix="/api/v1/tasks", tags=["Tareas"])


@app.on_event("startup")
def _startup() -> None:
    init_db()


@app.get("/ping", response_model=PingResponse)
def ping() -> PingResponse:
    """Ping endpoint to validate connectivity between API and database.

    Raises:
        HTTPException: If the database is not reachable.
    """

    try:
        with engine.connect() as connection:
            row = connection.execute(text("SELECT 1 AS ok")).first()
    except SQLAlchemyError as exc:
        raise HTTPException(
            status_code=500,
            detail="Database connectivity error",
        ) from exc

    database_status: str = "ok" if row and row.ok == 1 else "unknown"
    return PingResponse(message="pong", database=database_status)
