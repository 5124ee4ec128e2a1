from __future__ import annotations

from decimal import Decimal
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from toga_legal.api.v1.endpoints import jurisprudence as jurisprudence_endpoints
from toga_legal.db.session import get_db
from toga_legal.main import app
from toga_legal.schemas.jurisprudence import NuevaJurisprudencia
from toga_legal.services.jurisprudence_store import SqlAlchemyJurisprudenceStore
from tests.fixtures.jurisprudence_mocks import RECORD_52059


@pytest.fixture
def client(db_session):
    def _override():
        yield db_session

    app.dependency_overrides[get_db] = _override
    yield TestClient(app)
    app.dependency_overrides.clear()


LIQUIDACION = {
    "salario_mensual": "1000000",
    "auxilio_transporte": True,
    "fecha_inicio": "2024-01-01",
    "fecha_fin": "2024-12-25",
}


def test_liquidacion_laboral(client):
    resp = client.post("/api/v1/tools/liquidacion-laboral", json=LIQUIDACION)
    assert resp.status_code == 200
    body = resp.json()
    assert body["dias"] == 360
    assert Decimal(body["total"]) == Decimal("2963440")
    assert body["total_formateado"] == "$ 2.963.440,00"
    assert "| **TOTAL** |" in body["detalle_markdown"]


def test_liquidacion_with_end_before_start_is_422(client):
    payload = dict(LIQUIDACION, fecha_fin="2023-12-31")
    assert client.post("/api/v1/tools/liquidacion-laboral", json=payload).status_code == 422


def test_saved_liquidacion_is_listed(client):
    resp = client.post("/api/v1/tools/liquidacion-laboral/guardar", json=LIQUIDACION)
    assert resp.status_code == 201
    saved = resp.json()
    assert saved["doc_type"] == "Liquidación Laboral"
    assert saved["title"] == "Liquidación 2024-01-01 a 2024-12-25"

    listed = client.get("/api/v1/tools/liquidaciones").json()
    assert [d["id"] for d in listed] == [saved["id"]]


def test_vencimiento_terminos_skips_holiday(client):
    resp = client.post(
        "/api/v1/tools/vencimiento-terminos",
        json={"fecha_inicio": "2024-01-05", "dias_habiles": 1},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["fecha_vencimiento"] == "2024-01-09"
    assert body["fecha_legible"] == "martes, 9 de enero de 2024"
    assert body["calendario_cubierto"] is True


def test_vencimiento_outside_holiday_table_is_flagged(client):
    resp = client.post(
        "/api/v1/tools/vencimiento-terminos",
        json={"fecha_inicio": "2025-12-31", "dias_habiles": 1},
    )
    assert resp.json()["calendario_cubierto"] is False


def test_negative_term_is_422(client):
    resp = client.post(
        "/api/v1/tools/vencimiento-terminos",
        json={"fecha_inicio": "2024-01-05", "dias_habiles": -2},
    )
    assert resp.status_code == 422


def test_indexacion(client):
    resp = client.post(
        "/api/v1/tools/indexacion",
        json={"capital": "1000000", "ipc_inicial": "100", "ipc_final": "110"},
    )
    assert resp.status_code == 200
    assert Decimal(resp.json()["valor_indexado"]) == Decimal("1100000")
    assert resp.json()["valor_formateado"] == "$ 1.100.000,00"


def test_indexacion_with_zero_initial_index_is_422(client):
    resp = client.post(
        "/api/v1/tools/indexacion",
        json={"capital": "1000000", "ipc_inicial": "0", "ipc_final": "110"},
    )
    assert resp.status_code == 422


def test_jurisprudence_lookup(client, db_session):
    SqlAlchemyJurisprudenceStore(db_session).insert(NuevaJurisprudencia(**RECORD_52059))

    listed = client.get("/api/v1/jurisprudence/").json()
    assert [r["radicado"] for r in listed] == ["52059"]

    found = client.get("/api/v1/jurisprudence/52059")
    assert found.status_code == 200
    assert found.json()["tema"] == "Inasistencia alimentaria"

    assert client.get("/api/v1/jurisprudence/99999").status_code == 404


def test_upload_queues_import(client, monkeypatch):
    uploaded: dict = {}
    queued: list[tuple] = []

    class FakeStorage:
        def upload_bytes(self, key, data, content_type=None):
            uploaded.update(key=key, data=data, content_type=content_type)
            return f"s3://toga-jurisprudencia/{key}"

    def fake_delay(*args):
        queued.append(args)
        return SimpleNamespace(id="task-123")

    monkeypatch.setattr(jurisprudence_endpoints, "StorageService", FakeStorage)
    monkeypatch.setattr(jurisprudence_endpoints.import_jurisprudence_task, "delay", fake_delay)

    resp = client.post(
        "/api/v1/jurisprudence/",
        files={"file": ("boletin.pdf", b"%PDF-1.4 contenido", "application/pdf")},
        data={"source_type": "bulletin", "uploaded_by": "u-7"},
    )

    assert resp.status_code == 202
    assert resp.json() == {"status": "queued", "task_id": "task-123", "filename": "boletin.pdf"}
    assert uploaded["data"] == b"%PDF-1.4 contenido"
    assert queued[0][0].startswith("s3://toga-jurisprudencia/jurisprudencia/")
    assert queued[0][1:] == ("boletin.pdf", "application/pdf", "bulletin", "u-7")


def test_empty_upload_is_400(client):
    resp = client.post(
        "/api/v1/jurisprudence/",
        files={"file": ("vacio.pdf", b"", "application/pdf")},
    )
    assert resp.status_code == 400


def test_indexacion_with_huge_capital(client):
    resp = client.post(
        "/api/v1/tools/indexacion",
        json={"capital": "1e27", "ipc_inicial": "100", "ipc_final": "110"},
    )
    assert resp.status_code == 200
    assert resp.json()["valor_formateado"] == "$ 1.100" + ".000" * 8 + ",00"


def test_liquidacion_with_huge_salary(client):
    resp = client.post("/api/v1/tools/liquidacion-laboral", json=dict(LIQUIDACION, salario_mensual="1e30"))
    assert resp.status_code == 200
    assert resp.json()["total_formateado"].startswith("$ ")
