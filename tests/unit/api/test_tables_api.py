from __future__ import annotations

import sys
from pathlib import Path

import pytest
from fakes import fixed_clock, make_reservation, seed
from fastapi.testclient import TestClient

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

import reserveflow.api.routes.tables as tables_route
from reserveflow.api.main import app
from reserveflow.application.use_cases.availability import GetFloorStatus
from reserveflow.application.use_cases.tables import (
    DeactivateTable,
    ListTables,
    PurgeTable,
    SaveTableLayout,
)
from reserveflow.domain.common.ids import TableId
from reserveflow.domain.reservation.entities import ReservationStatus


@pytest.fixture
def client(monkeypatch, table_repository, reservation_repository, publisher):
    monkeypatch.setattr(tables_route, "_list_tables_use_case", lambda: ListTables(table_repository))
    monkeypatch.setattr(
        tables_route,
        "_save_table_layout_use_case",
        lambda: SaveTableLayout(table_repository, publisher, clock=fixed_clock),
    )
    monkeypatch.setattr(
        tables_route,
        "_get_floor_status_use_case",
        lambda: GetFloorStatus(table_repository, reservation_repository),
    )
    monkeypatch.setattr(
        tables_route,
        "_deactivate_table_use_case",
        lambda: DeactivateTable(table_repository),
    )
    monkeypatch.setattr(tables_route, "_purge_table_use_case", lambda: PurgeTable(table_repository))
    return TestClient(app)


def test_list_tables_by_area(client) -> None:
    response = client.get("/v1/tables", params={"area": "bar"})
    assert [t["id"] for t in response.json()["tables"]] == ["B1"]

    everything = client.get("/v1/tables", params={"includeInactive": "true"})
    assert len(everything.json()["tables"]) == 5


def test_save_layout(client) -> None:
    layout = {
        "tables": [
            {
                "id": "T1",
                "name": "Corner",
                "area": "inside",
                "capacity": {"min": 2, "max": 6},
                "isAdjustable": True,
                "position": {"x": 40, "y": 80},
            }
        ]
    }
    response = client.put("/v1/tables", json=layout)

    assert response.status_code == 200
    by_id = {t["id"]: t for t in response.json()["tables"]}
    assert by_id["T1"]["capacity"] == {"min": 2, "max": 6}
    assert by_id["T2"]["isActive"] is False


def test_save_layout_rejects_unknown_area(client) -> None:
    table = {"id": "R1", "name": "Roof", "area": "roof", "capacity": {"min": 1, "max": 2}}
    layout = {"tables": [table]}
    response = client.put("/v1/tables", json=layout)
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_REQUEST"


def test_floor_status(client, reservation_repository) -> None:
    seed(
        reservation_repository,
        make_reservation("rsv_1", {"T1"}, status=ReservationStatus.SEATED),
    )
    response = client.get("/v1/tables/status", params={"date": "2026-10-19", "time": "19:30"})

    statuses = {item["tableId"]: item["status"] for item in response.json()["tables"]}
    assert statuses["T1"] == "occupied"
    assert statuses["T2"] == "available"


def test_deactivate_and_purge(client, table_repository) -> None:
    assert client.post("/v1/tables/T1/deactivate").json()["isActive"] is False

    table_repository.referenced.add(TableId("T2"))
    in_use = client.delete("/v1/tables/T2")
    assert in_use.status_code == 409
    assert in_use.json()["error"]["code"] == "TABLE_IN_USE"

    assert client.delete("/v1/tables/T3").status_code == 204
    missing = client.delete("/v1/tables/T3")
    assert missing.status_code == 404
    assert missing.json()["error"]["code"] == "TABLE_NOT_FOUND"
