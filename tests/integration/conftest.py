"""Fake bank service for end-to-end editor tests."""

from typing import Any

import httpx
import pytest
from fastapi import APIRouter, FastAPI, HTTPException, Response

from record_editor.config.settings import Settings
from record_editor.editor import RecordEditor


class FakeBank:
    """In-memory stand-in for the record-keeping service.

    Adds a server-computed "tier" to every record so tests can tell a
    re-fetched list from a locally merged one.
    """

    def __init__(self) -> None:
        self.records: dict[int, dict[str, Any]] = {}
        self.next_id = 1
        self.failing: set[str] = set()

    def seed(self, **fields: Any) -> dict[str, Any]:
        record = self._store(self.next_id, fields)
        self.next_id += 1
        return record

    def _store(self, record_id: int, fields: dict[str, Any]) -> dict[str, Any]:
        record = {**fields, "id": record_id}
        record["tier"] = "gold" if float(record["balance"]) >= 1000 else "standard"
        self.records[record_id] = record
        return record

    def check(self, operation: str) -> None:
        if operation in self.failing:
            raise HTTPException(status_code=503, detail=f"{operation} unavailable")

    def build_app(self) -> FastAPI:
        router = APIRouter(prefix="/bank")

        @router.get("/read")
        async def read() -> list[dict[str, Any]]:
            self.check("read")
            return list(self.records.values())

        @router.post("/add", status_code=201)
        async def add(body: dict[str, Any]) -> dict[str, Any]:
            self.check("add")
            return self.seed(**body)

        @router.put("/update/{record_id}")
        async def update(record_id: int, body: dict[str, Any]) -> dict[str, Any]:
            self.check("update")
            if record_id not in self.records:
                raise HTTPException(status_code=404, detail="record not found")
            body.pop("tier", None)
            return self._store(record_id, body)

        @router.delete("/delete/{record_id}")
        async def delete(record_id: int) -> Response:
            self.check("delete")
            if self.records.pop(record_id, None) is None:
                raise HTTPException(status_code=404, detail="record not found")
            return Response(status_code=200)

        app = FastAPI()
        app.include_router(router)
        return app


@pytest.fixture
def bank() -> FakeBank:
    bank = FakeBank()
    bank.seed(name="Ada", username="ada", email="ada@example.com", phone="5551234567", balance=250)
    bank.seed(name="Grace", username="grace", email="grace@example.com", phone="5559876543", balance=1200)
    return bank


@pytest.fixture
def settings() -> Settings:
    return Settings(
        backend={"base_url": "http://testserver/bank", "timeout": 5.0},
        observability={"logging": {"format": "json"}, "metrics": {"enabled": False}},
    )


@pytest.fixture
async def editor(bank: FakeBank, settings: Settings):
    transport = httpx.ASGITransport(app=bank.build_app())
    async with RecordEditor.from_settings(settings, transport=transport) as editor:
        yield editor
