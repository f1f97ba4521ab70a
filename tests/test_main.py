import pytest
from fastapi import FastAPI

import main


class StubDatabase:
    def __init__(self, schema_error: Exception | None = None) -> None:
        self.schema_error = schema_error
        self.events: list[str] = []

    async def connect(self) -> None:
        self.events.append("connect")

    async def apply_schema(self) -> None:
        self.events.append("apply_schema")
        if self.schema_error is not None:
            raise self.schema_error

    async def close(self) -> None:
        self.events.append("close")


@pytest.mark.asyncio
async def test_pool_is_closed_when_schema_setup_fails(monkeypatch):
    db = StubDatabase(schema_error=RuntimeError("permission denied for schema public"))
    monkeypatch.setattr(main.Database, "from_env", classmethod(lambda cls: db))
    app = FastAPI()

    with pytest.raises(RuntimeError):
        async with main.lifespan(app):
            pass

    assert db.events == ["connect", "apply_schema", "close"]
    assert app.state.sweeper is None


@pytest.mark.asyncio
async def test_lifespan_starts_and_stops_sweeper(monkeypatch):
    db = StubDatabase()
    monkeypatch.setattr(main.Database, "from_env", classmethod(lambda cls: db))
    monkeypatch.setenv("WAITLIST_SWEEP_ENABLED", "1")
    app = FastAPI()

    async with main.lifespan(app):
        assert app.state.db is db
        assert app.state.sweeper.running

    assert not app.state.sweeper.running
    assert db.events == ["connect", "apply_schema", "close"]


def test_cors_origins_from_env(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", "https://eliteclub.test, http://localhost:5173,")

    assert main.cors_origins() == ["https://eliteclub.test", "http://localhost:5173"]
