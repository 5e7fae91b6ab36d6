from collections.abc import Generator
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from match_api.core.config import Settings
from match_api.main import create_app
from match_api.models.match import Match
from match_api.services.matches import MatchService, get_match_service


class FakeMatchService(MatchService):
    def __init__(self) -> None:  # pragma: no cover - simple data wiring
        self.calls: list[str] = []
        self.match = Match(home_team="Deportivo", away_team="Celta", championship="LaLiga")

    async def get_match(self, match_id: str):
        self.calls.append(match_id)
        return self.match


@pytest.fixture()
def static_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "api-docs"
    directory.mkdir()
    (directory / "index.html").write_text("<h1>Match API docs</h1>")
    return directory


@pytest.fixture()
def settings(static_dir: Path) -> Settings:
    return Settings(static_dir=str(static_dir), tracing_enabled=False)


@pytest.fixture()
def app(settings: Settings) -> FastAPI:
    return create_app(settings)


@pytest.fixture()
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def not_found_client(settings: Settings) -> Generator[TestClient, None, None]:
    app = create_app(settings.model_copy(update={"match_variant": "not_found"}))
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def fake_service(app: FastAPI) -> Generator[FakeMatchService, None, None]:
    service = FakeMatchService()
    app.dependency_overrides[get_match_service] = lambda: service
    yield service
    app.dependency_overrides.clear()


@pytest.fixture()
def anyio_backend() -> str:
    return "asyncio"
