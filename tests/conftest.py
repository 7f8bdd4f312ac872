from __future__ import annotations

import sqlite3
from contextlib import closing
from pathlib import Path
from typing import Callable, Dict, Iterator, Optional

import httpx
import pytest

from settings import get_settings

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture(autouse=True)
def _fresh_settings() -> Iterator[None]:
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def sqlite_db(tmp_path: Path) -> Path:
    path = tmp_path / "firealarm.db"
    with closing(sqlite3.connect(path)) as connection:
        connection.execute("CREATE TABLE sensors (room TEXT PRIMARY KEY, endpoint TEXT)")
        connection.commit()
    return path


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[[str], Path]:
    """Write ``resources/config.properties`` below a fresh root and return the root."""

    def _write(content: str, root: Optional[Path] = None) -> Path:
        base = root or tmp_path / "root"
        resources = base / "resources"
        resources.mkdir(parents=True, exist_ok=True)
        (resources / "config.properties").write_text(content, encoding="utf-8")
        return base

    return _write


@pytest.fixture
def location(write_config, sqlite_db: Path) -> Path:
    return write_config(f"dblocation = sqlite:///{sqlite_db}\n")


def _json_sensor(temperatures: Dict[str, object]) -> Handler:
    """Serve ``{"temperature": value}`` for ``http://sensors.test/<room>``."""

    def handler(request: httpx.Request) -> httpx.Response:
        room = request.url.path.strip("/")
        if room not in temperatures:
            return httpx.Response(404, json={"detail": "unknown room"})
        return httpx.Response(200, json={"temperature": temperatures[room]})

    return handler


@pytest.fixture
def mock_client() -> Iterator[Callable[[Handler], httpx.Client]]:
    """Build httpx clients whose requests are answered by ``handler``."""
    clients: list[httpx.Client] = []

    def _build(handler: Handler) -> httpx.Client:
        client = httpx.Client(transport=httpx.MockTransport(handler))
        clients.append(client)
        return client

    yield _build
    for client in clients:
        client.close()


@pytest.fixture
def sensor_client(mock_client) -> Callable[[Dict[str, object]], httpx.Client]:
    def _build(temperatures: Dict[str, object]) -> httpx.Client:
        return mock_client(_json_sensor(temperatures))

    return _build
