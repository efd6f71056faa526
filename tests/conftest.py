from typing import Callable, Dict, List, Tuple, Union

import httpx
import pytest

from coreend import client
from coreend.api.api import Api
from coreend.io.persistence import MemoryTokenStore
from coreend.io.settings import CoreEndSettings

PROJECT_ID = 42
PREFIX = f"/v1/projects/{PROJECT_ID}/"

Handler = Union[httpx.Response, Callable[[httpx.Request], httpx.Response]]


class FakeServer:
    """Routes requests by (method, path relative to the project) and records them."""

    def __init__(self):
        self.routes: Dict[Tuple[str, str], Handler] = {}
        self.requests: List[httpx.Request] = []

    def add(self, method: str, path: str, handler: Handler) -> None:
        self.routes[(method, path)] = handler

    def calls(self, method: str, path: str) -> List[httpx.Request]:
        return [r for r in self.requests if (r.method, self.relative_path(r)) == (method, path)]

    @staticmethod
    def relative_path(request: httpx.Request) -> str:
        path = request.url.path
        return path[len(PREFIX):] if path.startswith(PREFIX) else path

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self.routes.get((request.method, self.relative_path(request)))
        if handler is None:
            return httpx.Response(404, json={"error": "not found"})
        if callable(handler):
            return handler(request)
        return handler


@pytest.fixture
def server() -> FakeServer:
    return FakeServer()


@pytest.fixture
def settings() -> CoreEndSettings:
    return CoreEndSettings(_env_file=None)


@pytest.fixture
def token_store() -> MemoryTokenStore:
    return MemoryTokenStore()


@pytest.fixture
def api(server, settings, token_store) -> Api:
    return Api(
        project_id=PROJECT_ID,
        settings=settings,
        token_store=token_store,
        transport=httpx.MockTransport(server),
    )


@pytest.fixture
def signed_in_server(server) -> FakeServer:
    server.add("POST", "auth/verify", httpx.Response(200, json={"accessToken": "T1", "refreshToken": "R1"}))
    return server


@pytest.fixture
def reset_default_instance(monkeypatch):
    monkeypatch.setattr(client, "_instance", None)
