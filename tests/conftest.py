"""
Pytest fixtures for Akinator tests.

The remote service is simulated with httpx.MockTransport; each test
registers the responses it needs per endpoint path.
"""

import json

import httpx
import pytest

from akinator.client import AkinatorClient
from akinator.game import Akinator
from akinator.store import MemorySessionStore


START_PAGE = """<!DOCTYPE html>
<html>
<body>
  <div class="bubble-body">
    <p class="question-text" id="question-label">Is your character real?</p>
  </div>
  <form id="askSoundlike" method="post" action="/answer">
    <input type="hidden" name="session" value="abc-session-1">
    <input type="hidden" name="signature" value="sig-987654">
  </form>
</body>
</html>
"""

START_PAGE_NO_SESSION = """<!DOCTYPE html>
<html>
<body>
  <p id="question-label">Is your character real?</p>
  <form id="askSoundlike">
    <input type="hidden" name="signature" value="sig-987654">
  </form>
</body>
</html>
"""


class FakeClock:
    """Epoch-millisecond clock advanced by hand."""

    def __init__(self, start: int = 1_700_000_000_000):
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int):
        self.now += ms


class FakeAkinatorService:
    """
    Scripted stand-in for the remote endpoints.

    Responses are queued per path ("/game", "/answer", "/cancel_answer")
    and every request is recorded with its decoded form body.
    """

    def __init__(self):
        self.responses: dict[str, list[httpx.Response]] = {}
        self.requests: list[httpx.Request] = []

    def queue(self, path: str, response: httpx.Response):
        self.responses.setdefault(path, []).append(response)

    def queue_html(self, path: str, markup: str, status_code: int = 200):
        self.queue(path, httpx.Response(status_code, text=markup))

    def queue_json(self, path: str, payload, status_code: int = 200):
        self.queue(path, httpx.Response(status_code, content=json.dumps(payload).encode()))

    def form(self, index: int = -1) -> dict[str, str]:
        request = self.requests[index]
        return dict(httpx.QueryParams(request.content.decode()))

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        queued = self.responses.get(request.url.path) or []
        if not queued:
            return httpx.Response(404, text="not found")
        return queued.pop(0)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(clock: FakeClock) -> MemorySessionStore:
    return MemorySessionStore(clock=clock)


@pytest.fixture
def service() -> FakeAkinatorService:
    return FakeAkinatorService()


@pytest.fixture
def client(service: FakeAkinatorService) -> AkinatorClient:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(service.handler))
    return AkinatorClient(language="en", http_client=http_client)


@pytest.fixture
def game(store: MemorySessionStore, client: AkinatorClient) -> Akinator:
    return Akinator("en", store=store, client=client)
