"""Tests for the FastAPI surface."""

import httpx
import pytest
from fastapi.testclient import TestClient

import akinator.main as api
from akinator.client import AkinatorClient
from akinator.game import Akinator

from tests.conftest import START_PAGE


@pytest.fixture
def http(monkeypatch, store, service):
    built = []
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(service.handler))

    def get_game(request):
        client = AkinatorClient(request.language, request.child_mode, http_client=http_client)
        game = Akinator(store=store, client=client)
        built.append(game)
        return game

    monkeypatch.setattr(api, "get_game", get_game)
    with TestClient(api.app) as test_client:
        test_client.built = built
        yield test_client


def test_health(http):
    response = http.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_play_through(http, service):
    service.queue_html("/game", START_PAGE)
    service.queue_json("/answer", {"question": "Is your character a woman?", "step": "1", "progression": "3.21000"})
    service.queue_json("/cancel_answer", {"question": "Is your character real?", "step": "0", "progression": "0.00000"})
    service.queue_json("/answer", {
        "valide_contrainte": "1",
        "photo": "https://example.test/photo.jpg",
        "description_proposition": "Physicist",
        "name_proposition": "Albert Einstein",
    })

    started = http.post("/game/start").json()
    assert started == {"ok": True, "result": {"id": started["result"]["id"], "question": "Is your character real?"}}
    session_id = started["result"]["id"]

    answered = http.post(f"/game/{session_id}/answer", json={"answer": "yes"}).json()
    assert answered["ok"]
    assert answered["result"]["step"] == 1
    assert answered["result"]["progress"] == "3.21000"

    back = http.post(f"/game/{session_id}/back").json()
    assert back["ok"]
    assert back["result"]["step"] == 0

    guess = http.post(f"/game/{session_id}/answer", json={"answer": 0}).json()
    assert guess == {
        "ok": True,
        "result": {
            "id": session_id,
            "photo": "https://example.test/photo.jpg",
            "description": "Physicist",
            "name": "Albert Einstein",
        },
    }


def test_start_options(http, service):
    service.queue_html("/game", START_PAGE)

    response = http.post("/game/start", json={"language": "en", "child_mode": True})

    assert response.json()["ok"]
    assert http.built[-1].child_mode is True
    assert service.form()["cm"] == "true"


def test_default_child_mode_sent_as_false(http, service):
    service.queue_html("/game", START_PAGE)

    http.post("/game/start")

    assert service.form()["cm"] == "false"


def test_unknown_session_is_an_envelope(http):
    response = http.post("/game/unknown/answer", json={"answer": "y"})

    assert response.status_code == 200
    assert response.json() == {
        "ok": False,
        "result": {
            "error": "Game session not found. Please start a new game.",
            "kind": "session_not_found",
        },
    }


def test_invalid_answer(http):
    response = http.post("/game/unknown/answer", json={"answer": "maybe"})
    assert response.json()["result"]["kind"] == "invalid_answer"


def test_boolean_answer_rejected(http):
    response = http.post("/game/unknown/answer", json={"answer": True})
    assert response.status_code == 422


def test_unsupported_language_rejected(http):
    response = http.post("/game/start", json={"language": "xx"})
    assert response.status_code == 422
