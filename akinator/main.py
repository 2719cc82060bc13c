"""FastAPI surface for the Akinator session controller."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, StrictInt
from typing import Optional, Union

from akinator.config import Config
from akinator.game import Akinator
from akinator.models import Language
from akinator.schema import AnswerResponse, StartResponse
from akinator.store import FileSessionStore, SessionStore

app = FastAPI(title="Akinator session API")

# CORS for local development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Shared by every request so any controller can resume any game
store: SessionStore = FileSessionStore(cache_dir=Config.CACHE_DIR, ttl_ms=Config.SESSION_TTL_MS)


# Request models
class GameRequest(BaseModel):
    language: Language = Language(Config.LANGUAGE)
    child_mode: bool = Config.CHILD_MODE


class AnswerRequest(GameRequest):
    answer: Union[StrictInt, str]


def get_game(request: GameRequest) -> Akinator:
    """Build a controller bound to the shared store."""
    return Akinator(request.language, request.child_mode, store=store)


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.post("/game/start", response_model=StartResponse, response_model_exclude_none=True)
async def game_start(request: Optional[GameRequest] = None):
    """Start a new game and return its id and first question."""
    game = get_game(request or GameRequest())
    return await game.start_game()


@app.post("/game/{session_id}/answer", response_model=AnswerResponse, response_model_exclude_none=True)
async def game_answer(session_id: str, request: AnswerRequest):
    """Answer the current question of a game."""
    game = get_game(request)
    return await game.answer_question(request.answer, session_id)


@app.post("/game/{session_id}/back", response_model=AnswerResponse, response_model_exclude_none=True)
async def game_back(session_id: str, request: Optional[GameRequest] = None):
    """Go back one question."""
    game = get_game(request or GameRequest())
    return await game.back(session_id)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=Config.HOST, port=Config.PORT)
