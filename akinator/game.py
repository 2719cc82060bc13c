"""
Game session controller.

States: not started -> in progress -> concluded. A concluded game is purged
from the store; ``back`` may lower progress but never leaves "in progress".

Every public operation returns an envelope and never raises. Store writes
that fail are logged by the store and do not change the returned result.

Two concurrent calls for the same session id are not serialized: both read
the same record, both post with that step/progress, and the last store write
wins.
"""

from __future__ import annotations

import logging
import uuid
from typing import Optional

from akinator.answers import AnswerInput, normalize_answer
from akinator.client import AkinatorClient
from akinator.config import Config
from akinator.errors import AkinatorError, ErrorKind, NoDataError, SessionNotFoundError
from akinator.models import INITIAL_PROGRESS, Language, RemotePayload, SessionRecord
from akinator.schema import AnswerResponse, AnswerResult, StartResponse, StartResult
from akinator.store import FileSessionStore, SessionStore

logger = logging.getLogger(__name__)


def _error_kind(e: Exception) -> ErrorKind:
    if isinstance(e, AkinatorError):
        return e.kind
    logger.exception(f"Unexpected error: {type(e).__name__}: {e}")
    return ErrorKind.INTERNAL


def _message(e: Exception) -> str:
    return str(e) or type(e).__name__


class Akinator:
    """One player's view of a remote game.

    The session id is generated once per instance. Any instance sharing the
    same store can continue a game given that id.
    """

    def __init__(
        self,
        language: Optional[Language | str] = None,
        child_mode: Optional[bool] = None,
        *,
        store: Optional[SessionStore] = None,
        client: Optional[AkinatorClient] = None,
    ) -> None:
        """
        Args:
            language: Service subdomain. Defaults to English, or to the
                injected client's language.
            child_mode: Child-safe game. Defaults to False, or to the
                injected client's setting.
            store: Session store; a FileSessionStore under Config.CACHE_DIR if omitted.
            client: Remote adapter; built from language/child_mode if omitted.

        Raises:
            ValueError: unknown language, or language/child_mode that
                contradict the injected client.
        """
        if client is None:
            client = AkinatorClient(
                language=Language(language) if language is not None else Language.English,
                child_mode=bool(child_mode),
                timeout=Config.TIMEOUT,
                user_agent=Config.USER_AGENT,
            )
        else:
            if language is not None and Language(language) != client.language:
                raise ValueError(
                    f"language '{Language(language).value}' conflicts with client language '{client.language.value}'"
                )
            if child_mode is not None and bool(child_mode) != client.child_mode:
                raise ValueError(
                    f"child_mode={child_mode} conflicts with client child_mode={client.child_mode}"
                )

        self.client = client
        self.store = store if store is not None else FileSessionStore(
            cache_dir=Config.CACHE_DIR,
            ttl_ms=Config.SESSION_TTL_MS,
        )

        self._id = str(uuid.uuid4())
        self._session = ""
        self._signature = ""
        self._question = ""

    @property
    def id(self) -> str:
        return self._id

    @property
    def language(self) -> Language:
        return self.client.language

    @property
    def child_mode(self) -> bool:
        return self.client.child_mode

    @property
    def session(self) -> str:
        return self._session

    @property
    def signature(self) -> str:
        return self._signature

    @property
    def question(self) -> str:
        return self._question

    def session_exists(self, session_id: str) -> bool:
        return self.store.get(session_id) is not None

    async def start_game(self) -> StartResponse:
        """Open a new game and persist its tokens under this instance's id."""
        try:
            page = await self.client.request_start()

            self._question = page.question
            self._session = page.session
            self._signature = page.signature

            self.store.put(self._id, SessionRecord(
                session=page.session,
                signature=page.signature,
                progress=INITIAL_PROGRESS,
                step=0,
            ))
            logger.info(f"Started game {self._id} ({self.language.value}, child_mode={self.child_mode})")

            return StartResponse(ok=True, result=StartResult(id=self._id, question=page.question))
        except Exception as e:
            kind = _error_kind(e)
            if kind != ErrorKind.INTERNAL:
                logger.warning(f"Error in start_game: {_message(e)}")
            return StartResponse(ok=False, result=StartResult(error=_message(e), kind=kind))

    async def answer_question(self, answer: AnswerInput, session_id: str) -> AnswerResponse:
        """Send an answer for the current question of ``session_id``."""
        try:
            code = normalize_answer(answer)
            record = self._load(session_id)

            payload = await self.client.request_answer(record, code)

            if payload.concluded:
                self.store.delete(session_id)
                logger.info(f"Game {session_id} concluded with guess {payload.name!r}")
                return AnswerResponse(ok=True, result=AnswerResult(
                    id=session_id,
                    photo=payload.photo,
                    description=payload.description,
                    name=payload.name,
                ))

            return self._advance(session_id, record, payload)
        except Exception as e:
            return self._answer_error("answer_question", e)

    async def back(self, session_id: str) -> AnswerResponse:
        """Undo the last answer of ``session_id``."""
        try:
            record = self._load(session_id)
            payload = await self.client.request_back(record)
            return self._advance(session_id, record, payload)
        except Exception as e:
            return self._answer_error("back", e)

    def _load(self, session_id: str) -> SessionRecord:
        record = self.store.get(session_id)
        if record is None:
            raise SessionNotFoundError(session_id)
        return record

    def _advance(self, session_id: str, record: SessionRecord, payload: RemotePayload) -> AnswerResponse:
        # a back-step never yields a guess
        if payload.concluded or payload.step is None or payload.progress is None:
            raise NoDataError("No data received from Akinator API")

        self.store.put(session_id, record.advance(step=payload.step, progress=payload.progress))
        if session_id == self._id:
            self._question = payload.question or ""

        return AnswerResponse(ok=True, result=AnswerResult(
            id=session_id,
            progress=payload.progress,
            step=payload.step,
            question=payload.question,
        ))

    def _answer_error(self, operation: str, e: Exception) -> AnswerResponse:
        kind = _error_kind(e)
        if kind != ErrorKind.INTERNAL:
            logger.warning(f"Error in {operation}: {_message(e)}")
        return AnswerResponse(ok=False, result=AnswerResult(error=_message(e), kind=kind))
