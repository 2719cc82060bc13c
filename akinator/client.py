"""
client.py

Remote protocol adapter for the Akinator web game.

Endpoints used (form-encoded POST):
  https://{language}.akinator.com/game           -> HTML page with the first question
  https://{language}.akinator.com/answer         -> JSON payload
  https://{language}.akinator.com/cancel_answer  -> JSON payload

The start page carries the session and signature tokens inside the
"askSoundlike" form; both must be echoed on every later request.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import bs4
import httpx

from akinator.config import DEFAULT_USER_AGENT
from akinator.errors import MissingTokenError, NoDataError, ParseError, TransportError
from akinator.models import (
    Answer,
    Language,
    RemotePayload,
    SessionRecord,
    StartPage,
    UrlType,
    parse_progress,
    parse_step,
)

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 15.0

QUESTION_SELECTOR = "#question-label"
SESSION_SELECTOR = 'form#askSoundlike input[name="session"]'
SIGNATURE_SELECTOR = 'form#askSoundlike input[name="signature"]'


def build_url(language: Language | str, url_type: UrlType) -> str:
    return f"https://{Language(language).value}.akinator.com/{url_type.value}"


def parse_start_page(markup: str) -> StartPage:
    """
    Extract question, session and signature from the start page.

    Raises MissingTokenError when either token is absent, which means the
    service changed shape or rejected the request.
    """
    if not markup or not markup.strip():
        raise NoDataError("No data received from Akinator API")

    try:
        soup = bs4.BeautifulSoup(markup, "html5lib")
    except Exception as e:
        raise ParseError(f"Error parsing HTML document: {e}") from e

    question_el = soup.select_one(QUESTION_SELECTOR)
    session_el = soup.select_one(SESSION_SELECTOR)
    signature_el = soup.select_one(SIGNATURE_SELECTOR)

    question = question_el.get_text(strip=True) if question_el else ""
    session = (session_el.get("value") or "").strip() if session_el else ""
    signature = (signature_el.get("value") or "").strip() if signature_el else ""

    if not session or not signature:
        raise MissingTokenError("Error starting game: Session or signature missing")

    return StartPage(question=question, session=session, signature=signature)


def _truthy(value: Any) -> bool:
    # valide_contrainte has been seen both as a bool and as "0"/"1"
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes"}
    return bool(value)


def parse_payload(data: Any) -> RemotePayload:
    """Decode an answer/back JSON body into a RemotePayload."""
    if not data or not isinstance(data, dict):
        raise NoDataError("No data received from Akinator API")

    if _truthy(data.get("valide_contrainte")):
        return RemotePayload(
            concluded=True,
            photo=data.get("photo"),
            description=data.get("description_proposition"),
            name=data.get("name_proposition"),
        )

    missing = [k for k in ("question", "step", "progression") if data.get(k) is None]
    if missing:
        raise NoDataError(f"Incomplete data received from Akinator API: missing {', '.join(missing)}")

    try:
        step = parse_step(data["step"])
        parse_progress(data["progression"])
    except ValueError as e:
        raise NoDataError(f"Malformed data received from Akinator API: {e}") from e

    return RemotePayload(
        concluded=False,
        question=str(data["question"]),
        step=step,
        progress=str(data["progression"]).strip(),
    )


class AkinatorClient:
    """Issues the start, answer and go-back requests for one language."""

    def __init__(
        self,
        language: Language | str = Language.English,
        child_mode: bool = False,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self.language = Language(language)
        self.child_mode = bool(child_mode)
        self.timeout = timeout
        self._http_client = http_client
        self.headers = {"user-agent": user_agent}

        self.game_url = build_url(self.language, UrlType.Game)
        self.answer_url = build_url(self.language, UrlType.Answer)
        self.back_url = build_url(self.language, UrlType.Back)

    @property
    def _cm(self) -> str:
        return "true" if self.child_mode else "false"

    async def request_start(self) -> StartPage:
        r = await self._post(self.game_url, {"cm": self._cm, "sid": "1"})
        return parse_start_page(r.text)

    async def request_answer(self, record: SessionRecord, answer: Answer) -> RemotePayload:
        form = {
            "step": str(record.step),
            "progression": record.progress,
            "answer": str(int(answer)),
            "session": record.session,
            "signature": record.signature,
            "question_filter": "string",
            "sid": "NaN",
            "cm": self._cm,
            "step_last_proposition": "",
        }
        r = await self._post(self.answer_url, form)
        return parse_payload(self._json(r))

    async def request_back(self, record: SessionRecord) -> RemotePayload:
        form = {
            "step": str(record.step),
            "progression": record.progress,
            "session": record.session,
            "signature": record.signature,
            "cm": self._cm,
        }
        r = await self._post(self.back_url, form)
        return parse_payload(self._json(r))

    async def _post(self, url: str, form: Dict[str, str]) -> httpx.Response:
        try:
            if self._http_client is not None:
                r = await self._http_client.post(url, data=form, headers=self.headers)
                r.raise_for_status()
                return r

            async with httpx.AsyncClient(timeout=self.timeout) as client:
                r = await client.post(url, data=form, headers=self.headers)
                r.raise_for_status()
                return r
        except httpx.HTTPStatusError as e:
            logger.warning(f"Akinator returned HTTP {e.response.status_code} for {url}")
            raise TransportError(f"HTTP Error {e.response.status_code} from {url}") from e
        except httpx.HTTPError as e:
            logger.warning(f"Request to {url} failed: {type(e).__name__}: {e}")
            raise TransportError(f"Request to {url} failed: {type(e).__name__}: {e}") from e

    @staticmethod
    def _json(r: httpx.Response) -> Any:
        if not r.content or not r.content.strip():
            raise NoDataError("No data received from Akinator API")
        try:
            return r.json()
        except ValueError as e:
            raise NoDataError(f"Malformed data received from Akinator API: {e}") from e
