"""Data models for the Akinator session protocol."""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum, IntEnum
from typing import Any, Dict, Optional


class Answer(IntEnum):
    """Answer codes expected by the remote service."""
    Yes = 0
    No = 1
    IdontKnow = 2
    Probably = 3
    ProbablyNot = 4


class Language(str, Enum):
    """Subdomains the remote service is hosted on."""
    English = "en"
    Arabic = "ar"
    Chinese = "cn"
    German = "de"
    Spanish = "es"
    French = "fr"
    Hebrew = "il"
    Italian = "it"
    Japanese = "jp"
    Korean = "kr"
    Dutch = "nl"
    Polish = "pl"
    Portuguese = "pt"
    Russian = "ru"
    Turkish = "tr"
    Indonesian = "id"


class UrlType(str, Enum):
    """Endpoint path segments."""
    Game = "game"
    Answer = "answer"
    Back = "cancel_answer"


INITIAL_PROGRESS = "0.00000"


def parse_step(value: Any) -> int:
    """Parse a step index as reported by the service ("3" or 3)."""
    if isinstance(value, bool):
        raise ValueError(f"Invalid step: {value!r}")
    step = int(str(value).strip())
    if step < 0:
        raise ValueError(f"Invalid step: {value!r}")
    return step


def parse_progress(value: Any) -> Decimal:
    """Parse a progress ratio without trusting its text formatting."""
    if isinstance(value, bool) or value is None:
        raise ValueError(f"Invalid progress: {value!r}")
    try:
        progress = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValueError(f"Invalid progress: {value!r}") from None
    if not progress.is_finite() or progress < 0:
        raise ValueError(f"Invalid progress: {value!r}")
    return progress


@dataclass
class SessionRecord:
    """Per-game state echoed back to the service on every request."""
    session: str
    signature: str
    progress: str = INITIAL_PROGRESS
    step: int = 0

    def advance(self, step: int, progress: str) -> "SessionRecord":
        return SessionRecord(
            session=self.session,
            signature=self.signature,
            progress=progress,
            step=step,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "session": self.session,
            "signature": self.signature,
            "progress": self.progress,
            "step": self.step,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SessionRecord":
        return cls(
            session=str(data["session"]),
            signature=str(data["signature"]),
            progress=str(data.get("progress", INITIAL_PROGRESS)),
            step=parse_step(data.get("step", 0)),
        )


@dataclass
class StartPage:
    """Fields extracted from the game-start markup."""
    question: str
    session: str
    signature: str


@dataclass
class RemotePayload:
    """A decoded answer/back response.

    When ``concluded`` is False the question/step/progress fields are set,
    otherwise photo/description/name carry the final guess.
    """
    concluded: bool
    question: Optional[str] = None
    step: Optional[int] = None
    progress: Optional[str] = None
    photo: Optional[str] = None
    description: Optional[str] = None
    name: Optional[str] = None
