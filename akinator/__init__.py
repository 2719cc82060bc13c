"""Session-oriented client for the Akinator web game."""

from akinator.answers import normalize_answer
from akinator.client import AkinatorClient
from akinator.errors import (
    AkinatorError,
    ErrorKind,
    InvalidAnswerError,
    MissingTokenError,
    NoDataError,
    ParseError,
    SessionNotFoundError,
    TransportError,
)
from akinator.game import Akinator
from akinator.models import Answer, Language, SessionRecord
from akinator.store import FileSessionStore, MemorySessionStore, SessionStore

__version__ = "0.1.0"

__all__ = [
    "Akinator",
    "AkinatorClient",
    "Answer",
    "Language",
    "SessionRecord",
    "normalize_answer",
    "SessionStore",
    "FileSessionStore",
    "MemorySessionStore",
    "AkinatorError",
    "ErrorKind",
    "InvalidAnswerError",
    "MissingTokenError",
    "NoDataError",
    "ParseError",
    "SessionNotFoundError",
    "TransportError",
]
