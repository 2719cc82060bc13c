"""Error taxonomy for game operations."""

from enum import Enum


class ErrorKind(str, Enum):
    INVALID_ANSWER = "invalid_answer"
    SESSION_NOT_FOUND = "session_not_found"
    MISSING_TOKEN = "missing_token"
    PARSE_ERROR = "parse_error"
    NO_DATA = "no_data"
    TRANSPORT_ERROR = "transport_error"
    INTERNAL = "internal"


class AkinatorError(Exception):
    """Base class for expected failures of a game operation."""

    kind: ErrorKind = ErrorKind.INTERNAL


class InvalidAnswerError(AkinatorError):
    kind = ErrorKind.INVALID_ANSWER

    def __init__(self, answer):
        super().__init__(f"Invalid answer: {answer!r}")
        self.answer = answer


class SessionNotFoundError(AkinatorError):
    kind = ErrorKind.SESSION_NOT_FOUND

    def __init__(self, session_id: str):
        super().__init__("Game session not found. Please start a new game.")
        self.session_id = session_id


class ParseError(AkinatorError):
    """The remote markup did not have the expected shape."""
    kind = ErrorKind.PARSE_ERROR


class MissingTokenError(ParseError):
    kind = ErrorKind.MISSING_TOKEN


class NoDataError(AkinatorError):
    kind = ErrorKind.NO_DATA


class TransportError(AkinatorError):
    kind = ErrorKind.TRANSPORT_ERROR
