"""Response envelopes returned by every game operation.

Callers always get ``{"ok": ..., "result": {...}}`` and branch on ``ok`` and
``result.kind`` rather than on exception types or message text.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel

from akinator.errors import ErrorKind


class StartResult(BaseModel):
    id: Optional[str] = None
    question: Optional[str] = None
    error: Optional[str] = None
    kind: Optional[ErrorKind] = None


class StartResponse(BaseModel):
    ok: bool
    result: StartResult


class AnswerResult(BaseModel):
    id: Optional[str] = None
    progress: Optional[str] = None
    step: Optional[int] = None
    question: Optional[str] = None
    photo: Optional[str] = None
    description: Optional[str] = None
    name: Optional[str] = None
    error: Optional[str] = None
    kind: Optional[ErrorKind] = None


class AnswerResponse(BaseModel):
    ok: bool
    result: AnswerResult

