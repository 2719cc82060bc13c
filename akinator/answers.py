from __future__ import annotations

from typing import Union

from akinator.errors import InvalidAnswerError
from akinator.models import Answer

AnswerInput = Union[Answer, int, str]

ALIASES = {
    "y": Answer.Yes,
    "yes": Answer.Yes,
    "n": Answer.No,
    "no": Answer.No,
    "idk": Answer.IdontKnow,
    "i don't know": Answer.IdontKnow,
    "p": Answer.Probably,
    "probably": Answer.Probably,
    "pn": Answer.ProbablyNot,
    "probably not": Answer.ProbablyNot,
}


def normalize_answer(answer: AnswerInput) -> Answer:
    """
    Map a caller-supplied answer to the code the service expects.

    Accepts an Answer code, its integer value, a short alias ("y", "pn"),
    the spelled-out phrase ("probably not") in any case, or the exact
    member name ("ProbablyNot").
    """
    if isinstance(answer, bool):
        raise InvalidAnswerError(answer)

    if isinstance(answer, int):
        try:
            return Answer(answer)
        except ValueError:
            raise InvalidAnswerError(answer) from None

    if not isinstance(answer, str):
        raise InvalidAnswerError(answer)

    alias = ALIASES.get(answer.strip().lower())
    if alias is not None:
        return alias

    if answer in Answer.__members__:
        return Answer[answer]

    raise InvalidAnswerError(answer)
