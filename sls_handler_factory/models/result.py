"""
Invocation outcome models.

Tagged result produced at the handler boundary:
Succeeded(value) | ExpectedFailure(response) | UnexpectedFailure(error).
"""

from dataclasses import dataclass
from typing import Any, Union

from ..core.exceptions import HandlerCustomError


@dataclass(frozen=True)
class Succeeded:
    value: Any

    @property
    def response(self) -> Any:
        return self.value


@dataclass(frozen=True)
class ExpectedFailure:
    """Business-level rejection; completes as a success with `response`."""

    response: Any
    error: HandlerCustomError


@dataclass(frozen=True)
class UnexpectedFailure:
    """Any other failure; surfaces as an invocation error."""

    error: BaseException

    @property
    def response(self) -> None:
        return None


InvocationOutcome = Union[Succeeded, ExpectedFailure, UnexpectedFailure]


def classify_failure(error: BaseException) -> Union[ExpectedFailure, UnexpectedFailure]:
    """Split a failure into the expected/unexpected variants."""
    if isinstance(error, HandlerCustomError):
        return ExpectedFailure(response=error.response, error=error)
    return UnexpectedFailure(error=error)


def is_success_shaped(outcome: InvocationOutcome) -> bool:
    """True when the invocation completes without an error for the caller."""
    return not isinstance(outcome, UnexpectedFailure)
