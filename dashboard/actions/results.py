# dashboard/actions/results.py
"""
Outcomes of the dashboard actions.

Actions never redirect by themselves: they return one of the result types
below and the caller acts on it (the HTTP layer turns `Success` into a
303 redirect to `next_path`).
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

from pydantic import BaseModel


class State(BaseModel):
    """Form state returned to the browser when an action did not succeed."""

    errors: Optional[Dict[str, List[str]]] = None
    message: Optional[str] = None


@dataclass(frozen=True)
class Success:
    next_path: str
    message: Optional[str] = None


@dataclass(frozen=True)
class ValidationFailure:
    errors: Dict[str, List[str]] = field(default_factory=dict)
    message: Optional[str] = None

    def to_state(self) -> State:
        return State(errors=self.errors, message=self.message)


@dataclass(frozen=True)
class ExecutionFailure:
    message: str

    def to_state(self) -> State:
        return State(message=self.message)


@dataclass(frozen=True)
class AuthenticationFailure:
    message: str

    def to_state(self) -> State:
        return State(message=self.message)


ActionResult = Union[Success, ValidationFailure, ExecutionFailure]
AuthResult = Union[Success, AuthenticationFailure]
