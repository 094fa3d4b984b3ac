"""Two-armed call result: every dispatch returns exactly one of these."""

from __future__ import annotations

from typing import Any, Callable, Literal, TypeVar, Union

from pydantic import BaseModel, ConfigDict

from .common import ErrorDetail

R = TypeVar("R")


class Failure(BaseModel):
    """Error arm."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["failure"] = "failure"
    error: ErrorDetail

    @property
    def is_success(self) -> bool:
        return False

    @property
    def is_failure(self) -> bool:
        return True

    def fold(self, on_failure: Callable[[ErrorDetail], R], on_success: Callable[[Any], R]) -> R:
        return on_failure(self.error)


class Success(BaseModel):
    """Success arm carrying a payload or a full envelope."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    kind: Literal["success"] = "success"
    value: Any = None

    @property
    def is_success(self) -> bool:
        return True

    @property
    def is_failure(self) -> bool:
        return False

    def fold(self, on_failure: Callable[[ErrorDetail], R], on_success: Callable[[Any], R]) -> R:
        return on_success(self.value)


Result = Union[Failure, Success]
