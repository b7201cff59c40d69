"""Tagged success/failure values returned by the services"""
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar, Union

from eternal_admin.errors import AppError, FailureKind

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    kind: FailureKind
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return False

    @property
    def detail(self) -> str:
        return self.message or self.kind.default_message


Result = Union[Ok[T], Err]


def unwrap(result: "Result[T]") -> T:
    """Return the success value or raise :class:`AppError` for the failure."""
    if isinstance(result, Err):
        raise AppError(result.kind, result.message)
    return result.value
