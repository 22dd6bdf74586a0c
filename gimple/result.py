"""Success/Failure pair returned by container lookups."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar, Union

from gimple.exceptions import GimpleException

T = TypeVar('T')
E = TypeVar('E', bound=GimpleException)


@dataclass(frozen=True)
class Success(Generic[T]):
    """A lookup that found its service; value may legitimately be None."""
    value: T

    def is_success(self) -> bool:
        return True

    def is_failure(self) -> bool:
        return False

    def map(self, fn: Callable[[T], Any]) -> Success[Any]:
        """Apply fn to the value.

        Exceptions raised by fn propagate: a failing factory is the caller's
        problem, not a missing service.
        """
        return Success(fn(self.value))

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: Any) -> T:
        return self.value


@dataclass(frozen=True)
class Failure(Generic[E]):
    """A lookup that failed with a container error."""
    error: E

    def is_success(self) -> bool:
        return False

    def is_failure(self) -> bool:
        return True

    def map(self, fn: Callable) -> Failure[E]:
        """Skip fn and pass the failure through."""
        return self

    def unwrap(self):
        raise self.error

    def unwrap_or(self, default: Any) -> Any:
        return default


Result = Union[Success[T], Failure[E]]
