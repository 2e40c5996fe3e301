"""Tagged success/failure values returned by every public core function.

Core operations never raise across their public boundary. They return either
``Ok(value)`` or ``Err(error)``, where ``error`` is usually one of the
exceptions from :mod:`git_phantom.exceptions` used as a plain value.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful result."""

    value: T

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err(Generic[E]):
    """Failed result carrying a typed error value."""

    error: E

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self):
        if isinstance(self.error, BaseException):
            raise self.error
        raise RuntimeError(str(self.error))


Result = Union[Ok[T], Err[E]]


def is_ok(result: "Result") -> bool:
    """Return True if ``result`` is an :class:`Ok`."""
    return isinstance(result, Ok)


def is_err(result: "Result") -> bool:
    """Return True if ``result`` is an :class:`Err`."""
    return isinstance(result, Err)
