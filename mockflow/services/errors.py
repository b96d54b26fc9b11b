"""Error taxonomy and result type shared by the service layer.

Service operations never let these errors escape: each public method is wrapped
with :func:`returns_result`, so callers receive a :class:`Result` and decide how
to present a failure. The HTTP layer does this with :func:`unwrap`.
"""

import functools
import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Generic, ParamSpec, TypeVar

from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)

T = TypeVar("T")
P = ParamSpec("P")


class ErrorKind(str, Enum):
    """Category of a service failure."""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    INSUFFICIENT_PERMISSION = "insufficient_permission"
    CONFLICT = "conflict"
    STORE = "store"


class CoreError(Exception):
    """Base class for failures reported by the service layer."""

    kind: ErrorKind = ErrorKind.STORE

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(CoreError):
    """Malformed input: bad type/platform pairing, out-of-range paging, etc."""

    kind = ErrorKind.VALIDATION


class NotFoundOrUnauthorized(CoreError):
    """The record does not exist or the requester may not know that it does."""

    kind = ErrorKind.NOT_FOUND


class InsufficientPermission(CoreError):
    """The requester can see the record but the tier does not allow this action."""

    kind = ErrorKind.INSUFFICIENT_PERMISSION


class ConflictError(CoreError):
    """A concurrent write won the race; the caller should retry."""

    kind = ErrorKind.CONFLICT


class StoreError(CoreError):
    """The persistence layer failed."""

    kind = ErrorKind.STORE


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of a service operation: a value or an error, never both."""

    value: T | None = None
    error: CoreError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: CoreError) -> "Result[T]":
        return cls(error=error)


def returns_result(func: Callable[P, T]) -> Callable[P, Result[T]]:
    """Wrap a service method so it returns a Result instead of raising.

    ``CoreError`` becomes a failed result. ``SQLAlchemyError`` rolls back the
    session held on ``self.db`` and becomes an opaque ``StoreError``.
    """

    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> Result[T]:
        try:
            return Result.success(func(*args, **kwargs))
        except CoreError as e:
            return Result.failure(e)
        except SQLAlchemyError as e:
            db = getattr(args[0], "db", None) if args else None
            if db is not None:
                db.rollback()
            logger.error(f"Store failure in {func.__qualname__}: {e}")
            return Result.failure(StoreError("Storage operation failed"))

    return wrapper
