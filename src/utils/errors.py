from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    DUPLICATE_EMAIL = "DuplicateEmail"
    DUPLICATE_FULL_NAME = "DuplicateFullName"
    INVALID_CREDENTIALS = "InvalidCredentials"
    NOT_AUTHENTICATED = "NotAuthenticated"
    PRODUCT_NOT_FOUND = "ProductNotFound"
    INCOMPLETE_FIELDS = "IncompleteFields"
    INVALID_CARD_DETAILS = "InvalidCardDetails"
    PAYMENT_IN_PROGRESS = "PaymentInProgress"


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Outcome of a user-facing operation.

    Failures carry an ErrorKind and a message meant to be shown as-is.
    A failure without an ErrorKind is a notice (nothing went wrong, nothing
    was done either), e.g. clearing an empty cart.
    """

    success: bool
    message: str = ""
    error: Optional[ErrorKind] = None
    value: Optional[T] = None

    @classmethod
    def ok(cls, value: Optional[T] = None, message: str = "") -> Result[T]:
        return cls(True, message, None, value)

    @classmethod
    def fail(cls, error: Optional[ErrorKind], message: str) -> Result[T]:
        return cls(False, message, error, None)

    def __bool__(self) -> bool:
        return self.success
