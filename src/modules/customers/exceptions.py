"""Customer domain exceptions.

Raised by the Service Layer (and the accounts gateway it calls) when a
business rule blocks an operation.  The API layer (Views) catches these and
translates them into HTTP responses.  Each exception exposes a stable
``code`` used in error bodies.
"""

from __future__ import annotations

from enum import StrEnum


class ValidationReason(StrEnum):
    """Why a candidate customer was rejected."""

    REQUIRED_FIELD = "REQUIRED_FIELD"
    INVALID_FORMAT = "INVALID_FORMAT"
    DUPLICATE_KEY = "DUPLICATE_KEY"


class CustomerValidationError(Exception):
    """A candidate customer violates a field rule.

    Only the first violated rule is ever reported; ``field`` names the
    offending attribute (``FirstName``, ``LastName``, ``DNI``, ``Email``).
    """

    def __init__(self, reason: ValidationReason, field: str, message: str) -> None:
        super().__init__(message)
        self.reason = reason
        self.field = field
        self.message = message

    @property
    def code(self) -> str:
        return self.reason.value


class CustomerNotFound(Exception):
    """The requested customer does not exist."""

    code = "NOT_FOUND"


class CustomerHasActiveAccounts(Exception):
    """The customer still holds active bank accounts and cannot be deleted."""

    code = "HAS_ACTIVE_ACCOUNTS"


class AccountServiceUnavailable(Exception):
    """The accounts service could not confirm the customer's account status.

    ``cause`` keeps the underlying transport error text for diagnostics.
    """

    code = "UPSTREAM_UNAVAILABLE"

    def __init__(self, message: str, cause: str = "") -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause


class AccountServiceInvalidResponse(AccountServiceUnavailable):
    """The accounts service answered, but not with a boolean payload."""

    code = "UPSTREAM_INVALID_RESPONSE"
