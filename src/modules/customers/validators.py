"""Field validation for candidate customers.

Rules run in a fixed order and stop at the first failure, so the reported
reason is always the first violated rule:

1. first name is present and non-empty
2. last name is present and non-empty
3. DNI is exactly 8 ASCII digits
4. email looks like ``local-part@domain``
5. no *other* customer already holds the DNI

Only rule 5 touches the repository (a single read).
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Optional

import structlog

from modules.customers.exceptions import CustomerValidationError, ValidationReason

if TYPE_CHECKING:
    from modules.customers.dtos import CustomerDTO
    from modules.customers.repositories.interfaces import ICustomerRepository

logger = structlog.get_logger(__name__)

DNI_PATTERN = re.compile(r"[0-9]{8}")
EMAIL_PATTERN = re.compile(r"[A-Za-z0-9_.-]+@[A-Za-z0-9.-]+")


class CustomerValidator:
    def __init__(self, repository: ICustomerRepository) -> None:
        self._repo = repository

    def validate(self, candidate: CustomerDTO) -> None:
        """Raise ``CustomerValidationError`` for the first rule ``candidate`` breaks."""
        self._require(candidate.first_name, "FirstName")
        self._require(candidate.last_name, "LastName")
        self._match(
            candidate.dni,
            DNI_PATTERN,
            "DNI",
            "Invalid DNI format. It must contain exactly 8 digits.",
        )
        self._match(
            candidate.email,
            EMAIL_PATTERN,
            "Email",
            "Invalid email format. It must follow the format 'user123@mail.com'.",
        )
        self._ensure_unique_dni(candidate.dni, candidate.id)

    @staticmethod
    def _require(value: Optional[str], field: str) -> None:
        # whitespace-only counts as empty; valid names are stored as sent
        if not value or not value.strip():
            raise CustomerValidationError(
                ValidationReason.REQUIRED_FIELD, field, f"{field} is required."
            )

    @staticmethod
    def _match(
        value: Optional[str], pattern: re.Pattern[str], field: str, message: str
    ) -> None:
        # fullmatch: "$" would accept a trailing newline
        if value is None or pattern.fullmatch(value) is None:
            raise CustomerValidationError(ValidationReason.INVALID_FORMAT, field, message)

    def _ensure_unique_dni(self, dni: str, customer_id: Optional[int]) -> None:
        existing = self._repo.get_by_dni(dni)
        if existing is not None and existing.id != customer_id:
            logger.warning(
                "customer.duplicate_dni",
                customer_id=customer_id,
                existing_customer_id=existing.id,
            )
            raise CustomerValidationError(
                ValidationReason.DUPLICATE_KEY,
                "DNI",
                "A client with this DNI already exists.",
            )
