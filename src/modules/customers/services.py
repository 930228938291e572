"""Customer service layer (Use Cases).

Orchestrates business logic for the Customer aggregate, delegating
persistence to the injected ``ICustomerRepository``, field rules to
``CustomerValidator`` and the active-accounts check to an
``IAccountStatusGateway``.

Business rules enforced here:
- Every create and update passes the full validator first; a rejected
  candidate never reaches the repository.
- Identity and DNI are immutable across updates.
- A customer is deleted only after the accounts service confirms they hold
  no active accounts.  If the check fails, nothing is deleted.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional

import structlog
from django.db import IntegrityError, transaction

from modules.customers.exceptions import (
    AccountServiceUnavailable,
    CustomerHasActiveAccounts,
    CustomerNotFound,
    CustomerValidationError,
    ValidationReason,
)
from modules.customers.models import Customer

if TYPE_CHECKING:
    from django.db import models

    from modules.customers.dtos import CustomerDTO
    from modules.customers.gateways import IAccountStatusGateway
    from modules.customers.repositories.interfaces import ICustomerRepository
    from modules.customers.validators import CustomerValidator

logger = structlog.get_logger(__name__)

MUTABLE_FIELDS = ("first_name", "last_name", "email")


class CustomerService:
    """Application service for Customer use-cases.

    Collaborators are received via constructor injection (DIP).
    """

    def __init__(
        self,
        repository: ICustomerRepository,
        validator: CustomerValidator,
        accounts_gateway: IAccountStatusGateway,
    ) -> None:
        self._repo = repository
        self._validator = validator
        self._accounts = accounts_gateway

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_customer(self, dto: CustomerDTO) -> Customer:
        """Validate and persist a new customer.

        Raises:
            CustomerValidationError: for the first rule the candidate breaks.
        """
        candidate = dto.with_id(None) if dto.id is not None else dto
        self._validate(candidate)

        customer = Customer(
            first_name=candidate.first_name,
            last_name=candidate.last_name,
            dni=candidate.dni,
            email=candidate.email,
        )
        try:
            customer = self._repo.save(customer)
        except IntegrityError as exc:
            # Another request stored the same DNI after the validator ran.
            logger.warning("customer.duplicate_dni", error=str(exc))
            raise CustomerValidationError(
                ValidationReason.DUPLICATE_KEY,
                "DNI",
                "A client with this DNI already exists.",
            ) from exc
        logger.info("customer.created", customer_id=customer.id)
        return customer

    @transaction.atomic
    def update_customer(self, id: int, dto: CustomerDTO) -> Customer:
        """Replace the mutable fields of an existing customer.

        The candidate is validated as if it were customer ``id``, so its own
        DNI does not count as a duplicate.  Only first name, last name and
        email are copied; the stored DNI is kept even when the candidate
        carries a different one.

        The row stays locked from look-up to write, and the write is an
        UPDATE only, so a customer deleted concurrently is reported as not
        found instead of being stored again.

        Raises:
            CustomerNotFound: if the customer does not exist.
            CustomerValidationError: for the first rule the candidate breaks.
        """
        customer = self._repo.get_by_id_for_update(id)
        if customer is None:
            raise CustomerNotFound(f"Customer not found with id: {id}")

        log = logger.bind(customer_id=customer.id)
        self._validate(dto.with_id(customer.id))

        for field in MUTABLE_FIELDS:
            setattr(customer, field, getattr(dto, field))

        if not self._repo.update(customer, MUTABLE_FIELDS):
            raise CustomerNotFound(f"Customer not found with id: {id}")
        log.info("customer.updated")
        return customer

    def delete_customer(self, id: int) -> None:
        """Delete a customer that holds no active bank accounts.

        Order is fixed: look-up, then the accounts check, then the delete.
        The accounts service is never called for an unknown id.  The
        accounts call runs outside any database transaction; only the
        delete itself is atomic.

        Raises:
            CustomerNotFound: if the customer does not exist.
            CustomerHasActiveAccounts: if the accounts service reports
                active accounts.
            AccountServiceUnavailable: if the accounts service fails or
                answers with unusable data (fail closed).
        """
        customer = self._repo.get_by_id(id)
        if customer is None:
            raise CustomerNotFound(f"Customer with ID {id} not found.")

        log = logger.bind(customer_id=customer.id)

        try:
            has_active = self._accounts.has_active_accounts(customer.id)
        except AccountServiceUnavailable as exc:
            log.warning("customer.delete_unconfirmed", code=exc.code, cause=exc.cause)
            raise

        if has_active:
            log.warning("customer.delete_blocked")
            raise CustomerHasActiveAccounts(
                "Cannot delete customer with active accounts."
            )

        if not self._repo.delete(customer):
            raise CustomerNotFound(f"Customer with ID {id} not found.")
        log.info("customer.deleted")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_customers(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> models.QuerySet[Customer]:
        """Return all customers, optionally filtered."""
        return self._repo.list(filters)

    def get_customer(self, id: int) -> Optional[Customer]:
        """Return the customer with ``id``, or ``None`` when absent."""
        customer = self._repo.get_by_id(id)
        logger.info("customer.retrieved", customer_id=id, found=customer is not None)
        return customer

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _validate(self, candidate: CustomerDTO) -> None:
        try:
            self._validator.validate(candidate)
        except CustomerValidationError as exc:
            logger.warning(
                "customer.validation_failed",
                customer_id=candidate.id,
                reason=exc.code,
                field=exc.field,
            )
            raise
