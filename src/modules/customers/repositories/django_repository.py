"""Django ORM implementation of the Customer repository.

Satisfies ``ICustomerRepository`` using Django's QuerySet API.
Error handling follows the Null Object pattern: look-ups return ``None``
instead of raising, and the Service Layer decides how to translate a
missing entity.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

import structlog
from django.db import models, transaction
from django.utils import timezone

from modules.customers.models import Customer
from modules.customers.repositories.interfaces import ICustomerRepository

logger = structlog.get_logger(__name__)


class CustomerDjangoRepository(ICustomerRepository):
    """Concrete Customer repository backed by Django ORM."""

    def get_by_id(self, id: int) -> Optional[Customer]:
        """Retrieve a customer by primary key.

        Returns ``None`` for non-existent or non-numeric IDs.
        """
        try:
            return Customer.objects.filter(id=id).first()
        except (TypeError, ValueError):
            return None

    def get_by_id_for_update(self, id: int) -> Optional[Customer]:
        """Retrieve a customer and lock its row until the transaction ends.

        Must be called inside ``transaction.atomic``.
        """
        try:
            return Customer.objects.select_for_update().filter(id=id).first()
        except (TypeError, ValueError):
            return None

    def exists_by_id(self, id: int) -> bool:
        try:
            return Customer.objects.filter(id=id).exists()
        except (TypeError, ValueError):
            return False

    def list(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> models.QuerySet[Customer]:
        """List customers with optional Django ORM look-ups.

        Examples of valid filters::

            {"dni": "98765432"}
            {"last_name__icontains": "soto"}
        """
        queryset = Customer.objects.all()
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    @transaction.atomic
    def save(self, entity: Customer) -> Customer:
        """Persist (create or update) a customer."""
        is_new = entity.pk is None
        entity.save()
        logger.info("customer.saved", customer_id=entity.id, is_new=is_new)
        return entity

    @transaction.atomic
    def update(self, entity: Customer, fields: Sequence[str]) -> bool:
        """Write ``fields`` of an existing customer with a single UPDATE.

        Returns ``False`` when the row was removed concurrently.  Unlike
        ``save`` this never re-inserts a deleted customer.
        """
        values = {field: getattr(entity, field) for field in fields}
        values["updated_at"] = timezone.now()
        updated = Customer.objects.filter(id=entity.id).update(**values)
        if not updated:
            logger.warning("customer.update_missed", customer_id=entity.id)
            return False
        entity.updated_at = values["updated_at"]
        logger.info("customer.saved", customer_id=entity.id, is_new=False)
        return True

    @transaction.atomic
    def delete(self, entity: Customer) -> bool:
        """Hard-delete a customer.

        Returns ``False`` when the row was already gone (e.g. removed by a
        concurrent request between look-up and delete).
        """
        deleted, _ = Customer.objects.filter(id=entity.id).delete()
        if not deleted:
            return False
        logger.info("customer.deleted", customer_id=entity.id)
        return True

    def get_by_dni(self, dni: str) -> Optional[Customer]:
        """Retrieve a customer by national identifier (8 digits)."""
        return Customer.objects.filter(dni=dni).first()
