"""Customer repository interface.

Extends ``IRepository[Customer]`` with the natural-key look-up the DNI
uniqueness rule needs, plus a row-locking look-up and an update that
never falls back to an insert.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Optional, Sequence

from django.db import models

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.customers.models import Customer


class ICustomerRepository(IRepository["Customer"]):
    """Repository contract for the Customer aggregate."""

    @abstractmethod
    def list(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> "models.QuerySet[Customer]":
        """List customers with optional filters."""

    @abstractmethod
    def get_by_dni(self, dni: str) -> Optional[Customer]:
        """Retrieve a customer by national identifier."""

    @abstractmethod
    def get_by_id_for_update(self, id: int) -> Optional[Customer]:
        """Retrieve a customer by primary key and lock its row."""

    @abstractmethod
    def update(self, entity: Customer, fields: Sequence[str]) -> bool:
        """Write ``fields`` of an existing customer.

        Returns ``False`` when the row no longer exists; never inserts.
        """
