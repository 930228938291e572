"""Customer model.

Business rules backed at the storage level:
- The DNI (8-digit national identifier) is unique across all customers.
- The primary key is an integer assigned by the database on first save.
- The DNI is masked in ``__str__`` so it never reaches logs in full.

Field-level rules (required names, DNI and email formats) are enforced by
``CustomerValidator`` before any write.
"""

from __future__ import annotations

from django.db import models

from modules.core.models import BaseModel

DNI_LENGTH = 8


class Customer(BaseModel):
    """Customer aggregate root.

    ``unique=True`` on ``dni`` backs the validator's uniqueness check with a
    database constraint for concurrent creates.
    """

    first_name = models.CharField(max_length=100)
    last_name = models.CharField(max_length=100)
    dni = models.CharField(max_length=DNI_LENGTH, unique=True)
    email = models.CharField(max_length=254)

    class Meta:
        db_table = "customers"
        ordering = ["id"]
        indexes = [
            models.Index(fields=["last_name", "first_name"], name="customers_name_idx"),
        ]

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __str__(self) -> str:
        suffix = self.dni[-4:] if self.dni else "????"
        return f"{self.full_name} (DNI: ****{suffix})"
