"""Customer DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.  These are the
contracts between the API layer (Views) and the Service layer.  DTOs are
immutable (``frozen=True``).

``CustomerDTO`` is lax: every attribute is optional so that
``CustomerValidator`` decides, in its fixed order, which rule a candidate
breaks first.  Pydantic only rejects values of the wrong JSON type;
strings are kept exactly as sent.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, StrictStr


class CustomerDTO(BaseModel):
    """Immutable candidate customer for create and update requests.

    ``id`` is ``None`` for new customers.  On update the service forces it
    to the target customer's id so the uniqueness check treats the stored
    record as "self".
    """

    model_config = ConfigDict(frozen=True)

    id: Optional[int] = None
    first_name: Optional[StrictStr] = None
    last_name: Optional[StrictStr] = None
    dni: Optional[StrictStr] = None
    email: Optional[StrictStr] = None

    @classmethod
    def from_payload(cls, data: Mapping[str, Any]) -> CustomerDTO:
        """Build a candidate from a request body, ignoring unknown keys."""
        return cls(
            first_name=data.get("first_name"),
            last_name=data.get("last_name"),
            dni=data.get("dni"),
            email=data.get("email"),
        )

    def with_id(self, id: Optional[int]) -> CustomerDTO:
        """Return a copy of this candidate bound to an existing customer id."""
        return self.model_copy(update={"id": id})
