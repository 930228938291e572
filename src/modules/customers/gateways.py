"""Account-status gateway.

The accounts service is the only source of truth for whether a customer
still holds active bank accounts.  ``HttpAccountStatusGateway`` asks it with
one synchronous ``GET /accounts/customer/{id}/active`` per call:

* a 2xx response whose JSON body is ``true`` / ``false`` is returned as-is;
* an empty body, ``null``, non-JSON or any non-boolean JSON value raises
  ``AccountServiceInvalidResponse``, never ``False``;
* transport errors, timeouts and non-2xx statuses raise
  ``AccountServiceUnavailable`` with the transport error text attached.

No retries and no caching: every call is a fresh round trip, bounded by the
configured timeout.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

import httpx
import structlog
from django.conf import settings

from modules.customers.exceptions import (
    AccountServiceInvalidResponse,
    AccountServiceUnavailable,
)

logger = structlog.get_logger(__name__)

ACTIVE_ACCOUNTS_PATH = "/accounts/customer/{customer_id}/active"


class IAccountStatusGateway(ABC):
    """Contract for the "does this customer have active accounts?" check."""

    @abstractmethod
    def has_active_accounts(self, customer_id: int) -> bool:
        """Return whether ``customer_id`` holds at least one active account.

        Raises:
            AccountServiceUnavailable: when the answer cannot be confirmed.
        """


class HttpAccountStatusGateway(IAccountStatusGateway):
    """``httpx`` client for the accounts service."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = httpx.Timeout(timeout)
        self._transport = transport

    @classmethod
    def from_settings(cls) -> HttpAccountStatusGateway:
        return cls(
            base_url=settings.ACCOUNTS_SERVICE_URL,
            timeout=settings.ACCOUNTS_SERVICE_TIMEOUT,
        )

    def has_active_accounts(self, customer_id: int) -> bool:
        path = ACTIVE_ACCOUNTS_PATH.format(customer_id=customer_id)
        log = logger.bind(customer_id=customer_id, url=f"{self._base_url}{path}")

        try:
            with httpx.Client(
                base_url=self._base_url,
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = client.get(path, headers={"Accept": "application/json"})
                response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            log.warning("accounts_gateway.unavailable", error=str(exc))
            raise AccountServiceUnavailable(
                f"Error connecting to bank account service: {exc}",
                cause=str(exc),
            ) from exc

        active = self._parse_payload(response, log)
        log.info("accounts_gateway.checked", has_active_accounts=active)
        return active

    @staticmethod
    def _parse_payload(response: httpx.Response, log) -> bool:
        if not response.content.strip():
            log.warning("accounts_gateway.empty_payload", status_code=response.status_code)
            raise AccountServiceInvalidResponse(
                "Bank account service returned an empty response."
            )

        try:
            payload = response.json()
        except ValueError as exc:
            log.warning("accounts_gateway.malformed_payload", error=str(exc))
            raise AccountServiceInvalidResponse(
                "Bank account service returned a malformed response.",
                cause=str(exc),
            ) from exc

        if not isinstance(payload, bool):
            log.warning(
                "accounts_gateway.unexpected_payload",
                payload_type=type(payload).__name__,
            )
            raise AccountServiceInvalidResponse(
                f"Bank account service returned {payload!r} instead of a boolean."
            )
        return payload
