"""Customer API views.

Exposes the ``CustomerService`` via HTTP using DRF ViewSets.
Domain exceptions are caught and translated into HTTP status codes; the
view never swallows generic exceptions.

Status mapping:

==============================  ====
CustomerValidationError         400 (409 for a duplicate DNI)
CustomerNotFound                404
CustomerHasActiveAccounts       409
AccountServiceInvalidResponse   502
AccountServiceUnavailable       503
==============================  ====
"""

from __future__ import annotations

from collections.abc import Mapping

from django_filters.rest_framework import DjangoFilterBackend
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.filters import OrderingFilter, SearchFilter
from rest_framework.mixins import ListModelMixin
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.customers.dtos import CustomerDTO
from modules.customers.exceptions import (
    AccountServiceInvalidResponse,
    AccountServiceUnavailable,
    CustomerHasActiveAccounts,
    CustomerNotFound,
    CustomerValidationError,
    ValidationReason,
)
from modules.customers.filters import CustomerFilter
from modules.customers.gateways import HttpAccountStatusGateway
from modules.customers.models import Customer
from modules.customers.repositories.django_repository import CustomerDjangoRepository
from modules.customers.serializers import CustomerSerializer
from modules.customers.services import CustomerService
from modules.customers.validators import CustomerValidator

INVALID_PAYLOAD = "INVALID_PAYLOAD"


def build_customer_service() -> CustomerService:
    """Wire ``CustomerService`` with its production collaborators."""
    repository = CustomerDjangoRepository()
    return CustomerService(
        repository=repository,
        validator=CustomerValidator(repository),
        accounts_gateway=HttpAccountStatusGateway.from_settings(),
    )


def _error(detail: str, code: str, status_code: int) -> Response:
    return Response({"detail": detail, "code": code}, status=status_code)


def _not_found(exc: CustomerNotFound) -> Response:
    return _error(str(exc), exc.code, status.HTTP_404_NOT_FOUND)


def _rejected(exc: CustomerValidationError) -> Response:
    status_code = (
        status.HTTP_409_CONFLICT
        if exc.reason == ValidationReason.DUPLICATE_KEY
        else status.HTTP_400_BAD_REQUEST
    )
    return _error(exc.message, exc.code, status_code)


class CustomerViewSet(ListModelMixin, GenericViewSet):
    """ViewSet for Customer CRUD operations.

    Does **not** extend ``ModelViewSet``; all ORM access goes through the
    service/repository layer.  Updates are full replacements (PUT only).
    """

    filterset_class = CustomerFilter
    search_fields = ["first_name", "last_name", "email", "dni"]
    ordering_fields = ["id", "first_name", "last_name", "created_at"]
    ordering = ["id"]
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]
    queryset = Customer.objects.all()
    serializer_class = CustomerSerializer
    lookup_value_regex = r"\d+"
    http_method_names = ["get", "post", "put", "delete", "head", "options"]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = build_customer_service()

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def get_queryset(self):
        return self._service.list_customers()

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/customers/{pk}/"""
        customer = self._service.get_customer(int(pk)) if pk is not None else None
        if customer is None:
            return _error("Customer not found.", CustomerNotFound.code, status.HTTP_404_NOT_FOUND)
        return Response(CustomerSerializer(customer).data)

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/customers/"""
        dto = self._parse_candidate(request)
        if isinstance(dto, Response):
            return dto

        try:
            customer = self._service.create_customer(dto)
        except CustomerValidationError as exc:
            return _rejected(exc)

        out = CustomerSerializer(customer)
        return Response(out.data, status=status.HTTP_201_CREATED)

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT /api/v1/customers/{pk}/"""
        dto = self._parse_candidate(request)
        if isinstance(dto, Response):
            return dto

        try:
            customer = self._service.update_customer(int(pk), dto)
        except CustomerNotFound as exc:
            return _not_found(exc)
        except CustomerValidationError as exc:
            return _rejected(exc)

        return Response(CustomerSerializer(customer).data)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/customers/{pk}/"""
        try:
            self._service.delete_customer(int(pk))
        except CustomerNotFound as exc:
            return _not_found(exc)
        except CustomerHasActiveAccounts as exc:
            return _error(str(exc), exc.code, status.HTTP_409_CONFLICT)
        except AccountServiceInvalidResponse as exc:
            return _error(exc.message, exc.code, status.HTTP_502_BAD_GATEWAY)
        except AccountServiceUnavailable as exc:
            return _error(exc.message, exc.code, status.HTTP_503_SERVICE_UNAVAILABLE)
        return Response(status=status.HTTP_204_NO_CONTENT)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _parse_candidate(request: Request) -> CustomerDTO | Response:
        data = request.data
        if not isinstance(data, Mapping):
            return _error(
                "Request body must be a JSON object.",
                INVALID_PAYLOAD,
                status.HTTP_400_BAD_REQUEST,
            )
        try:
            return CustomerDTO.from_payload(data)
        except PydanticValidationError as exc:
            return _error(str(exc), INVALID_PAYLOAD, status.HTTP_400_BAD_REQUEST)
