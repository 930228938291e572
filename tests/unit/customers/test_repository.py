"""Unit tests for CustomerDjangoRepository.

Covers:
- Instantiation and interface compliance.
- get_by_id / get_by_id_for_update / exists_by_id, including malformed ids.
- list with and without filters.
- save (create and update), update without re-insert, and hard delete.
- get_by_dni natural-key look-up.
"""

from __future__ import annotations

import pytest
from django.db import transaction

from modules.customers.models import Customer
from modules.customers.repositories import CustomerDjangoRepository, ICustomerRepository

pytestmark = pytest.mark.unit

DNI = "98765432"
DNI_2 = "12345678"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_customer(save: bool = True, **overrides) -> Customer:
    """Create a Customer instance with sane defaults."""
    defaults = {
        "first_name": "Ana",
        "last_name": "Soto",
        "dni": DNI,
        "email": "ana.soto@mail.com",
    }
    defaults.update(overrides)
    customer = Customer(**defaults)
    if save:
        customer.save()
    return customer


@pytest.fixture()
def repo() -> CustomerDjangoRepository:
    return CustomerDjangoRepository()


# ===========================================================================
# Instantiation
# ===========================================================================


class TestRepositoryInstantiation:
    def test_is_instance_of_interface(self, repo):
        assert isinstance(repo, ICustomerRepository)


# ===========================================================================
# get_by_id / exists_by_id
# ===========================================================================


class TestGetById:
    def test_returns_customer_when_found(self, repo):
        customer = _make_customer()
        result = repo.get_by_id(customer.id)
        assert result is not None
        assert result.id == customer.id

    def test_returns_none_when_not_found(self, repo):
        assert repo.get_by_id(999_999) is None

    def test_returns_none_for_non_numeric_id(self, repo):
        assert repo.get_by_id("not-a-number") is None


class TestGetByIdForUpdate:
    def test_returns_customer_when_found(self, repo):
        customer = _make_customer()
        with transaction.atomic():
            result = repo.get_by_id_for_update(customer.id)
        assert result is not None
        assert result.id == customer.id

    def test_returns_none_when_not_found(self, repo):
        with transaction.atomic():
            assert repo.get_by_id_for_update(999_999) is None


class TestExistsById:
    def test_true_when_present(self, repo):
        customer = _make_customer()
        assert repo.exists_by_id(customer.id) is True

    def test_false_when_absent(self, repo):
        assert repo.exists_by_id(999_999) is False

    def test_false_for_non_numeric_id(self, repo):
        assert repo.exists_by_id("abc") is False


# ===========================================================================
# list
# ===========================================================================


class TestList:
    def test_returns_all_customers(self, repo):
        _make_customer(dni=DNI)
        _make_customer(dni=DNI_2, email="b@mail.com")
        assert repo.list().count() == 2

    def test_returns_empty_when_no_customers(self, repo):
        assert list(repo.list()) == []

    def test_filters_by_dni(self, repo):
        _make_customer(dni=DNI)
        _make_customer(dni=DNI_2, first_name="Luis", email="luis@mail.com")
        result = list(repo.list(filters={"dni": DNI_2}))
        assert len(result) == 1
        assert result[0].first_name == "Luis"

    def test_ordered_by_id(self, repo):
        first = _make_customer(dni=DNI)
        second = _make_customer(dni=DNI_2, email="b@mail.com")
        assert [c.id for c in repo.list()] == [first.id, second.id]


# ===========================================================================
# save
# ===========================================================================


class TestSave:
    def test_creates_new_customer(self, repo):
        customer = _make_customer(save=False)
        result = repo.save(customer)
        assert result.id is not None
        assert Customer.objects.filter(id=result.id).exists()

    def test_updates_existing_customer(self, repo):
        customer = _make_customer()
        customer.email = "new@mail.com"
        repo.save(customer)
        assert Customer.objects.get(id=customer.id).email == "new@mail.com"

    def test_returns_same_entity(self, repo):
        customer = _make_customer(save=False)
        assert repo.save(customer) is customer


# ===========================================================================
# update
# ===========================================================================


class TestUpdate:
    def test_writes_given_fields(self, repo):
        customer = _make_customer()
        customer.first_name = "Anabel"
        customer.email = "anabel@mail.com"
        assert repo.update(customer, ("first_name", "email")) is True
        stored = Customer.objects.get(id=customer.id)
        assert stored.first_name == "Anabel"
        assert stored.email == "anabel@mail.com"

    def test_leaves_other_fields_alone(self, repo):
        customer = _make_customer()
        customer.dni = DNI_2
        repo.update(customer, ("first_name",))
        assert Customer.objects.get(id=customer.id).dni == DNI

    def test_refreshes_updated_at(self, repo):
        customer = _make_customer()
        before = customer.updated_at
        repo.update(customer, ("first_name",))
        assert Customer.objects.get(id=customer.id).updated_at >= before

    def test_returns_false_and_does_not_insert_when_gone(self, repo):
        customer = _make_customer()
        Customer.objects.filter(id=customer.id).delete()
        customer.first_name = "Anabel"
        assert repo.update(customer, ("first_name",)) is False
        assert not Customer.objects.filter(id=customer.id).exists()


# ===========================================================================
# delete
# ===========================================================================


class TestDelete:
    def test_removes_existing_customer(self, repo):
        customer = _make_customer()
        assert repo.delete(customer) is True
        assert not Customer.objects.filter(id=customer.id).exists()

    def test_returns_false_when_already_gone(self, repo):
        customer = _make_customer()
        Customer.objects.filter(id=customer.id).delete()
        assert repo.delete(customer) is False


# ===========================================================================
# get_by_dni
# ===========================================================================


class TestGetByDni:
    def test_returns_customer_when_found(self, repo):
        customer = _make_customer(dni=DNI)
        result = repo.get_by_dni(DNI)
        assert result is not None
        assert result.id == customer.id

    def test_returns_none_when_not_found(self, repo):
        assert repo.get_by_dni("00000000") is None
