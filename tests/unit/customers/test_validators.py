"""Unit tests for CustomerValidator.

Covers:
- Required first/last name.
- DNI and email formats.
- DNI uniqueness against other customers (and not against "self").
- Rule order: the first violated rule is the one reported.
"""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from modules.customers.dtos import CustomerDTO
from modules.customers.exceptions import CustomerValidationError, ValidationReason
from modules.customers.validators import CustomerValidator

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def mock_repo():
    repo = MagicMock()
    repo.get_by_dni.return_value = None
    return repo


@pytest.fixture()
def validator(mock_repo):
    return CustomerValidator(mock_repo)


def _candidate(**overrides) -> CustomerDTO:
    defaults = {
        "first_name": "Ana",
        "last_name": "Soto",
        "dni": "98765432",
        "email": "ana.soto@mail.com",
    }
    defaults.update(overrides)
    return CustomerDTO(**defaults)


def _reject(validator, candidate) -> CustomerValidationError:
    with pytest.raises(CustomerValidationError) as exc_info:
        validator.validate(candidate)
    return exc_info.value


# ===========================================================================
# Happy path
# ===========================================================================


class TestValidCandidate:
    def test_accepts_valid_candidate(self, validator, mock_repo):
        validator.validate(_candidate())
        mock_repo.get_by_dni.assert_called_once_with("98765432")

    @pytest.mark.parametrize(
        "email",
        ["user123@mail.com", "first.last@bank.co", "a_b-c@sub.domain-x.org", "x@y"],
    )
    def test_accepts_email_shapes(self, validator, email):
        validator.validate(_candidate(email=email))

    def test_accepts_names_with_surrounding_whitespace(self, validator):
        validator.validate(_candidate(first_name=" Ana", last_name="Soto "))


# ===========================================================================
# Required fields
# ===========================================================================


class TestRequiredFields:
    @pytest.mark.parametrize("value", [None, "", "   ", "\t\n"])
    def test_first_name_required(self, validator, value):
        exc = _reject(validator, _candidate(first_name=value))
        assert exc.reason == ValidationReason.REQUIRED_FIELD
        assert exc.field == "FirstName"
        assert exc.message == "FirstName is required."

    @pytest.mark.parametrize("value", [None, "", "   ", "\t\n"])
    def test_last_name_required(self, validator, value):
        exc = _reject(validator, _candidate(last_name=value))
        assert exc.reason == ValidationReason.REQUIRED_FIELD
        assert exc.field == "LastName"


# ===========================================================================
# Formats
# ===========================================================================


class TestDniFormat:
    @pytest.mark.parametrize(
        "dni",
        [None, "", "1234567", "123456789", "1234567a", "12 345678", "98765432\n", "１２３４５６７８"],
    )
    def test_rejects_malformed_dni(self, validator, mock_repo, dni):
        exc = _reject(validator, _candidate(dni=dni))
        assert exc.reason == ValidationReason.INVALID_FORMAT
        assert exc.field == "DNI"
        assert "8 digits" in exc.message
        mock_repo.get_by_dni.assert_not_called()


class TestEmailFormat:
    @pytest.mark.parametrize(
        "email",
        [None, "", "ana.soto", "@mail.com", "ana@", "ana soto@mail.com", "ana@@mail.com", "ana+x@mail.com"],
    )
    def test_rejects_malformed_email(self, validator, mock_repo, email):
        exc = _reject(validator, _candidate(email=email))
        assert exc.reason == ValidationReason.INVALID_FORMAT
        assert exc.field == "Email"
        mock_repo.get_by_dni.assert_not_called()


# ===========================================================================
# Uniqueness
# ===========================================================================


class TestDniUniqueness:
    def test_new_candidate_with_taken_dni_rejected(self, validator, mock_repo):
        mock_repo.get_by_dni.return_value = SimpleNamespace(id=7)

        exc = _reject(validator, _candidate())

        assert exc.reason == ValidationReason.DUPLICATE_KEY
        assert exc.field == "DNI"
        assert exc.message == "A client with this DNI already exists."

    def test_other_customer_with_same_dni_rejected(self, validator, mock_repo):
        mock_repo.get_by_dni.return_value = SimpleNamespace(id=7)

        exc = _reject(validator, _candidate(id=3))

        assert exc.reason == ValidationReason.DUPLICATE_KEY

    def test_same_customer_keeps_own_dni(self, validator, mock_repo):
        mock_repo.get_by_dni.return_value = SimpleNamespace(id=3)

        validator.validate(_candidate(id=3))


# ===========================================================================
# Ordering
# ===========================================================================


class TestRuleOrder:
    def test_first_name_reported_before_everything_else(self, validator, mock_repo):
        mock_repo.get_by_dni.return_value = SimpleNamespace(id=99)
        candidate = CustomerDTO(first_name="", last_name="", dni="x", email="y")

        exc = _reject(validator, candidate)

        assert exc.field == "FirstName"

    def test_last_name_reported_before_formats(self, validator):
        exc = _reject(validator, _candidate(last_name="", dni="x", email="y"))
        assert exc.field == "LastName"

    def test_dni_format_reported_before_email_format(self, validator):
        exc = _reject(validator, _candidate(dni="x", email="y"))
        assert exc.field == "DNI"

    def test_email_format_reported_before_uniqueness(self, validator, mock_repo):
        mock_repo.get_by_dni.return_value = SimpleNamespace(id=99)

        exc = _reject(validator, _candidate(email="not-an-email"))

        assert exc.reason == ValidationReason.INVALID_FORMAT
        assert exc.field == "Email"
