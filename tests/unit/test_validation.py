"""
Tests for request validation rules.
"""
import pytest
from pydantic import ValidationError

from app.domain.schemas import RegisterUserRequest, UpdateCartItemRequest
from app.domain.validation import FieldError, ValidationResult, quantity_error


def _errors(model, **data):
    with pytest.raises(ValidationError) as exc_info:
        model(**data)
    return ValidationResult.from_errors(exc_info.value.errors())


class TestQuantityRules:

    @pytest.mark.parametrize(
        "quantity, message",
        [
            (None, "Quantity must be provided"),
            (0, "Quantity must be greater than zero"),
            (-5, "Quantity must be greater than zero"),
            (101, "Quantity must be less than or equal to 100"),
        ],
    )
    def test_invalid(self, quantity, message):
        assert quantity_error(quantity) == message

    @pytest.mark.parametrize("quantity", [1, 50, 100])
    def test_valid(self, quantity):
        assert quantity_error(quantity) is None

    def test_schema_reports_field_error(self):
        result = _errors(UpdateCartItemRequest, quantity=0)

        assert not result.ok
        assert result.errors == [FieldError("quantity", "Quantity must be greater than zero")]

    def test_schema_requires_quantity(self):
        assert _errors(UpdateCartItemRequest).as_dict() == {"quantity": "Quantity must be provided"}


class TestRegisterRules:

    def test_collects_every_field(self):
        result = _errors(RegisterUserRequest, name=" ", email="not-an-email", password="123")

        assert result.as_dict() == {
            "name": "Name is required",
            "email": "Email must be valid",
            "password": "Password must be between 6 to 25 characters long",
        }

    def test_name_too_long(self):
        result = _errors(RegisterUserRequest, name="x" * 256, email="a@b.io", password="secret1")
        assert result.as_dict() == {"name": "Name must be less than 255 characters"}

    def test_email_is_normalized(self):
        payload = RegisterUserRequest(name=" Ann ", email=" Ann@Example.COM ", password="secret1")

        assert payload.name == "Ann"
        assert payload.email == "ann@example.com"

    @pytest.mark.parametrize("email", ["ann@", "@example.com", "ann@@example.com", "ann example@example.com", "ann@example..com"])
    def test_malformed_email(self, email):
        result = _errors(RegisterUserRequest, name="Ann", email=email, password="secret1")
        assert result.as_dict() == {"email": "Email must be valid"}


class TestValidationResult:

    def test_empty_result_is_ok(self):
        assert ValidationResult().ok

    def test_first_message_per_field_wins(self):
        result = ValidationResult().add("email", "first").add("email", "second")
        assert result.as_dict() == {"email": "first"}

    def test_location_prefix_is_dropped(self):
        result = ValidationResult.from_errors(
            [{"loc": ("path", "cart_id"), "msg": "Input should be a valid UUID", "type": "uuid_parsing"}]
        )
        assert result.as_dict() == {"cart_id": "Input should be a valid UUID"}
