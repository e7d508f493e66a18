# app/domain/validation.py
"""
Field rules shared by the request schemas, and the structured result the
HTTP layer returns when a request body does not pass them.
"""
from dataclasses import dataclass, field
from typing import Any, Iterable

from email_validator import EmailNotValidError, validate_email

QUANTITY_MIN = 1
QUANTITY_MAX = 100

NAME_MAX_LENGTH = 255
PASSWORD_MIN_LENGTH = 6
PASSWORD_MAX_LENGTH = 25

#ids are stored in 32 bit integer columns
MAX_ID = 2_147_483_647


def quantity_error(quantity: int | None) -> str | None:
    if quantity is None:
        return "Quantity must be provided"
    if quantity < QUANTITY_MIN:
        return "Quantity must be greater than zero"
    if quantity > QUANTITY_MAX:
        return f"Quantity must be less than or equal to {QUANTITY_MAX}"
    return None


def name_error(name: str | None) -> str | None:
    if name is None or not name.strip():
        return "Name is required"
    if len(name) > NAME_MAX_LENGTH:
        return f"Name must be less than {NAME_MAX_LENGTH} characters"
    return None


def email_error(email: str | None) -> str | None:
    if email is None or not email.strip():
        return "Email is required"
    try:
        validate_email(email.strip(), check_deliverability=False)
    except EmailNotValidError:
        return "Email must be valid"
    return None


def password_error(password: str | None) -> str | None:
    if password is None or password == "":
        return "Password is required"
    if not PASSWORD_MIN_LENGTH <= len(password) <= PASSWORD_MAX_LENGTH:
        return (
            f"Password must be between {PASSWORD_MIN_LENGTH} to "
            f"{PASSWORD_MAX_LENGTH} characters long"
        )
    return None


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


@dataclass
class ValidationResult:
    errors: list[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def add(self, field_name: str, message: str) -> "ValidationResult":
        self.errors.append(FieldError(field_name, message))
        return self

    def as_dict(self) -> dict[str, str]:
        #first message per field wins
        out: dict[str, str] = {}
        for e in self.errors:
            out.setdefault(e.field, e.message)
        return out

    @classmethod
    def from_errors(cls, errors: Iterable[dict[str, Any]]) -> "ValidationResult":
        """
        Builds a result from pydantic/FastAPI error dicts.

        The location prefix ("body", "path", "query") is dropped; messages raised
        by our own field validators are taken as-is instead of pydantic's
        "Value error, ..." rendering.
        """
        result = cls()
        for err in errors:
            loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "path", "query")]
            name = ".".join(loc) or "body"
            ctx_error = (err.get("ctx") or {}).get("error")
            message = str(ctx_error) if isinstance(ctx_error, ValueError) else err.get("msg", "Invalid value")
            result.add(name, message)
        return result
