# app/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import List
from decimal import Decimal
from datetime import datetime
from uuid import UUID

from app.domain import validation


class AddItemToCartRequest(BaseModel):
    """Body for adding a product to a cart."""

    product_id: int = Field(..., gt=0, le=validation.MAX_ID, description="Product id (must be > 0)")


class UpdateCartItemRequest(BaseModel):
    """Body for overwriting the quantity of a cart item."""

    quantity: int | None = Field(default=None, validate_default=True)

    @field_validator("quantity")
    @classmethod
    def check_quantity(cls, v):
        message = validation.quantity_error(v)
        if message:
            raise ValueError(message)
        return v


class ProductOut(BaseModel):
    id: int
    name: str
    price: Decimal

    model_config = ConfigDict(from_attributes=True)


class CartItemOut(BaseModel):
    """Cart item with a product snapshot and its line total."""

    product: ProductOut
    quantity: int
    total_price: Decimal


class CartOut(BaseModel):
    id: UUID
    date_created: datetime
    items: List[CartItemOut]
    total_price: Decimal


class RegisterUserRequest(BaseModel):
    name: str | None = Field(default=None, validate_default=True)
    email: str | None = Field(default=None, validate_default=True)
    password: str | None = Field(default=None, validate_default=True)

    @field_validator("name")
    @classmethod
    def check_name(cls, v):
        message = validation.name_error(v)
        if message:
            raise ValueError(message)
        return v.strip()

    @field_validator("email")
    @classmethod
    def check_email(cls, v):
        message = validation.email_error(v)
        if message:
            raise ValueError(message)
        return v.strip().lower()

    @field_validator("password")
    @classmethod
    def check_password(cls, v):
        message = validation.password_error(v)
        if message:
            raise ValueError(message)
        return v


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        return v.strip().lower()


class UserRead(BaseModel):
    id: int
    name: str
    email: str

    model_config = ConfigDict(from_attributes=True)


class MessageOut(BaseModel):
    message: str
