# app/domain/exceptions.py
"""
Domain exceptions raised by the services.

StoreError (base)
├── CartNotFound
├── ProductNotFound
├── ProductNotFoundInCart
├── QuantityOutOfRange
├── CartConflict
├── CartBusy
├── StorageError
├── UserNotFound
├── EmailAlreadyRegistered
└── InvalidCredentials

Routers translate these into HTTP status codes; the services never do.
"""
from uuid import UUID


class StoreError(Exception):
    """
    Base exception for every error raised by the services.

    Attributes:
        message: human readable message, also used as the HTTP detail
        details: extra context (ids, limits) for logs
    """

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.__class__.__name__}('{self.message}', {details_str})"
        return f"{self.__class__.__name__}('{self.message}')"


class CartNotFound(StoreError):
    def __init__(self, cart_id: UUID):
        super().__init__("Cart not found", details={"cart_id": cart_id})
        self.cart_id = cart_id


class ProductNotFound(StoreError):
    def __init__(self, product_id: int):
        super().__init__("Product not found", details={"product_id": product_id})
        self.product_id = product_id


class ProductNotFoundInCart(StoreError):
    def __init__(self, cart_id: UUID, product_id: int):
        super().__init__(
            "Product not found in the cart",
            details={"cart_id": cart_id, "product_id": product_id},
        )
        self.cart_id = cart_id
        self.product_id = product_id


class QuantityOutOfRange(StoreError):
    """Raised when an item quantity would leave the allowed range."""

    def __init__(self, quantity: int, minimum: int, maximum: int):
        super().__init__(
            f"Quantity must be between {minimum} and {maximum}",
            details={"quantity": quantity, "min": minimum, "max": maximum},
        )
        self.quantity = quantity


class CartConflict(StoreError):
    """Raised when the cart version changed between load and save."""

    def __init__(self, cart_id: UUID):
        super().__init__(
            "Cart was modified by another operation",
            details={"cart_id": cart_id},
        )
        self.cart_id = cart_id


class CartBusy(StoreError):
    """Raised when the per-cart lock could not be acquired."""

    def __init__(self, cart_id: UUID):
        super().__init__("Cart is being modified, try again", details={"cart_id": cart_id})
        self.cart_id = cart_id


class StorageError(StoreError):
    """Database or redis failure. Not retried by the services."""

    def __init__(self, message: str = "Storage unavailable", details: dict | None = None):
        super().__init__(message, details=details)


class UserNotFound(StoreError):
    def __init__(self, user_id: int):
        super().__init__("User not found", details={"user_id": user_id})
        self.user_id = user_id


class EmailAlreadyRegistered(StoreError):
    def __init__(self, email: str):
        super().__init__("Email is already registered", details={"email": email})
        self.email = email


class InvalidCredentials(StoreError):
    def __init__(self):
        super().__init__("Invalid credentials")
