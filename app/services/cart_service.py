import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import Dict, Any
from uuid import UUID

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.data.models.cart import CartModel
from app.data.models.cart_item import CartItemModel
from app.domain.exceptions import (
    CartConflict,
    CartNotFound,
    ProductNotFound,
    ProductNotFoundInCart,
    QuantityOutOfRange,
    StorageError,
)
from app.domain.validation import QUANTITY_MAX, QUANTITY_MIN
from app.repos.cart_repo import CartRepo
from app.repos.product_repo import ProductRepo
from app.services.lock_service import LockService
from app.utils.retry import conflict_retry
from app.utils.logging import get_logger

logger = get_logger(__name__)

CENT = Decimal("0.01")


def line_total(item: CartItemModel) -> Decimal:
    return (item.product.price * item.quantity).quantize(CENT)


def cart_total(cart: CartModel) -> Decimal:
    return sum((line_total(i) for i in cart.items), Decimal("0.00")).quantize(CENT)


class CartService:
    """
    Use cases of the cart aggregate.
    commands (create, add, update, remove, clear) change state,
    every mutating command is one transaction guarded by the cart version
    query (get) only reads
    """

    def __init__(self, db: Session, lock_service: LockService):
        self.repo = CartRepo(db)
        self.products = ProductRepo(db)
        self.lock_service = lock_service

    #query
    def get_cart(self, cart_id: UUID) -> Dict[str, Any]:
        cart = self._load_cart(cart_id)
        return self._cart_view(cart)

    #commands
    def create_cart(self) -> Dict[str, Any]:
        new_cart = CartModel(
            id=uuid.uuid4(),
            date_created=datetime.now(timezone.utc),
            version=1,
        )
        created = self.repo.create_cart(new_cart)

        logger.info(f"Created cart {created.id}")
        return self._cart_view(created)

    @conflict_retry()
    def add_item(self, cart_id: UUID, product_id: int) -> Dict[str, Any]:
        with self.lock_service.cart_lock(cart_id):
            cart = self._load_cart(cart_id)

            product = self.products.get_product(product_id)
            if not product:
                raise ProductNotFound(product_id)

            item = cart.find_item(product_id)
            if item:
                #no clamping, an increment past the maximum is an error
                new_quantity = item.quantity + 1
                self._check_quantity(new_quantity)
                logger.info(
                    f"Product {product_id} already in cart {cart_id}, "
                    f"quantity {item.quantity} -> {new_quantity}"
                )
                item.quantity = new_quantity
            else:
                logger.info(f"Adding product {product_id} to cart {cart_id}")
                item = CartItemModel(product_id=product_id, product=product, quantity=1)
                cart.items.append(item)

            self._save(cart)
            return self._item_view(item)

    @conflict_retry()
    def update_item(self, cart_id: UUID, product_id: int, quantity: int) -> Dict[str, Any]:
        #checked again here even though the request schema already did
        self._check_quantity(quantity)

        with self.lock_service.cart_lock(cart_id):
            cart = self._load_cart(cart_id)

            item = cart.find_item(product_id)
            if not item:
                raise ProductNotFoundInCart(cart_id, product_id)

            logger.info(
                f"Setting quantity of product {product_id} in cart {cart_id} "
                f"from {item.quantity} to {quantity}"
            )
            item.quantity = quantity

            self._save(cart)
            return self._item_view(item)

    @conflict_retry()
    def remove_item(self, cart_id: UUID, product_id: int) -> None:
        with self.lock_service.cart_lock(cart_id):
            cart = self._load_cart(cart_id)

            item = cart.find_item(product_id)
            if not item:
                logger.info(f"Product {product_id} not in cart {cart_id}, nothing to remove")
                return

            cart.items.remove(item)
            self._save(cart)

            logger.info(f"Removed product {product_id} from cart {cart_id}")

    @conflict_retry()
    def clear_cart(self, cart_id: UUID) -> None:
        with self.lock_service.cart_lock(cart_id):
            cart = self._load_cart(cart_id)

            if not cart.items:
                return

            removed = len(cart.items)
            cart.items.clear()
            self._save(cart)

            logger.info(f"Cleared cart {cart_id}, removed {removed} items")

    #helpers
    def _load_cart(self, cart_id: UUID) -> CartModel:
        cart = self.repo.get_cart(cart_id)
        if not cart:
            raise CartNotFound(cart_id)
        return cart

    @staticmethod
    def _check_quantity(quantity: int) -> None:
        if quantity is None or not QUANTITY_MIN <= quantity <= QUANTITY_MAX:
            raise QuantityOutOfRange(quantity, QUANTITY_MIN, QUANTITY_MAX)

    def _save(self, cart: CartModel) -> None:
        cart_id, version = cart.id, cart.version

        # optimistic locking, the version bump also flushes the pending item changes
        try:
            rowcount = self.repo.update_cart_version(cart_id=cart_id, old_version=version)
        except IntegrityError:
            #another transaction inserted the same (cart, product) row first
            self.repo.rollback()
            logger.warning(f"Duplicate item insert on cart {cart_id}")
            raise CartConflict(cart_id)
        except SQLAlchemyError as e:
            self.repo.rollback()
            logger.error(f"Saving cart {cart_id} failed: {e}")
            raise StorageError(details={"cart_id": cart_id}) from e

        if rowcount == 0:
            self.repo.rollback()
            logger.warning(f"Version conflict on cart {cart_id} (expected version {version})")
            raise CartConflict(cart_id)

        self.repo.commit()

    @staticmethod
    def _item_view(item: CartItemModel) -> Dict[str, Any]:
        return {
            "product": {
                "id": item.product.id,
                "name": item.product.name,
                "price": item.product.price,
            },
            "quantity": item.quantity,
            "total_price": line_total(item),
        }

    def _cart_view(self, cart: CartModel) -> Dict[str, Any]:
        #dict is turned into json by the response model
        return {
            "id": cart.id,
            "date_created": cart.date_created,
            "items": [self._item_view(i) for i in cart.items],
            "total_price": cart_total(cart),
        }
