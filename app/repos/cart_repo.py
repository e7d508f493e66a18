# app/repos/cart_repo.py
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from app.data.models.cart import CartModel
from app.data.models.cart_item import CartItemModel
from app.domain.exceptions import StorageError
from app.utils.logging import get_logger

logger = get_logger(__name__)


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    def create_cart(self, cart: CartModel) -> CartModel:
        self.db.add(cart)
        self.commit()
        return cart

    def get_cart(self, cart_id: UUID) -> CartModel | None:
        """
        Loads the cart with its items and their products in one statement,
        so a total is always computed from a single snapshot.
        """
        stmt = (
            select(CartModel)
            .where(CartModel.id == cart_id)
            .options(joinedload(CartModel.items).joinedload(CartItemModel.product))
            .execution_options(populate_existing=True)
        )
        return self.db.execute(stmt).unique().scalar_one_or_none()

    def update_cart_version(self, cart_id: UUID, old_version: int) -> int:
        #UPDATE carts SET version = v+1 WHERE id = :id AND version = v
        result = self.db.execute(
            update(CartModel)
            .where(CartModel.id == cart_id, CartModel.version == old_version)
            .values(version=old_version + 1)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def commit(self):
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Commit failed: {e}")
            raise StorageError(details={"error": str(e)}) from e

    def rollback(self):
        self.db.rollback()
