#app/data/models/cart.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, DateTime, Uuid
from sqlalchemy.orm import relationship

from app.data.database import Base


class CartModel(Base):
    __tablename__ = "carts"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    date_created = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    version = Column(Integer, nullable=False, default=1)

    #cart owns its items, no back reference from item to cart
    items = relationship(
        "CartItemModel",
        cascade="all, delete-orphan",
        order_by="CartItemModel.id",
    )

    def find_item(self, product_id: int):
        return next((i for i in self.items if i.product_id == product_id), None)
