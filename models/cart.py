from decimal import Decimal
from typing import NamedTuple, Union
from models import db, BIGINT
from datetime import datetime


class CartOwner(NamedTuple):
    id: int


class OrderOwner(NamedTuple):
    id: int


Owner = Union[CartOwner, OrderOwner]


class Cart(db.Model):
    __tablename__ = "cart"

    id = db.Column(BIGINT, primary_key=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    line_items = db.relationship(
        "LineItem",
        back_populates="cart",
        cascade="all, delete-orphan",
        order_by="LineItem.id",
    )

    @property
    def total_price(self) -> Decimal:
        return sum((li.total_price for li in self.line_items), Decimal("0.00"))

    @property
    def total_items(self) -> int:
        return sum(li.quantity for li in self.line_items)

    def to_dict(self):
        return {
            "id": self.id,
            "line_items": [li.to_dict() for li in self.line_items],
            "total_items": self.total_items,
            "total_price": float(self.total_price),
        }


class LineItem(db.Model):
    """A product entry owned by exactly one cart or one order."""

    __tablename__ = "line_item"
    __table_args__ = (
        db.CheckConstraint(
            "(cart_id IS NULL) <> (order_id IS NULL)",
            name="ck_line_item_single_owner",
        ),
        db.Index("ix_line_item_cart", "cart_id"),
        db.Index("ix_line_item_order", "order_id"),
    )

    id = db.Column(BIGINT, primary_key=True)
    product_id = db.Column(BIGINT, db.ForeignKey("product.id"), nullable=False)
    cart_id = db.Column(BIGINT, db.ForeignKey("cart.id", ondelete="CASCADE"), nullable=True)
    order_id = db.Column(BIGINT, db.ForeignKey("order.id", ondelete="CASCADE"), nullable=True)
    quantity = db.Column(db.Integer, nullable=False, default=1)
    price = db.Column(db.Numeric(8, 2), nullable=False)  # snapshot at add time
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    product = db.relationship("Product", back_populates="line_items")
    cart = db.relationship("Cart", back_populates="line_items")
    order = db.relationship("Order", back_populates="line_items")

    @property
    def owner(self) -> Owner:
        if self.cart_id is not None and self.order_id is None:
            return CartOwner(self.cart_id)
        if self.order_id is not None and self.cart_id is None:
            return OrderOwner(self.order_id)
        raise ValueError(f"line item {self.id} has no single owner")

    @property
    def total_price(self) -> Decimal:
        return Decimal(self.price) * self.quantity

    def to_dict(self):
        return {
            "id": self.id,
            "product_id": self.product_id,
            "title": self.product.title if self.product else None,
            "quantity": self.quantity,
            "price": float(self.price),
            "total_price": float(self.total_price),
        }
