from decimal import Decimal
from sqlalchemy import Column, String, Text, DateTime
from sqlalchemy.sql import func
from models import db, BIGINT

PAYMENT_TYPES = ("Check", "Credit card", "Purchase order")


class Order(db.Model):
    __tablename__ = "order"
    __table_args__ = (
        db.Index("ix_order_created_at", "created_at"),
    )
    id = Column(BIGINT, primary_key=True)
    name = Column(String(255), nullable=False)
    address = Column(Text, nullable=False)
    email = Column(String(255), nullable=False)
    pay_type = Column(String(20), nullable=False)
    status = Column(String(20), nullable=False, default="new")  # new, shipped
    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())
    shipped_at = Column(DateTime, nullable=True)

    line_items = db.relationship(
        "LineItem",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="LineItem.id",
    )

    @property
    def total_price(self) -> Decimal:
        return sum((li.total_price for li in self.line_items), Decimal("0.00"))

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "address": self.address,
            "email": self.email,
            "pay_type": self.pay_type,
            "status": self.status,
            "line_items": [li.to_dict() for li in self.line_items],
            "total_price": float(self.total_price),
            "created_at": self.created_at,
            "shipped_at": self.shipped_at,
        }

    def __repr__(self):
        return f"<Order id={self.id} status={self.status}>"
