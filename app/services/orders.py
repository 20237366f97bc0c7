import logging
from datetime import datetime
from typing import Optional
from models import db
from models.order import Order
from app.services.notifier import Notifier
from app.utils.db import transactional

logger = logging.getLogger(__name__)


class OrderImmutable(Exception):
    pass


def paginate_orders(page: int = 1, per_page: int = 10):
    """Newest orders first."""
    return db.paginate(
        db.select(Order).order_by(Order.created_at.desc(), Order.id.desc()),
        page=page,
        per_page=per_page,
        error_out=False,
    )


def get_order(order_id) -> Order:
    return db.get_or_404(Order, order_id, description="Order not found")


def ship_order(order: Order, notifier: Optional[Notifier] = None) -> bool:
    """Mark ``order`` shipped and commit, then email the customer.

    Returns whether the shipping email was dispatched; a failed email does
    not undo the status change.
    """
    if order.status == "shipped":
        raise OrderImmutable(f"Order {order.id} has already shipped")
    with transactional("Failed to ship order"):
        order.status = "shipped"
        order.shipped_at = datetime.utcnow()
    logger.info("order %s shipped", order.id)
    notifier = notifier or Notifier()
    return notifier.send_order_shipped(order)


def delete_order(order: Order) -> None:
    """Delete ``order`` and its line items. Does NOT commit."""
    db.session.delete(order)
