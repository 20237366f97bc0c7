"""Turn a shopper's cart into an order.

``place_order`` never raises for business outcomes; it returns one of
``OrderPlaced``, ``CartEmpty``, ``ValidationFailed`` or ``CommitFailed``.

The commit step locks the cart row and moves its line items with a single
conditional UPDATE. A second checkout of the same cart, concurrent or
repeated, finds the cart gone or nothing left to move and resolves to
``CartEmpty``.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union
from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from models import db
from models.cart import Cart, LineItem
from models.order import Order
from app.metrics import CHECKOUT_OUTCOMES, NOTIFICATION_FAILURES
from app.schemas.order import OrderForm
from app.services.cart_store import coerce_id
from app.services.notifier import Notifier
from app.utils.db import transactional
from app.utils.validation import collect_errors

logger = logging.getLogger(__name__)


@dataclass
class OrderPlaced:
    order: Order
    cleared_cart_id: int
    warnings: List[str] = field(default_factory=list)


@dataclass
class CartEmpty:
    cart_id: Optional[int] = None
    message: str = "Your cart is empty"


@dataclass
class ValidationFailed:
    errors: Dict[str, str]


@dataclass
class CommitFailed:
    reason: str


CheckoutResult = Union[OrderPlaced, CartEmpty, ValidationFailed, CommitFailed]


class CartAlreadyCheckedOut(Exception):
    pass


def validate_order(data) -> Dict[str, str]:
    """Return ``{field: message}`` for every invalid order attribute."""
    return collect_errors(OrderForm, data)


def cart_item_count(cart_id) -> int:
    cid = coerce_id(cart_id)
    if cid is None:
        return 0
    return LineItem.query.filter_by(cart_id=cid).count()


def _commit_order(cart_id: int, form: OrderForm) -> Order:
    locked = db.session.execute(
        select(Cart.id).where(Cart.id == cart_id).with_for_update()
    ).scalar_one_or_none()
    if locked is None:
        raise CartAlreadyCheckedOut(cart_id)

    order = Order(**form.model_dump(), status="new")
    db.session.add(order)
    db.session.flush()

    moved = db.session.execute(
        update(LineItem)
        .where(LineItem.cart_id == cart_id)
        .values(cart_id=None, order_id=order.id)
    ).rowcount
    if not moved:
        raise CartAlreadyCheckedOut(cart_id)

    db.session.execute(delete(Cart).where(Cart.id == cart_id))
    logger.info("order %s placed from cart %s with %s line items", order.id, cart_id, moved)
    return order


def place_order(cart_id, data, notifier: Optional[Notifier] = None) -> CheckoutResult:
    cid = coerce_id(cart_id)
    if cart_item_count(cid) == 0:
        CHECKOUT_OUTCOMES.labels("cart_empty").inc()
        return CartEmpty(cart_id=cid)

    errors = validate_order(data)
    if errors:
        CHECKOUT_OUTCOMES.labels("validation_failed").inc()
        return ValidationFailed(errors=errors)
    form = OrderForm.model_validate(data)

    try:
        with transactional("Checkout commit failed", expected=(CartAlreadyCheckedOut,)):
            order = _commit_order(cid, form)
    except CartAlreadyCheckedOut:
        logger.info("cart %s was already checked out", cid)
        CHECKOUT_OUTCOMES.labels("cart_empty").inc()
        return CartEmpty(cart_id=cid)
    except SQLAlchemyError as exc:
        CHECKOUT_OUTCOMES.labels("commit_failed").inc()
        return CommitFailed(reason=str(exc))

    CHECKOUT_OUTCOMES.labels("placed").inc()
    result = OrderPlaced(order=order, cleared_cart_id=cid)
    notifier = notifier or Notifier()
    if not notifier.send_order_received(order):
        NOTIFICATION_FAILURES.labels("order_received").inc()
        result.warnings.append("Order confirmation email could not be sent")
    return result
