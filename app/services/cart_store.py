import logging
from typing import Optional
from models import db
from models.cart import Cart, LineItem
from models.product import Product

logger = logging.getLogger(__name__)


def coerce_id(value) -> Optional[int]:
    """Id from an int or a string of digits; booleans, floats and the rest give None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdecimal():
        return int(value)
    return None


def find_cart(cart_id) -> Optional[Cart]:
    cid = coerce_id(cart_id)
    if cid is None:
        return None
    return db.session.get(Cart, cid)


def get_or_create_cart(session_cart_id) -> Cart:
    """Return the shopper's cart, creating an empty one when none is found.

    The returned cart is flushed so its id can be written back into the
    session. Does NOT commit.
    """
    cart = find_cart(session_cart_id)
    if cart is None:
        cart = Cart()
        db.session.add(cart)
        db.session.flush()
        logger.info("created cart %s", cart.id)
    return cart


def destroy_cart(cart_id) -> bool:
    """Delete a cart and its line items. Unknown ids are a no-op.

    Returns True when a cart was deleted. Does NOT commit.
    """
    cart = find_cart(cart_id)
    if cart is None:
        return False
    db.session.delete(cart)
    return True


def add_product_to_cart(cart: Cart, product: Product) -> LineItem:
    """Add one unit of ``product``, merging with an existing line item."""
    line_item = LineItem.query.filter_by(cart_id=cart.id, product_id=product.id).first()
    if line_item:
        line_item.quantity += 1
    else:
        line_item = LineItem(product=product, quantity=1, price=product.price)
        cart.line_items.append(line_item)
    db.session.flush()
    return line_item


def remove_line_item(cart: Cart, line_item_id) -> Optional[LineItem]:
    """Take one unit of a line item out of ``cart``; drop it at zero.

    Returns the line item, or None when it is not in this cart.
    """
    line_item = LineItem.query.filter_by(cart_id=cart.id, id=coerce_id(line_item_id)).first()
    if line_item is None:
        return None
    if line_item.quantity > 1:
        line_item.quantity -= 1
    else:
        cart.line_items.remove(line_item)
    db.session.flush()
    return line_item
