from flask import session
from app.services.cart_store import get_or_create_cart

CART_SESSION_KEY = "cart_id"


def session_cart_id():
    return session.get(CART_SESSION_KEY)


def current_cart():
    """The shopper's cart, created on first use and remembered in the session.

    Does NOT commit.
    """
    cart = get_or_create_cart(session_cart_id())
    session[CART_SESSION_KEY] = cart.id
    return cart


def forget_cart():
    session.pop(CART_SESSION_KEY, None)
