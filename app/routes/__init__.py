from .store import store_bp
from .product import product_bp
from .cart import cart_bp
from .order import order_bp


__all__ = [
    'store_bp',
    'product_bp',
    'cart_bp',
    'order_bp',
]
