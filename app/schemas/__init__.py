from .order import OrderForm, OrderStatusUpdate
from .product import ProductForm, IMAGE_URL_PATTERN, MIN_PRICE, MAX_PRICE

__all__ = ["OrderForm", "OrderStatusUpdate", "ProductForm", "IMAGE_URL_PATTERN", "MIN_PRICE", "MAX_PRICE"]
