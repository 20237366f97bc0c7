from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import BigInteger, Integer

# Use BigInteger in production but fall back to Integer for SQLite
BIGINT = BigInteger().with_variant(Integer, "sqlite")

db = SQLAlchemy()

# Re-export common models for convenience
from .product import Product  # noqa: F401,E402
from .cart import Cart, LineItem, CartOwner, OrderOwner  # noqa: F401,E402
from .order import Order, PAYMENT_TYPES  # noqa: F401,E402
