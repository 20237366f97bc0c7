from decimal import Decimal as D
from flask import Blueprint, request
from app.utils.responses import ok
from app.utils.session import current_cart
from app.services.cart_store import add_product_to_cart
from models import db
from models.product import Product
import logging


test_support_bp = Blueprint("test_support_bp", __name__)


@test_support_bp.route("/__ok", methods=["GET"])
def __ok():
    return ok({"ping": "pong"})


@test_support_bp.route("/__boom", methods=["GET"])
def __boom():
    raise RuntimeError("boom")


@test_support_bp.route("/__log", methods=["GET"])
def __log():
    logging.getLogger(__name__).info("test log line")
    return ok({"logged": True})


@test_support_bp.route("/__seed/cart", methods=["POST"])
def __seed_cart():
    """
    Body:
    {
      "products": [{"title": "Book", "price": "10.00", "qty": 2}]
    }
    Creates the products and puts them into the session cart.
    Returns: {"cart_id": ..., "product_ids": [...]}
    """
    j = request.get_json() or {}
    cart = current_cart()
    product_ids = []
    for idx, p in enumerate(j.get("products", [{"title": "Book", "price": "10.00", "qty": 1}])):
        product = Product(
            title=p.get("title", f"Product {idx}"),
            description=p.get("description", "A product"),
            image_url=p.get("image_url", "product.png"),
            price=D(str(p.get("price", "10.00"))),
        )
        db.session.add(product)
        db.session.flush()
        for _ in range(int(p.get("qty", 1))):
            add_product_to_cart(cart, product)
        product_ids.append(product.id)
    db.session.commit()
    return ok({"cart_id": cart.id, "product_ids": product_ids})
