from flask import Blueprint, request
from app.version import API_PREFIX
from models import db
from models.product import Product
from app.services.cart_store import add_product_to_cart, coerce_id, destroy_cart, remove_line_item
from app.utils import ok, error, transactional, internal_error_response
from app.utils.session import current_cart, forget_cart, session_cart_id

cart_bp = Blueprint("cart", __name__, url_prefix=API_PREFIX)


@cart_bp.route("/cart", methods=["GET"])
def view_cart():
    try:
        with transactional("Failed to load cart"):
            cart = current_cart()
    except Exception:
        return internal_error_response()
    return ok({"cart": cart.to_dict()})


@cart_bp.route("/cart", methods=["DELETE"])
def empty_cart():
    try:
        with transactional("Failed to empty cart"):
            destroy_cart(session_cart_id())
    except Exception:
        return internal_error_response()
    forget_cart()
    return ok(message="Your cart is currently empty")


@cart_bp.route("/line_items", methods=["POST"])
def add_line_item():
    data = request.get_json(silent=True) or request.form.to_dict() or {}
    product_id = coerce_id(data.get("product_id")) if isinstance(data, dict) else None
    product = db.session.get(Product, product_id) if product_id is not None else None
    if not product:
        return error("Invalid product", status=404)
    try:
        with transactional("Failed to add to cart"):
            cart = current_cart()
            line_item = add_product_to_cart(cart, product)
    except Exception:
        return internal_error_response()
    return ok(
        {"line_item": line_item.to_dict(), "cart": cart.to_dict()},
        message="Line item was successfully created.",
        status=201,
    )


@cart_bp.route("/line_items/<int:line_item_id>", methods=["DELETE"])
def remove_from_cart(line_item_id):
    try:
        with transactional("Failed to remove line item"):
            cart = current_cart()
            line_item = remove_line_item(cart, line_item_id)
    except Exception:
        return internal_error_response()
    if line_item is None:
        return error("Line item not found in cart", status=404)
    return ok({"cart": cart.to_dict()}, message="Line item removed")
