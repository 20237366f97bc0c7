import logging
from flask import Blueprint, request, current_app, redirect, url_for
from flask_limiter.util import get_remote_address
from extensions import limiter
from app.version import API_PREFIX
from models.order import PAYMENT_TYPES
from app.schemas.order import OrderStatusUpdate
from app.services.cart_store import find_cart
from app.services.checkout import (
    OrderPlaced,
    CartEmpty,
    ValidationFailed,
    place_order,
)
from app.services.orders import (
    OrderImmutable,
    delete_order,
    get_order,
    paginate_orders,
    ship_order,
)
from app.services.payment import PaymentConfig, build_payment_redirect
from app.utils import (
    ok,
    error,
    transactional,
    collect_errors,
    internal_error_response,
    validation_error_response,
    redirect_with_message,
)
from app.utils.session import forget_cart, session_cart_id

order_bp = Blueprint("order", __name__, url_prefix=API_PREFIX)

CUSTOMER_FIELDS = ("name", "address", "email", "pay_type")


def _order_payload():
    data = request.get_json(silent=True) or request.form.to_dict() or {}
    return data.get("order", data) if isinstance(data, dict) else {}


@order_bp.route("/orders/new", methods=["GET"])
def new_order():
    cart = find_cart(session_cart_id())
    if cart is None or not cart.line_items:
        return redirect_with_message(url_for("store.index"), "Your cart is empty")
    return ok({"cart": cart.to_dict(), "pay_types": list(PAYMENT_TYPES)})


@order_bp.route("/orders", methods=["POST"])
@limiter.limit(
    lambda: current_app.config["ORDER_LIMIT_PER_IP"],
    key_func=get_remote_address,
    error_message="Too many orders from this IP",
)
def create_order():
    result = place_order(session_cart_id(), _order_payload())

    if isinstance(result, OrderPlaced):
        forget_cart()
        order = result.order
        resp, status = ok(
            {"order": order.to_dict(), "warnings": result.warnings},
            message="Thank you for your order.",
            status=201,
        )
        resp.headers["Location"] = url_for("order.show_order", order_id=order.id)
        return resp, status
    if isinstance(result, CartEmpty):
        return redirect_with_message(url_for("store.index"), result.message)
    if isinstance(result, ValidationFailed):
        return validation_error_response(result.errors)
    logging.error("checkout failed: %s", result.reason)
    return internal_error_response()


@order_bp.route("/orders", methods=["GET"])
def list_orders():
    page = request.args.get("page", 1, type=int)
    per_page = current_app.config["ORDERS_PER_PAGE"]
    pagination = paginate_orders(page=page, per_page=per_page)
    return ok({
        "orders": [o.to_dict() for o in pagination.items],
        "page": pagination.page,
        "pages": pagination.pages,
        "total": pagination.total,
    })


@order_bp.route("/orders/<int:order_id>", methods=["GET"])
def show_order(order_id):
    return ok(get_order(order_id).to_dict())


@order_bp.route("/orders/<int:order_id>", methods=["PUT", "PATCH"])
def update_order(order_id):
    order = get_order(order_id)
    data = _order_payload()
    errors = {f: "cannot be changed once the order is placed" for f in CUSTOMER_FIELDS if f in data}
    errors.update(collect_errors(OrderStatusUpdate, data))
    if errors:
        return validation_error_response(errors)
    try:
        notified = ship_order(order)
    except OrderImmutable as e:
        return error(str(e), status=409)
    except Exception:
        return internal_error_response()
    warnings = [] if notified else ["Shipping email could not be sent"]
    return ok({"order": order.to_dict(), "warnings": warnings}, message="Order was successfully updated.")


@order_bp.route("/orders/<int:order_id>", methods=["DELETE"])
def destroy_order(order_id):
    order = get_order(order_id)
    try:
        with transactional("Failed to delete order"):
            delete_order(order)
    except Exception:
        return internal_error_response()
    return ok(message="Order deleted")


@order_bp.route("/orders/<int:order_id>/payment", methods=["GET"])
def payment_redirect(order_id):
    order = get_order(order_id)
    config = PaymentConfig.from_mapping(current_app.config)
    return redirect(build_payment_redirect(order, order.total_price, config), code=302)
