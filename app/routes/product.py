from flask import Blueprint, request, url_for
from app.version import API_PREFIX
from models import db
from models.product import Product
from app.services.catalog import (
    ProductValidationError,
    ReferencedProductDeletion,
    create_product,
    delete_product,
    list_products,
    update_product,
)
from app.utils import (
    ok,
    error,
    transactional,
    internal_error_response,
    validation_error_response,
)

product_bp = Blueprint("product", __name__, url_prefix=API_PREFIX)


def _product_attrs():
    """Product fields from the JSON body, bare or under a "product" key; None if not an object."""
    data = request.get_json(silent=True) or {}
    attrs = data.get("product", data) if isinstance(data, dict) else None
    return attrs if isinstance(attrs, dict) else None


@product_bp.route("/products", methods=["GET"])
def list_all():
    return ok({"products": [p.to_dict() for p in list_products()]})


@product_bp.route("/products", methods=["POST"])
def create():
    attrs = _product_attrs()
    if attrs is None:
        return validation_error_response({"base": "must be a JSON object"})
    try:
        with transactional("Failed to create product", expected=(ProductValidationError,)):
            product = create_product(attrs)
    except ProductValidationError as e:
        return validation_error_response(e.errors)
    except Exception:
        return internal_error_response()
    resp, status = ok(product.to_dict(), message="Product was successfully created.", status=201)
    resp.headers["Location"] = url_for("product.show", product_id=product.id)
    return resp, status


@product_bp.route("/products/<int:product_id>", methods=["GET"])
def show(product_id):
    product = db.get_or_404(Product, product_id, description="Product not found")
    return ok(product.to_dict())


@product_bp.route("/products/<int:product_id>", methods=["PUT", "PATCH"])
def update(product_id):
    product = db.get_or_404(Product, product_id, description="Product not found")
    attrs = _product_attrs()
    if attrs is None:
        return validation_error_response({"base": "must be a JSON object"})
    try:
        with transactional("Failed to update product", expected=(ProductValidationError,)):
            update_product(product, attrs)
    except ProductValidationError as e:
        return validation_error_response(e.errors)
    except Exception:
        return internal_error_response()
    return ok(product.to_dict(), message="Product was successfully updated.")


@product_bp.route("/products/<int:product_id>", methods=["DELETE"])
def destroy(product_id):
    product = db.get_or_404(Product, product_id, description="Product not found")
    try:
        with transactional("Failed to delete product", expected=(ReferencedProductDeletion,)):
            delete_product(product)
    except ReferencedProductDeletion as e:
        return error(str(e), status=409)
    except Exception:
        return internal_error_response()
    return ok(message="Product deleted")
