from flask import Blueprint
from app.version import API_PREFIX
from app.services.catalog import list_products
from app.utils import ok

store_bp = Blueprint("store", __name__, url_prefix=API_PREFIX)


@store_bp.route("/store", methods=["GET"])
def index():
    """Storefront catalog, ordered by title."""
    products = list_products()
    return ok({"products": [p.to_dict() for p in products]})
