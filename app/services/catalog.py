import logging
from typing import Dict, List
from models import db
from models.cart import LineItem
from models.product import Product
from app.schemas.product import ProductForm
from app.utils.validation import collect_errors

logger = logging.getLogger(__name__)

PRODUCT_FIELDS = ("title", "description", "image_url", "price")


class ProductValidationError(Exception):
    def __init__(self, errors: Dict[str, str]):
        super().__init__("Product is invalid")
        self.errors = errors


class ReferencedProductDeletion(Exception):
    pass


def validate_product(data) -> Dict[str, str]:
    """Return ``{field: message}`` for every invalid product attribute."""
    return collect_errors(ProductForm, data)


def list_products() -> List[Product]:
    return Product.query.order_by(Product.title).all()


def create_product(data) -> Product:
    errors = validate_product(data)
    if errors:
        raise ProductValidationError(errors)
    form = ProductForm.model_validate(data)
    product = Product(**form.model_dump())
    db.session.add(product)
    db.session.flush()
    return product


def update_product(product: Product, data) -> Product:
    merged = {field: getattr(product, field) for field in PRODUCT_FIELDS}
    merged.update({k: v for k, v in (data or {}).items() if k in PRODUCT_FIELDS})
    errors = validate_product(merged)
    if errors:
        raise ProductValidationError(errors)
    for field, value in ProductForm.model_validate(merged).model_dump().items():
        setattr(product, field, value)
    return product


def is_referenced(product: Product) -> bool:
    return db.session.query(
        LineItem.query.filter_by(product_id=product.id).exists()
    ).scalar()


def delete_product(product: Product) -> None:
    """Delete ``product`` unless a cart or order line item still uses it.

    Does NOT commit.
    """
    if is_referenced(product):
        logger.info("refusing to delete product %s: line items present", product.id)
        raise ReferencedProductDeletion("Line Items present")
    db.session.delete(product)
