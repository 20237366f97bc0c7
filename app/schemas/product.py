import re
from decimal import Decimal
from pydantic import BaseModel, field_validator
from pydantic_core import PydanticCustomError
from app.schemas.common import require_text

IMAGE_URL_PATTERN = re.compile(r"\.(gif|jpg|png|jpeg)$", re.IGNORECASE)
MIN_PRICE = Decimal("0.01")
# largest value a Numeric(8, 2) column holds
MAX_PRICE = Decimal("999999.99")


class ProductForm(BaseModel):
    title: str
    description: str
    image_url: str
    price: Decimal

    @field_validator("title", "description", "image_url", mode="before")
    @classmethod
    def _present(cls, v):
        return require_text(v)

    @field_validator("image_url")
    @classmethod
    def _image_extension(cls, v):
        if not IMAGE_URL_PATTERN.search(v):
            raise PydanticCustomError("format", "must be a URL for GIF, JPG or PNG image.")
        return v

    @field_validator("price", mode="before")
    @classmethod
    def _price_present(cls, v):
        if v is None or (isinstance(v, str) and not v.strip()):
            raise PydanticCustomError("blank", "can't be blank")
        if isinstance(v, float):
            return Decimal(str(v))
        return v

    @field_validator("price")
    @classmethod
    def _price_range(cls, v):
        if v < MIN_PRICE:
            raise PydanticCustomError(
                "greater_than_or_equal", "must be greater than or equal to 0.01"
            )
        if v > MAX_PRICE:
            raise PydanticCustomError(
                "less_than_or_equal", "must be less than or equal to 999999.99"
            )
        return v
