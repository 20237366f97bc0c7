from pydantic import BaseModel, field_validator
from pydantic_core import PydanticCustomError
from models.order import PAYMENT_TYPES
from app.schemas.common import require_text


class OrderForm(BaseModel):
    name: str
    address: str
    email: str
    pay_type: str

    @field_validator("name", "address", "email", "pay_type", mode="before")
    @classmethod
    def _present(cls, v):
        return require_text(v)

    @field_validator("pay_type")
    @classmethod
    def _known_pay_type(cls, v):
        if v not in PAYMENT_TYPES:
            raise PydanticCustomError("inclusion", "is not included in the list")
        return v


class OrderStatusUpdate(BaseModel):
    status: str

    @field_validator("status", mode="before")
    @classmethod
    def _shipped_only(cls, v):
        v = require_text(v)
        if v != "shipped":
            raise PydanticCustomError("inclusion", "is not included in the list")
        return v
