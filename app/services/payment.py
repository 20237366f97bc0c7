"""Redirect to the hosted PayPal payment page.

Nothing here talks to PayPal: the shopper's browser is sent to the
sandbox ``webscr`` endpoint with the order encoded in the query string.
"""
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Mapping
from urllib.parse import urlencode
from app.version import API_PREFIX

TWOPLACES = Decimal("0.01")

BUY_NOW_COMMAND = "_xclick"


@dataclass(frozen=True)
class PaymentConfig:
    endpoint: str
    business: str
    return_base: str
    invoice_format: str = "INV-{order_id:06d}"
    item_name: str = "Pragmatic Store Order"
    item_number: str = "1234"

    @classmethod
    def from_mapping(cls, config: Mapping) -> "PaymentConfig":
        return cls(
            endpoint=config["PAYPAL_ENDPOINT"],
            business=config["PAYPAL_BUSINESS"],
            return_base=config["APP_HOST"].rstrip("/"),
            invoice_format=config.get("PAYPAL_INVOICE_FORMAT", cls.invoice_format),
            item_name=config.get("PAYPAL_ITEM_NAME", cls.item_name),
            item_number=str(config.get("PAYPAL_ITEM_NUMBER", cls.item_number)),
        )


def format_amount(amount) -> str:
    return str(Decimal(str(amount)).quantize(TWOPLACES, rounding=ROUND_HALF_UP))


def invoice_number(order, config: PaymentConfig) -> str:
    return config.invoice_format.format(order_id=order.id)


def build_payment_redirect(order, amount, config: PaymentConfig) -> str:
    """Build the hosted-payment URL for ``order`` charging ``amount``.

    Parameters are emitted in sorted key order so the same inputs always
    give the same URL.
    """
    values = {
        "business": config.business,
        "cmd": BUY_NOW_COMMAND,
        "upload": 1,
        "return": f"{config.return_base}{API_PREFIX}/orders/{order.id}",
        "invoice": invoice_number(order, config),
        "amount": format_amount(amount),
        "item_name": config.item_name,
        "item_number": config.item_number,
        "quantity": "1",
    }
    return f"{config.endpoint}?{urlencode(sorted(values.items()))}"
