import logging
from app.tasks.notifications import send_email_task

logger = logging.getLogger(__name__)

ORDER_RECEIVED_SUBJECT = "Pragmatic Store Order Confirmation"
ORDER_SHIPPED_SUBJECT = "Pragmatic Store Order Shipped"


def _line_items_text(order) -> str:
    lines = [
        f"{li.quantity} x {li.product.title}  {li.total_price:.2f}"
        for li in order.line_items
    ]
    lines.append(f"Total: {order.total_price:.2f}")
    return "\n".join(lines)


def order_received_body(order) -> str:
    return (
        f"Dear {order.name},\n\n"
        "Thank you for your recent order from the Pragmatic Store.\n\n"
        "You ordered the following items:\n\n"
        f"{_line_items_text(order)}\n\n"
        f"We'll send you a separate e-mail when your order ships.\n"
    )


def order_shipped_body(order) -> str:
    return (
        f"Dear {order.name},\n\n"
        "This is just to let you know that we've shipped your recent order:\n\n"
        f"{_line_items_text(order)}\n"
    )


class Notifier:
    """Order emails. Delivery failures are reported, never raised.

    ``dispatch`` receives ``(to, subject, body)``; by default it queues the
    Celery mail task.
    """

    def __init__(self, dispatch=None):
        self.dispatch = dispatch or send_email_task.delay

    def send_order_received(self, order) -> bool:
        return self._send(order, ORDER_RECEIVED_SUBJECT, order_received_body(order))

    def send_order_shipped(self, order) -> bool:
        return self._send(order, ORDER_SHIPPED_SUBJECT, order_shipped_body(order))

    def _send(self, order, subject, body) -> bool:
        try:
            self.dispatch(order.email, subject, body)
        except Exception as exc:
            logger.warning(
                {"event": "notification_failed", "order_id": order.id, "subject": subject, "error": str(exc)}
            )
            return False
        return True
