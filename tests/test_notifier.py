import smtplib
from decimal import Decimal
from types import SimpleNamespace
from app.services.notifier import (
    ORDER_RECEIVED_SUBJECT,
    Notifier,
    order_received_body,
    order_shipped_body,
)
from app.tasks import notifications
from app.tasks.notifications import build_message, deliver, send_email_task


def _order():
    items = [
        SimpleNamespace(quantity=2, product=SimpleNamespace(title='Debug It!'), total_price=Decimal('69.90')),
        SimpleNamespace(quantity=1, product=SimpleNamespace(title='Programming Ruby'), total_price=Decimal('49.50')),
    ]
    return SimpleNamespace(
        id=5,
        name='Dave Thomas',
        email='dave@example.com',
        line_items=items,
        total_price=Decimal('119.40'),
    )


def test_order_received_body_lists_items():
    body = order_received_body(_order())
    assert body.startswith('Dear Dave Thomas,')
    assert '2 x Debug It!  69.90' in body
    assert '1 x Programming Ruby  49.50' in body
    assert 'Total: 119.40' in body


def test_order_shipped_body():
    body = order_shipped_body(_order())
    assert "we've shipped your recent order" in body
    assert 'Total: 119.40' in body


def test_notifier_dispatches_to_customer():
    calls = []
    assert Notifier(dispatch=lambda *a: calls.append(a)).send_order_received(_order()) is True
    to, subject, body = calls[0]
    assert to == 'dave@example.com'
    assert subject == ORDER_RECEIVED_SUBJECT


def test_notifier_swallows_dispatch_errors():
    def fail(*args):
        raise ConnectionError('broker down')

    notifier = Notifier(dispatch=fail)
    assert notifier.send_order_received(_order()) is False
    assert notifier.send_order_shipped(_order()) is False


# -------------------- Mail task --------------------

def test_build_message():
    msg = build_message('a@shop.test', 'Hi', 'Body text', 'depot@example.com')
    assert msg['To'] == 'a@shop.test'
    assert msg['From'] == 'depot@example.com'
    assert msg['Subject'] == 'Hi'
    assert msg.get_content().strip() == 'Body text'


class FakeSMTP:
    instances = []

    def __init__(self, host, port, timeout=None):
        self.host, self.port = host, port
        self.calls = []
        FakeSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def starttls(self):
        self.calls.append('starttls')

    def login(self, user, password):
        self.calls.append(('login', user, password))

    def send_message(self, msg):
        self.calls.append(('send', msg['To']))


def test_deliver_uses_tls_and_login(monkeypatch):
    FakeSMTP.instances = []
    monkeypatch.setattr(smtplib, 'SMTP', FakeSMTP)
    cfg = {
        'MAIL_SERVER': 'smtp.shop.test',
        'MAIL_PORT': 587,
        'MAIL_USE_TLS': True,
        'MAIL_USERNAME': 'depot',
        'MAIL_PASSWORD': 'pw',
    }
    deliver(build_message('a@shop.test', 'Hi', 'Body', 'depot@example.com'), cfg)
    smtp = FakeSMTP.instances[0]
    assert (smtp.host, smtp.port) == ('smtp.shop.test', 587)
    assert smtp.calls == ['starttls', ('login', 'depot', 'pw'), ('send', 'a@shop.test')]


def test_mail_task_suppressed_in_tests(app):
    assert send_email_task.apply(args=('a@shop.test', 'Hi', 'Body')).get() is False


def test_mail_task_sends_when_enabled(app, monkeypatch):
    sent = []
    monkeypatch.setitem(app.config, 'MAIL_SUPPRESS_SEND', False)
    monkeypatch.setattr(notifications, 'deliver', lambda msg, cfg: sent.append(msg))
    assert send_email_task.apply(args=('a@shop.test', 'Hi', 'Body')).get() is True
    assert sent[0]['From'] == app.config['MAIL_DEFAULT_SENDER']
