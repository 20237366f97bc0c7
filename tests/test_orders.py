from urllib.parse import parse_qs, urlsplit
import pytest
from models import db
from models.cart import LineItem
from models.order import Order
from app.services import notifier as notifier_module
from app.services.cart_store import add_product_to_cart, get_or_create_cart
from app.services.checkout import place_order
from app.services.notifier import Notifier
from app.services.orders import OrderImmutable, paginate_orders, ship_order
from app.version import API_PREFIX


@pytest.fixture
def make_order(app, make_product, order_data):
    sent = []

    def _make(name='Dave Thomas', price='10.00', quantity=1):
        product = make_product(title=f'Book for {name}', price=price)
        cart = get_or_create_cart(None)
        for _ in range(quantity):
            add_product_to_cart(cart, product)
        db.session.commit()
        data = dict(order_data, name=name)
        result = place_order(cart.id, data, notifier=Notifier(dispatch=lambda *a: sent.append(a)))
        return result.order
    return _make


class _BrokenMailTask:
    @staticmethod
    def delay(*args, **kwargs):
        raise ConnectionError('broker unreachable')


# -------------------- Services --------------------

def test_paginate_orders_newest_first(make_order):
    ids = [make_order(name=f'Customer {i}').id for i in range(12)]
    first = paginate_orders(page=1, per_page=10)
    assert first.total == 12
    assert first.pages == 2
    assert [o.id for o in first.items] == sorted(ids, reverse=True)[:10]
    second = paginate_orders(page=2, per_page=10)
    assert [o.id for o in second.items] == sorted(ids, reverse=True)[10:]
    assert paginate_orders(page=5, per_page=10).items == []


def test_ship_order_once(make_order):
    order = make_order()
    sent = []
    assert ship_order(order, notifier=Notifier(dispatch=lambda *a: sent.append(a))) is True

    shipped = db.session.get(Order, order.id)
    assert shipped.status == 'shipped'
    assert shipped.shipped_at is not None
    to, subject, body = sent[0]
    assert to == 'dave@example.com'
    assert subject == 'Pragmatic Store Order Shipped'
    assert "we've shipped your recent order" in body

    with pytest.raises(OrderImmutable):
        ship_order(shipped, notifier=Notifier(dispatch=lambda *a: sent.append(a)))
    assert len(sent) == 1


# -------------------- HTTP --------------------

def test_list_orders_endpoint(client, app, make_order):
    for i in range(11):
        make_order(name=f'Customer {i}')
    resp = client.get(f'{API_PREFIX}/orders')
    assert resp.status_code == 200
    data = resp.get_json()['data']
    assert len(data['orders']) == app.config['ORDERS_PER_PAGE']
    assert data['total'] == 11
    assert data['pages'] == 2
    assert data['orders'][0]['name'] == 'Customer 10'

    resp = client.get(f'{API_PREFIX}/orders?page=2')
    assert [o['name'] for o in resp.get_json()['data']['orders']] == ['Customer 0']


def test_show_order_endpoint(client, make_order):
    order = make_order(price='4.25', quantity=2)
    resp = client.get(f'{API_PREFIX}/orders/{order.id}')
    assert resp.status_code == 200
    data = resp.get_json()['data']
    assert data['status'] == 'new'
    assert data['total_price'] == 8.5
    assert data['line_items'][0]['quantity'] == 2


def test_unknown_order_is_404(client):
    resp = client.get(f'{API_PREFIX}/orders/999')
    assert resp.status_code == 404
    assert resp.get_json()['message'] == 'Order not found'
    assert client.get(f'{API_PREFIX}/orders/999/payment').status_code == 404


def test_ship_order_endpoint(client, make_order):
    order = make_order()
    resp = client.put(f'{API_PREFIX}/orders/{order.id}', json={'status': 'shipped'})
    assert resp.status_code == 200
    body = resp.get_json()
    assert body['data']['order']['status'] == 'shipped'
    assert body['data']['warnings'] == []

    resp = client.patch(f'{API_PREFIX}/orders/{order.id}', json={'order': {'status': 'shipped'}})
    assert resp.status_code == 409


def test_ship_order_endpoint_reports_mail_failure(client, make_order, monkeypatch):
    order = make_order()
    monkeypatch.setattr(notifier_module, 'send_email_task', _BrokenMailTask)
    resp = client.put(f'{API_PREFIX}/orders/{order.id}', json={'status': 'shipped'})
    assert resp.status_code == 200
    assert resp.get_json()['data']['warnings'] == ['Shipping email could not be sent']
    assert db.session.get(Order, order.id).status == 'shipped'


@pytest.mark.parametrize('payload, field', [
    ({'name': 'Someone Else'}, 'name'),
    ({'pay_type': 'Check', 'status': 'shipped'}, 'pay_type'),
    ({'status': 'cancelled'}, 'status'),
    ({}, 'status'),
])
def test_update_order_rejects_other_changes(client, make_order, payload, field):
    order = make_order()
    resp = client.put(f'{API_PREFIX}/orders/{order.id}', json=payload)
    assert resp.status_code == 422
    assert field in resp.get_json()['errors']
    assert db.session.get(Order, order.id).status == 'new'


def test_delete_order_endpoint(client, make_order):
    order = make_order(quantity=3)
    order_id = order.id
    resp = client.delete(f'{API_PREFIX}/orders/{order_id}')
    assert resp.status_code == 200
    assert resp.get_json()['message'] == 'Order deleted'
    assert Order.query.count() == 0
    assert LineItem.query.count() == 0
    assert client.get(f'{API_PREFIX}/orders/{order_id}').status_code == 404


def test_payment_redirect_endpoint(client, make_order):
    order = make_order(price='24.99', quantity=2)
    resp = client.get(f'{API_PREFIX}/orders/{order.id}/payment')
    assert resp.status_code == 302

    location = urlsplit(resp.headers['Location'])
    assert f'{location.scheme}://{location.netloc}{location.path}' == \
        'https://www.sandbox.paypal.com/cgi-bin/webscr'
    params = {k: v[0] for k, v in parse_qs(location.query).items()}
    assert params['business'] == 'seller@shop.test'
    assert params['amount'] == '49.98'
    assert params['invoice'] == f'INV-{order.id:06d}'
    assert params['return'] == f'http://shop.test{API_PREFIX}/orders/{order.id}'
    assert params['quantity'] == '1'
