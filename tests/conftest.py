import os
import sys
from decimal import Decimal
import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
os.environ.setdefault('APP_ENV', 'testing')
os.environ.setdefault('CELERY_TASK_ALWAYS_EAGER', '1')

from models import db  # noqa: E402
from models.product import Product  # noqa: E402


@pytest.fixture(scope='session')
def app_instance():
    from app import create_app
    from app.config import TestingConfig
    app = create_app(TestingConfig)
    app.config.update(
        TESTING=True,
        SQLALCHEMY_DATABASE_URI='sqlite:///:memory:',
        SQLALCHEMY_TRACK_MODIFICATIONS=False
    )
    return app


@pytest.fixture(scope='function')
def app(app_instance):
    with app_instance.app_context():
        db.drop_all()
        db.create_all()
        yield app_instance
        db.session.remove()
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    return app.test_client()


@pytest.fixture
def make_product(app):
    def _make(title='Book', price='10.00', image_url='book.png'):
        product = Product(
            title=title,
            description=f'{title} description',
            image_url=image_url,
            price=Decimal(price),
        )
        db.session.add(product)
        db.session.commit()
        return product
    return _make


VALID_ORDER = {
    'name': 'Dave Thomas',
    'address': '123 Main Street',
    'email': 'dave@example.com',
    'pay_type': 'Check',
}


@pytest.fixture
def order_data():
    return dict(VALID_ORDER)


@pytest.fixture
def make_app():
    """Build a separate app whose config overrides TestingConfig."""
    from app import create_app
    from app.config import TestingConfig

    def _make(**overrides):
        return create_app(type('OverrideConfig', (TestingConfig,), overrides))
    return _make
