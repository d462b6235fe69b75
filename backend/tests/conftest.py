"""
Pytest fixtures for the POS backend tests.

Provides an in-memory SQLite app, a per-test clean database, a test client,
and catalog fixtures (category, products, coupons).
"""

from datetime import timedelta
from decimal import Decimal

import pytest
from pos import create_app
from pos.extensions import db
from pos.models import Category, Product, Coupon
from pos.time_utils import utcnow


@pytest.fixture(scope='session')
def app():
    """Create application for testing."""
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
        'SQLALCHEMY_TRACK_MODIFICATIONS': False,
        'STRICT_TRANSACTION_TOTAL': False,
    })

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture(scope='function')
def db_session(app):
    """Create fresh database for each test."""
    with app.app_context():
        # Clear all data but keep schema
        meta = db.metadata
        for table in reversed(meta.sorted_tables):
            db.session.execute(table.delete())
        db.session.commit()

        yield db.session

        # Cleanup after test
        db.session.rollback()


@pytest.fixture(scope='function')
def category(db_session):
    """Create a category."""
    cat = Category(name="Cafe")
    db_session.add(cat)
    db_session.commit()
    return cat


@pytest.fixture(scope='function')
def product_1(db_session, category):
    """Product with 25 units in stock."""
    product = Product(
        name="Cafe Caramel",
        price=Decimal("100.00"),
        inventory=25,
        category_id=category.id,
    )
    db_session.add(product)
    db_session.commit()
    return product


@pytest.fixture(scope='function')
def product_2(db_session, category):
    """Product with 30 units in stock."""
    product = Product(
        name="Dona de Fresa",
        price=Decimal("100.00"),
        inventory=30,
        category_id=category.id,
    )
    db_session.add(product)
    db_session.commit()
    return product


@pytest.fixture(scope='function')
def coupon_navidad(db_session):
    """20% coupon expiring tomorrow."""
    coupon = Coupon(
        name="navidad",
        percentage=20,
        expiration_date=utcnow().date() + timedelta(days=1),
    )
    db_session.add(coupon)
    db_session.commit()
    return coupon


@pytest.fixture(scope='function')
def coupon_expired(db_session):
    """10% coupon that expired yesterday."""
    coupon = Coupon(
        name="vencido",
        percentage=10,
        expiration_date=utcnow().date() - timedelta(days=1),
    )
    db_session.add(coupon)
    db_session.commit()
    return coupon


def sale_payload(*lines, total=None, coupon=None) -> dict:
    """Build a POST /transactions body from (product_id, quantity, price) tuples."""
    contents = [
        {"productId": product_id, "quantity": quantity, "price": price}
        for product_id, quantity, price in lines
    ]
    payload = {
        "total": total if total is not None else sum(q * p for _, q, p in lines),
        "contents": contents,
    }
    if coupon is not None:
        payload["coupon"] = coupon
    return payload
