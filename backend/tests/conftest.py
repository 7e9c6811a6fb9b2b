import os
import tempfile
from datetime import datetime, timedelta, timezone

# point the app at a throwaway database before anything imports artshop.config
_TMP = tempfile.mkdtemp(prefix="artshop-tests-")
os.environ["DATABASE_URL"] = "sqlite:///" + os.path.join(_TMP, "test.db")
os.environ["ADMIN_JWT_SECRET"] = "test-secret"
os.environ["ENVIRONMENT"] = "test"
os.environ["SUGGESTION_LIMIT"] = "6"

import jwt
import pytest

from artshop.db import database
from artshop.models.discount import Discount
from artshop.models.product import Product
from artshop.models.testimonial import Testimonial
from artshop.repositories.counter_repo import PRODUCT_ID_COUNTER, CounterRepository

BASE_TIME = datetime(2025, 1, 1, tzinfo=timezone.utc)

SEED_PRODUCTS = [
    dict(product_id=1, title="Ocean Wave Coaster", price=1200, category="resin", type="coaster", most_seller=True),
    dict(product_id=2, title="Golden Geode Clock", price=3400, category="Resin", type="Clock", is_latest=True),
    dict(product_id=3, title="Classic Lotus Painting", price=5200, category="painting", type="canvas", is_sale=True, sale_discount=15),
    dict(product_id=4, title="Mandala Wall Plate", price=1800, category="home decor", type="wall art", most_seller=True),
    dict(product_id=5, title="Macrame Hanger", price=900, category="crafts", type="hanger", is_available=False),
    dict(product_id=6, title="Abstract Resin Tray", price=2500, category="resin", type="tray"),
    dict(product_id=7, title="Retired Resin Lamp", price=2000, category="resin", type="lamp", is_deleted=True),
    dict(product_id=8, title="Mini 100% Cotton Canvas", price=700, category="painting", type="canvas"),
    dict(product_id=9, title="Resin Keychain", price=1200, category="resin", type="keychain"),
]

# ids of the non-deleted seed products, in id order
LIVE_IDS = [1, 2, 3, 4, 5, 6, 8, 9]

SEED_DISCOUNTS = [
    ("ARTS10", 10, True),
    ("ARTS20", 20, True),
    ("SUMMER15", 15, True),
    ("WINTER25", 25, False),
    ("HOLIDAY50", 50, False),
    ("VIP30", 30, True),
    ("ÉTÉ15", 15, True),
]

SEED_TESTIMONIALS = [
    ("Priya", "Loved the resin clock", 5, 1),
    ("Rahul", "Quick delivery", 4, 3),
    ("Ananya", "Beautiful packaging", 5, 2),
]


def reset_and_seed():
    database.init(reset=True)
    db = database.session()
    try:
        for fields in SEED_PRODUCTS:
            # created_at grows with product_id so "newest" is predictable
            db.add(Product(created_at=BASE_TIME + timedelta(days=fields["product_id"]), **fields))
        for code, percent, active in SEED_DISCOUNTS:
            db.add(Discount(code=code, discount_percent=percent, is_active=active))
        for name, message, rating, day in SEED_TESTIMONIALS:
            db.add(
                Testimonial(
                    name=name,
                    message=message,
                    rating=rating,
                    created_at=BASE_TIME + timedelta(days=day),
                )
            )
        db.commit()
        CounterRepository(db).raise_to(PRODUCT_ID_COUNTER, max(p["product_id"] for p in SEED_PRODUCTS))
        db.commit()
    finally:
        db.close()


@pytest.fixture(scope="module")
def seeded():
    reset_and_seed()
    yield


@pytest.fixture
def db_session():
    db = database.session()
    try:
        yield db
    finally:
        db.close()


def make_token(role="admin", secret="test-secret", expires_in=timedelta(hours=1)):
    payload = {"role": role, "sub": "tester", "exp": datetime.now(timezone.utc) + expires_in}
    return jwt.encode(payload, secret, algorithm="HS256")


@pytest.fixture
def admin_headers():
    return {"Authorization": f"Bearer {make_token()}"}
