import logging

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import SQLAlchemyError

from artshop.main import app
from artshop.repositories.product_repo import ProductRepository
from conftest import LIVE_IDS, SEED_PRODUCTS

client = TestClient(app)

pytestmark = pytest.mark.usefixtures("seeded")

PRICES = {p["product_id"]: p["price"] for p in SEED_PRODUCTS}


def _list(**params):
    res = client.get("/products", params=params)
    assert res.status_code == 200
    return res.json()


def _ids(body):
    return [p["productId"] for p in body["data"]["data"]]


def test_list_products_default_order_by_id():
    body = _list()
    assert _ids(body) == LIVE_IDS
    assert body["data"]["status"] == 200
    assert body["data"]["count"] == len(LIVE_IDS)
    assert body["data"]["message"] == "Products fetched successfully"
    assert body["pagination"] == {
        "totalItems": len(LIVE_IDS),
        "currentPage": 1,
        "pageSize": len(LIVE_IDS),
        "totalPages": 1,
    }


def test_default_order_is_stable():
    assert _ids(_list()) == _ids(_list())


def test_soft_deleted_products_never_listed():
    assert 7 not in _ids(_list())
    assert 7 not in _ids(_list(title="lamp"))


@pytest.mark.parametrize("category", ["resin", "Resin", "RESIN"])
def test_category_is_case_insensitive_exact(category):
    assert _ids(_list(category=category)) == [1, 2, 6, 9]


def test_multiple_categories():
    assert _ids(_list(category="resin,Crafts")) == [1, 2, 5, 6, 9]


def test_category_is_not_substring():
    body = _list(category="res")
    assert body["data"]["data"] == []
    assert body["data"]["message"] == "No products found"
    assert body["pagination"]["totalItems"] == 0


def test_type_filter():
    assert _ids(_list(type="canvas")) == [3, 8]
    assert _ids(_list(type="clock")) == [2]


def test_title_substring_case_insensitive():
    assert _ids(_list(title="RESIN")) == [6, 9]
    assert _ids(_list(title="wave")) == [1]


def test_title_wildcards_are_literal():
    assert _ids(_list(title="100%")) == [8]
    assert _ids(_list(title="_")) == []


def test_price_range_inclusive():
    ids = _ids(_list(min="1000", max="2500"))
    assert ids == [1, 4, 6, 9]
    assert all(1000 <= PRICES[i] <= 2500 for i in ids)


@pytest.mark.parametrize("params", [{"min": "1000"}, {"max": "1000"}, {"min": "abc", "max": "2000"}])
def test_partial_or_invalid_price_bounds_are_ignored(params):
    assert _ids(_list(**params)) == LIVE_IDS


def test_available_filter():
    assert _ids(_list(available="true")) == [1, 2, 3, 4, 6, 8, 9]
    assert _ids(_list(available="false")) == [5]
    assert _ids(_list(available="yes")) == [5]


def test_sort_low_to_high():
    ids = _ids(_list(sort="low-to-high"))
    assert ids == [8, 5, 1, 9, 4, 6, 2, 3]
    prices = [PRICES[i] for i in ids]
    assert prices == sorted(prices)


def test_sort_high_to_low():
    ids = _ids(_list(sort="high-to-low"))
    assert ids == [3, 2, 6, 4, 1, 9, 5, 8]
    prices = [PRICES[i] for i in ids]
    assert prices == sorted(prices, reverse=True)


def test_sort_newest():
    assert _ids(_list(sort="newest")) == [9, 8, 6, 5, 4, 3, 2, 1]


def test_best_selling_only_returns_best_sellers():
    body = _list(sort="best-selling")
    assert _ids(body) == [1, 4]
    assert all(p["mostSeller"] for p in body["data"]["data"])
    assert body["pagination"]["totalItems"] == 2


def test_unknown_sort_falls_back_to_id_order():
    assert _ids(_list(sort="random")) == LIVE_IDS


def test_pagination_window():
    body = _list(page="2", limit="3")
    assert _ids(body) == [4, 5, 6]
    assert body["pagination"] == {
        "totalItems": len(LIVE_IDS),
        "currentPage": 2,
        "pageSize": 3,
        "totalPages": 3,
    }


def test_pages_concatenate_to_full_result():
    full = _ids(_list(sort="low-to-high"))
    pages = []
    for page in range(1, 4):
        pages.extend(_ids(_list(sort="low-to-high", page=str(page), limit="3")))
    assert pages == full


def test_page_past_the_end_is_empty():
    body = _list(page="5", limit="3")
    assert body["data"]["data"] == []
    assert body["pagination"]["totalItems"] == len(LIVE_IDS)


def test_invalid_limit_disables_pagination():
    body = _list(page="abc", limit="abc")
    assert _ids(body) == LIVE_IDS
    assert body["pagination"]["currentPage"] == 1
    assert body["pagination"]["totalPages"] == 1


def test_filters_combine():
    ids = _ids(_list(category="resin", available="true", min="1000", max="3000", sort="high-to-low"))
    assert ids == [6, 1, 9]


def test_product_shape():
    body = _list(title="lotus")
    p = body["data"]["data"][0]
    assert p["productId"] == 3
    assert p["isSale"] is True
    assert p["saleDiscount"] == 15
    assert p["category"] == "painting"
    assert "createdAt" in p and "updatedAt" in p
    assert "id" not in p


def test_get_product_by_id():
    res = client.get("/products/2")
    assert res.status_code == 200
    body = res.json()
    assert body["data"]["productId"] == 2
    assert body["data"]["title"] == "Golden Geode Clock"


@pytest.mark.parametrize("product_id", ["7", "999", "abc"])
def test_get_product_not_found(product_id):
    res = client.get(f"/products/{product_id}")
    assert res.status_code == 404
    assert res.json()["message"] == "Product not found"


HUGE = "99999999999999999999"


@pytest.mark.parametrize("product_id", [HUGE, "-" + HUGE, "0", "9223372036854775808"])
def test_get_product_out_of_range_is_not_found(product_id):
    res = client.get(f"/products/{product_id}")
    assert res.status_code == 404
    assert res.json()["message"] == "Product not found"


def test_huge_limit_disables_pagination():
    body = _list(limit=HUGE)
    assert _ids(body) == LIVE_IDS
    assert body["pagination"]["totalPages"] == 1


def test_huge_page_falls_back_to_first_page():
    body = _list(page=HUGE, limit="5")
    assert _ids(body) == LIVE_IDS[:5]
    assert body["pagination"]["currentPage"] == 1


def test_page_window_beyond_store_range_is_empty():
    # each value fits, their product does not
    body = _list(page="9223372036854775807", limit="1000")
    assert body["data"]["data"] == []
    assert body["pagination"]["totalItems"] == len(LIVE_IDS)


def test_store_failure_is_a_generic_500(monkeypatch, caplog):
    def broken(self, f):
        raise SQLAlchemyError("no such table: products_secret_shadow")

    monkeypatch.setattr(ProductRepository, "count", broken)
    logger = logging.getLogger("catalogue")
    logger.addHandler(caplog.handler)
    try:
        res = client.get("/products", params={"category": "resin"})
    finally:
        logger.removeHandler(caplog.handler)

    assert res.status_code == 500
    assert res.json() == {"status": 500, "message": "Server error while fetching products"}
    assert "products_secret_shadow" not in res.text
    assert "Error fetching products" in caplog.text
    assert "products_secret_shadow" in caplog.text
