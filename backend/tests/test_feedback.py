import pytest
from fastapi.testclient import TestClient

from artshop.main import app

client = TestClient(app)

pytestmark = pytest.mark.usefixtures("seeded")


def test_feedback_newest_first():
    res = client.get("/feedback")
    assert res.status_code == 200
    body = res.json()
    assert [f["name"] for f in body] == ["Rahul", "Ananya", "Priya"]
    assert body[0]["message"] == "Quick delivery"
    assert body[0]["rating"] == 4
