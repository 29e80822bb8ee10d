import time
from datetime import datetime, timedelta, timezone

import pytest

from inventory_api.models.product import Product
from inventory_api.models.user import User
from inventory_api.services.analytics_service import AnalyticsService
from inventory_api.services.auth_service import AuthService
from inventory_api.services.product_service import ProductService
from inventory_api.utils.time import start_of_month


def test_start_of_month_is_local_midnight_on_the_first():
    now = datetime(2024, 3, 17, 15, 30, tzinfo=timezone.utc)
    start = start_of_month(now).astimezone()
    assert (start.day, start.hour, start.minute, start.second) == (1, 0, 0, 0)
    assert start <= now


@pytest.fixture
def new_york_time(monkeypatch):
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is not available")
    monkeypatch.setenv("TZ", "America/New_York")
    time.tzset()
    if time.tzname[0] != "EST":
        monkeypatch.undo()
        time.tzset()
        pytest.skip("zoneinfo data for America/New_York is not installed")
    yield
    monkeypatch.undo()
    time.tzset()


@pytest.mark.parametrize(
    "now,expected",
    [
        # DST began on 10 March; the 1st is still EST (-05:00)
        (datetime(2024, 3, 17, 15, 30, tzinfo=timezone.utc), datetime(2024, 3, 1, 5, 0, tzinfo=timezone.utc)),
        # DST ended on 3 November; the 1st is still EDT (-04:00)
        (datetime(2024, 11, 20, 12, 0, tzinfo=timezone.utc), datetime(2024, 11, 1, 4, 0, tzinfo=timezone.utc)),
        # 1 April 02:30Z is still 31 March locally
        (datetime(2024, 4, 1, 2, 30, tzinfo=timezone.utc), datetime(2024, 3, 1, 5, 0, tzinfo=timezone.utc)),
    ],
)
def test_start_of_month_uses_offset_in_force_on_the_first(new_york_time, now, expected):
    assert start_of_month(now) == expected


def test_dashboard_empty_catalogue(db, admin):
    data = AnalyticsService(db).dashboard()
    assert data["summary"]["products"]["total"] == 0
    assert data["summary"]["inventory"] == {"totalValue": 0, "averageProductValue": 0}
    assert data["charts"] == {"topProductsByValue": [], "productsByCategory": []}
    assert data["stockAlerts"] == {"lowStock": 0, "outOfStock": 0, "criticalItems": []}


def test_dashboard_figures(db, admin, user, make_product):
    AuthService(db).register("bob", "bob12345")
    make_product(type="A", quantity=2, price=10)
    make_product(type="A", quantity=0, price=5)
    make_product(type="B", quantity=20, price=1)
    gone = make_product(type="C", quantity=100, price=100)
    ProductService(db).delete(gone.id, admin)

    data = AnalyticsService(db).dashboard()
    summary = data["summary"]
    assert summary["users"] == {"total": 3, "admins": 1, "regular": 2, "newThisMonth": 3}
    assert summary["products"] == {"total": 3, "lowStock": 2, "outOfStock": 1, "newThisMonth": 3}
    assert summary["inventory"]["totalValue"] == 40
    assert summary["inventory"]["averageProductValue"] == 40 / 3

    top = data["charts"]["topProductsByValue"]
    assert [t["totalValue"] for t in top] == [20, 20, 0]
    assert [t["type"] for t in data["charts"]["productsByCategory"]] == ["A", "B"]

    assert len(data["recentActivity"]) == 3
    assert data["recentActivity"][0]["createdBy"] == {"id": admin.id, "username": "admin"}

    alerts = data["stockAlerts"]
    assert (alerts["lowStock"], alerts["outOfStock"]) == (2, 1)
    assert set(alerts["criticalItems"][0]) == {"id", "name", "sku", "quantity", "threshold"}


def test_dashboard_limits_lists(db, make_product):
    for i in range(12):
        make_product(quantity=i, price=1)
    data = AnalyticsService(db).dashboard()
    assert len(data["charts"]["topProductsByValue"]) == 5
    assert len(data["recentActivity"]) == 10
    assert len(data["stockAlerts"]["criticalItems"]) == 5
    assert data["stockAlerts"]["lowStock"] == 11


def test_new_this_month_excludes_older_records(db, admin, make_product):
    old = make_product()
    last_year = datetime.now(timezone.utc) - timedelta(days=400)
    db.query(Product).filter(Product.id == old.id).update({"created_at": last_year})
    db.query(User).filter(User.id == admin.id).update({"created_at": last_year})
    db.commit()
    make_product()

    summary = AnalyticsService(db).dashboard()["summary"]
    assert summary["products"]["newThisMonth"] == 1
    assert summary["users"]["newThisMonth"] == 0


def test_product_analytics(db, make_product):
    make_product(name="cheap", type="A", price=1, quantity=0)
    make_product(name="pricey", type="B", price=99)
    make_product(name="mid", type="A", price=50, quantity=5)

    data = AnalyticsService(db).product_analytics()
    assert data["summary"] == {"totalProducts": 3, "lowStockCount": 2, "outOfStockCount": 1}
    assert [p["name"] for p in data["mostExpensive"]] == ["pricey", "mid", "cheap"]
    assert [p["name"] for p in data["recentlyAdded"]] == ["mid", "pricey", "cheap"]
    assert data["productsByType"] == [{"type": "A", "count": 2}, {"type": "B", "count": 1}]
