from inventory_api.models.product import Product
from inventory_api.models.user import User
from scripts.seed_data import SAMPLE_PRODUCTS, seed


def test_seed_creates_users_and_sample_catalogue(db):
    seed(SAMPLE_PRODUCTS)
    assert {u.username for u in db.query(User).all()} == {"admin", "user"}
    assert db.query(Product).count() == len(SAMPLE_PRODUCTS)


def test_seed_skips_invalid_and_duplicate_entries(db):
    entries = [
        {"name": "Kettle", "type": "Kitchen", "sku": "ket-1", "quantity": 4, "price": 20},
        {"name": "Kettle", "type": "Kitchen", "sku": "KET-1", "quantity": 1, "price": 20},
        {"name": "", "type": "Kitchen", "sku": "bad sku", "quantity": -3, "price": 1},
        {"name": "Toaster", "type": "Kitchen", "sku": "toa-1", "quantity": 2, "price": 35},
    ]
    seed(entries)
    assert sorted(p.sku for p in db.query(Product).all()) == ["KET-1", "TOA-1"]

    seed(entries)
    assert db.query(User).count() == 2
    assert db.query(Product).count() == 2
