#!/usr/bin/env python3
"""
Seed the database with an admin, a regular user and a sample catalogue.

Products come from a JSON file when --file is given (a list of entries, or an
object with an "items" list); otherwise the built-in sample set is used.

Usage:
    python scripts/seed_data.py
    python scripts/seed_data.py --file products.json
    python scripts/seed_data.py --clear
"""
import argparse
import json
import logging
import os
import sys

from pydantic import ValidationError

# allow running from repo/scripts
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from inventory_api.db import SessionLocal, init_db
from inventory_api.errors import DuplicateKey
from inventory_api.models.product import Product
from inventory_api.models.user import User
from inventory_api.repositories.user_repo import UserRepository
from inventory_api.schemas.product_schema import ProductCreate
from inventory_api.services.auth_service import AuthService
from inventory_api.services.product_service import ProductService

log = logging.getLogger("seed")

SEED_USERS = [
    {"username": "admin", "password": "admin123", "role": "admin"},
    {"username": "user", "password": "user123", "role": "user"},
]

SAMPLE_PRODUCTS = [
    {"name": "Wireless Bluetooth Headphones", "type": "Electronics", "sku": "WBH-001", "quantity": 50, "price": 99.99,
     "image_url": "https://example.com/headphones.jpg", "description": "High-quality wireless headphones with noise cancellation"},
    {"name": "Gaming Mechanical Keyboard", "type": "Electronics", "sku": "GMK-002", "quantity": 25, "price": 149.99,
     "image_url": "https://example.com/keyboard.jpg", "description": "RGB mechanical keyboard perfect for gaming"},
    {"name": "Ergonomic Office Chair", "type": "Furniture", "sku": "EOC-003", "quantity": 15, "price": 299.99,
     "image_url": "https://example.com/chair.jpg", "description": "Comfortable ergonomic chair for long work sessions"},
    {"name": "Stainless Steel Water Bottle", "type": "Accessories", "sku": "SSWB-004", "quantity": 100, "price": 24.99,
     "image_url": "https://example.com/bottle.jpg", "description": "Insulated water bottle that keeps drinks cold for 24 hours"},
    {"name": "Laptop Stand Adjustable", "type": "Electronics", "sku": "LSA-005", "quantity": 30, "price": 49.99,
     "image_url": "https://example.com/laptop-stand.jpg", "description": "Adjustable aluminum laptop stand for better ergonomics"},
    {"name": "Wireless Mouse", "type": "Electronics", "sku": "WM-006", "quantity": 75, "price": 29.99,
     "image_url": "https://example.com/mouse.jpg", "description": "Precision wireless mouse with long battery life"},
    {"name": "Desk Organizer", "type": "Office Supplies", "sku": "DO-007", "quantity": 40, "price": 34.99,
     "image_url": "https://example.com/organizer.jpg", "description": "Bamboo desk organizer with multiple compartments"},
    {"name": "USB-C Hub", "type": "Electronics", "sku": "UCH-008", "quantity": 20, "price": 79.99,
     "image_url": "https://example.com/usb-hub.jpg", "description": "7-in-1 USB-C hub with HDMI, USB 3.0, and SD card slots"},
    {"name": "Blue Light Glasses", "type": "Accessories", "sku": "BLG-009", "quantity": 60, "price": 19.99,
     "image_url": "https://example.com/glasses.jpg", "description": "Computer glasses that filter blue light"},
    # low stock
    {"name": "Portable Phone Charger", "type": "Electronics", "sku": "PPC-010", "quantity": 5, "price": 39.99,
     "image_url": "https://example.com/charger.jpg", "description": "10000mAh portable battery pack with fast charging"},
]


def load_products(path: str):
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict):
        return data.get("items", list(data.values()))
    return data


def seed(products):
    db = SessionLocal()
    try:
        auth = AuthService(db)
        users = UserRepository(db)
        for u in SEED_USERS:
            if users.get_by_username(u["username"]):
                log.info("User %r already exists", u["username"])
                continue
            auth.register(u["username"], u["password"], role=u["role"])
            log.info("Created user %r (%s)", u["username"], u["role"])

        admin = users.get_by_username("admin")
        svc = ProductService(db)
        created = 0
        for entry in products:
            try:
                svc.create(ProductCreate.model_validate(entry), admin)
                created += 1
            except DuplicateKey as e:
                log.info("Skipping: %s", e.message)
            except ValidationError as e:
                sku = entry.get("sku") if isinstance(entry, dict) else None
                log.warning("Skipping invalid entry %r: %d error(s)", sku, e.error_count())
        log.info("Seeded %d products", created)
    finally:
        db.close()


def clear():
    db = SessionLocal()
    try:
        n_products = db.query(Product).delete()
        n_users = db.query(User).delete()
        db.commit()
        log.info("Removed %d products and %d users", n_products, n_users)
    finally:
        db.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    parser = argparse.ArgumentParser()
    parser.add_argument("--file", "-f", help="JSON file with product entries")
    parser.add_argument("--clear", action="store_true", help="delete all users and products")
    args = parser.parse_args()

    init_db()
    if args.clear:
        clear()
        sys.exit(0)
    if args.file and not os.path.exists(args.file):
        print("File not found:", args.file)
        sys.exit(1)
    seed(load_products(args.file) if args.file else SAMPLE_PRODUCTS)
