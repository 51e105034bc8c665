#!/usr/bin/env python3
"""
Wipe products and users, then seed a test admin plus a product catalogue.

Products come from a JSON file (a list of entries, or an object with an
"items" list). Without --file a small built-in catalogue is used.

Usage:
    python scripts/seed_products.py --file ../public/mock/catalogue.json
"""
import argparse
import json
import logging
import os
import sys

# allow running from repo/scripts
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from storefront.config import settings
from storefront.db import SessionLocal, init_db
from storefront.logging_config import configure_logging
from storefront.models.user import User, ValidRoles
from storefront.repositories.user_repo import UserRepository
from storefront.schemas.product_schema import ProductCreate
from storefront.services.product_service import ProductService
from storefront.utils.security import hash_password
from storefront.utils.transactions import unit_of_work

log = logging.getLogger("storefront.seed")

SEED_USERS = [
    {
        "email": "admin@storefront.test",
        "full_name": "Seed Admin",
        "password": "Abc123",
        "roles": [ValidRoles.ADMIN, ValidRoles.SUPER_USER],
    },
    {
        "email": "user@storefront.test",
        "full_name": "Seed User",
        "password": "Abc123",
        "roles": [ValidRoles.USER],
    },
]

SEED_PRODUCTS = [
    {
        "title": "Men's Chill Crew Neck Sweatshirt",
        "price": 75,
        "description": "Introducing the Tesla Chill Collection.",
        "stock": 7,
        "sizes": ["XS", "S", "M", "L", "XL", "XXL"],
        "gender": "men",
        "tags": ["sweatshirt"],
        "images": ["1740176-00-A_0_2000.jpg", "1740176-00-A_1.jpg"],
    },
    {
        "title": "Women's Raven Slouchy Crew Sweatshirt",
        "price": 110,
        "description": "Premium slouchy crew neck sweatshirt.",
        "stock": 9,
        "sizes": ["XS", "S", "M", "L"],
        "gender": "women",
        "tags": ["sweatshirt"],
        "images": ["1740250-00-A_0_2000.jpg"],
    },
    {
        "title": "Kids Cybertruck Long Sleeve Tee",
        "price": 30,
        "description": "Long sleeve tee with Cybertruck graphic.",
        "stock": 10,
        "sizes": ["XS", "S", "M"],
        "gender": "kid",
        "tags": ["shirt"],
        "images": [],
    },
]


def _load_entries(path: str):
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise RuntimeError(f"Failed to parse JSON from {path}: {e}")
    if isinstance(data, dict):
        return data.get("items", []) if isinstance(data.get("items"), list) else list(data.values())
    if isinstance(data, list):
        return data
    return []


def seed(entries):
    db = SessionLocal()
    try:
        products = ProductService(db, logger=log)
        products.delete_all()

        users = UserRepository(db)
        with unit_of_work(db):
            users.delete_all()
            admin = None
            for u in SEED_USERS:
                user = users.add(
                    User(
                        email=u["email"],
                        full_name=u["full_name"],
                        password=hash_password(u["password"]),
                        roles=u["roles"],
                    )
                )
                admin = admin or user
            admin_id = admin.id

        created = 0
        for entry in entries:
            products.create(ProductCreate.model_validate(entry), user=users.get_by_id(admin_id))
            created += 1
        log.info("Seeded %d products and %d users", created, len(SEED_USERS))
        return created
    finally:
        db.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--file", "-f", default=None, help="Path to product json (list of product entries)")
    parser.add_argument("--reset", action="store_true", help="drop and recreate tables first")
    args = parser.parse_args()
    configure_logging(settings.LOG_LEVEL)
    if args.file and not os.path.exists(args.file):
        print("File not found:", args.file)
        sys.exit(1)
    init_db(reset=args.reset)
    seed(_load_entries(args.file) if args.file else SEED_PRODUCTS)
