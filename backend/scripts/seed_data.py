#!/usr/bin/env python3
"""
Seed discounts, products and testimonials.

Products can come from a JSON file (a list, or an object with an "items"
list); without one a small built-in catalogue is used. Entries go through
the same validation as the admin endpoint, so a bad entry is reported and
skipped instead of landing in the store.

Usage:
    python scripts/seed_data.py
    python scripts/seed_data.py --file catalogue.json --reset
"""
import argparse
import json
import os
import sys

# allow running from repo/scripts
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from artshop.db import database
from artshop.models.discount import Discount
from artshop.models.product import Product
from artshop.models.testimonial import Testimonial
from artshop.repositories.discount_repo import DiscountRepository
from artshop.repositories.testimonial_repo import TestimonialRepository
from artshop.services.catalogue_service import (
    CatalogueService,
    CatalogueValidationError,
    DuplicateProduct,
)

DISCOUNTS = [
    {"code": "ARTS10", "discount_percent": 10, "is_active": True},
    {"code": "ARTS20", "discount_percent": 20, "is_active": True},
    {"code": "ARTS30", "discount_percent": 30, "is_active": True},
    {"code": "SUMMER15", "discount_percent": 15, "is_active": True},
    {"code": "WINTER25", "discount_percent": 25, "is_active": False},
    {"code": "WELCOME5", "discount_percent": 5, "is_active": True},
    {"code": "HOLIDAY50", "discount_percent": 50, "is_active": False},
    {"code": "VIP30", "discount_percent": 30, "is_active": True},
    {"code": "FESTIVE40", "discount_percent": 40, "is_active": True},
    {"code": "NEWYEAR20", "discount_percent": 20, "is_active": True},
]

PRODUCTS = [
    {
        "title": "Ocean Wave Resin Coaster Set",
        "price": 1200,
        "category": "resin",
        "type": "coaster",
        "mostSeller": True,
        "details": ["Set of 4", "Heat resistant up to 60C"],
    },
    {
        "title": "Golden Geode Resin Clock",
        "price": 3400,
        "category": "resin",
        "type": "clock",
        "isLatest": True,
        "customizationOptions": [
            {
                "key": "size",
                "label": "Size",
                "inputType": "select",
                "required": True,
                "choices": [
                    {"label": "10 inch", "value": "10", "priceDelta": 0},
                    {"label": "12 inch", "value": "12", "priceDelta": 600},
                ],
            },
            {"key": "name", "label": "Name to engrave", "inputType": "text"},
        ],
    },
    {
        "title": "Classic Lotus Acrylic Painting",
        "price": 5200,
        "category": "painting",
        "type": "canvas",
        "isSale": True,
        "saleDiscount": 15,
    },
    {
        "title": "Mandala Wall Plate",
        "price": 1800,
        "category": "home decor",
        "type": "wall art",
        "mostSeller": True,
    },
    {
        "title": "Handmade Macrame Hanger",
        "price": 900,
        "category": "crafts",
        "type": "hanger",
        "isAvailable": False,
    },
]

TESTIMONIALS = [
    {"name": "Priya", "message": "The resin clock is even prettier in person!", "rating": 5, "location": "Pune"},
    {"name": "Rahul", "message": "Beautiful packaging and quick delivery.", "rating": 4, "location": "Delhi"},
    {"name": "Ananya", "message": "Loved the custom engraving on my coasters.", "rating": 5},
]


def _load_products(path):
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except ValueError as e:
            raise RuntimeError(f"Failed to parse JSON from {path}: {e}")
    if isinstance(data, dict):
        return data.get("items", []) if isinstance(data.get("items"), list) else list(data.values())
    if isinstance(data, list):
        return data
    return []


def seed(products, reset: bool = False):
    database.init()
    db = database.session()
    try:
        if reset:
            db.query(Product).delete()
            db.query(Discount).delete()
            db.query(Testimonial).delete()
            db.commit()
            print("Old products, discounts and testimonials cleared")

        discounts = DiscountRepository(db)
        for d in DISCOUNTS:
            discounts.create_or_update(**d)

        testimonials = TestimonialRepository(db)
        if reset or not testimonials.list_newest_first():
            for t in TESTIMONIALS:
                testimonials.add(**t)
        db.commit()
        print(f"Seeded discounts: {len(DISCOUNTS)}")

        svc = CatalogueService(db)
        created = 0
        for entry in products:
            try:
                svc.create_product(entry)
                created += 1
            except DuplicateProduct:
                print("Skipping existing product:", entry.get("title"))
            except CatalogueValidationError as e:
                print("Skipping invalid product:", entry.get("title"), e.errors)
        print("Seeded products:", created)
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--file", "-f", default=None, help="Path to a product json list")
    parser.add_argument("--reset", action="store_true", help="Clear existing rows first")
    args = parser.parse_args()
    if args.file and not os.path.exists(args.file):
        print("File not found:", args.file)
        sys.exit(1)
    seed(_load_products(args.file) if args.file else PRODUCTS, reset=args.reset)
