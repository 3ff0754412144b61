#!/usr/bin/env python3
"""Insert a few catalog products so the cart and checkout can be tried locally."""

from __future__ import annotations

import argparse

from storefront.db import init_db
from storefront.db.session import SessionLocal, engine
from storefront.models.product import Product

PRODUCTS = [
    {
        "name": "Kemeja Batik Parang",
        "slug": "kemeja-batik-parang",
        "category": "Pria",
        "price": 189000,
        "sizes": ["S", "M", "L", "XL"],
        "colors": ["Coklat", "Biru"],
        "is_new": True,
    },
    {
        "name": "Tote Bag Kanvas",
        "slug": "tote-bag-kanvas",
        "category": "Aksesoris",
        "price": 39999,
        "sizes": [],
        "colors": [],
    },
    {
        "name": "Kaos Polos Premium",
        "slug": "kaos-polos-premium",
        "category": "Pria",
        "price": 19999,
        "sizes": ["M", "L"],
        "colors": [],
    },
]


def main() -> int:
    parser = argparse.ArgumentParser(description="Seed the storefront catalog.")
    parser.add_argument("--reset", action="store_true", help="Delete existing products first")
    args = parser.parse_args()

    init_db(engine)
    db = SessionLocal()
    try:
        if args.reset:
            db.query(Product).delete()

        created = 0
        for item in PRODUCTS:
            if db.query(Product).filter(Product.slug == item["slug"]).first():
                continue
            db.add(Product(is_active=True, **item))
            created += 1
        db.commit()
    finally:
        db.close()

    print(f"Seeded {created} products")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
