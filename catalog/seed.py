"""Sample brands and laptops for local development and demos."""

import logging
from typing import Any, Dict, List

from catalog.db import init_db, upsert_brand, upsert_laptop

__all__ = ["SEED_BRANDS", "SEED_LAPTOPS", "seed_catalog"]

logger = logging.getLogger(__name__)

_CDN = "https://res.cloudinary.com/demo/image/upload/v1"

SEED_BRANDS: List[Dict[str, str]] = [
    {"name": "Dell", "slug": "dell", "logo_url": f"{_CDN}/logo/dell.png"},
    {"name": "HP", "slug": "hp", "logo_url": f"{_CDN}/logo/hp.png"},
    {"name": "Asus", "slug": "asus", "logo_url": f"{_CDN}/logo/asus.png"},
    {"name": "Lenovo", "slug": "lenovo", "logo_url": f"{_CDN}/logo/lenovo.png"},
]

# Keyed to brands by slug
SEED_LAPTOPS: List[Dict[str, Any]] = [
    {
        "brand": "dell",
        "name": "Dell XPS 15 9520",
        "slug": "dell-xps-15-9520",
        "description": "Premium laptop with stunning display and powerful performance for professionals.",
        "processor": "Intel Core i7 12th Gen",
        "ram": "16GB DDR5",
        "storage": "512GB SSD",
        "graphics": "NVIDIA RTX 3050",
        "display": "15.6 inch FHD+",
        "price": 185000,
        "stock_quantity": 8,
        "main_image": f"{_CDN}/laptop/dell-xps-15.jpg",
    },
    {
        "brand": "hp",
        "name": "HP Pavilion 15",
        "slug": "hp-pavilion-15",
        "description": "Versatile laptop perfect for everyday computing and entertainment.",
        "processor": "Intel Core i5 11th Gen",
        "ram": "8GB DDR4",
        "storage": "512GB SSD",
        "graphics": "Intel Iris Xe Graphics",
        "display": "15.6 inch FHD",
        "price": 95000,
        "stock_quantity": 15,
        "main_image": f"{_CDN}/laptop/hp-pavilion.jpg",
    },
    {
        "brand": "asus",
        "name": "Asus ROG Strix G15",
        "slug": "asus-rog-strix-g15",
        "description": "Gaming powerhouse with high refresh rate display and RGB lighting.",
        "processor": "AMD Ryzen 7 5800H",
        "ram": "16GB DDR4",
        "storage": "1TB SSD",
        "graphics": "NVIDIA RTX 3060",
        "display": "15.6 inch FHD 144Hz",
        "price": 225000,
        "stock_quantity": 5,
        "main_image": f"{_CDN}/laptop/asus-rog.jpg",
    },
    {
        "brand": "lenovo",
        "name": "Lenovo ThinkPad E15",
        "slug": "lenovo-thinkpad-e15",
        "description": "Business laptop with legendary ThinkPad durability and security features.",
        "processor": "Intel Core i5 11th Gen",
        "ram": "8GB DDR4",
        "storage": "256GB SSD",
        "graphics": "Intel UHD Graphics",
        "display": "15.6 inch FHD",
        "price": 85000,
        "stock_quantity": 12,
        "main_image": f"{_CDN}/laptop/lenovo-thinkpad.jpg",
    },
    {
        "brand": "dell",
        "name": "Dell Inspiron 14",
        "slug": "dell-inspiron-14",
        "description": "Compact and affordable laptop for students and home users.",
        "processor": "Intel Core i3 11th Gen",
        "ram": "4GB DDR4",
        "storage": "256GB SSD",
        "graphics": "Intel UHD Graphics",
        "display": "14 inch HD",
        "price": 65000,
        "stock_quantity": 20,
        "main_image": f"{_CDN}/laptop/dell-inspiron.jpg",
    },
]


def seed_catalog(db_path: str) -> Dict[str, int]:
    """Create the schema and upsert the sample catalog (idempotent).

    Returns:
        Counts of brands and laptops written.
    """
    init_db(db_path)

    brand_ids = {
        brand["slug"]: upsert_brand(db_path, brand["name"], brand["slug"], brand["logo_url"])
        for brand in SEED_BRANDS
    }

    for laptop in SEED_LAPTOPS:
        fields = {k: v for k, v in laptop.items() if k != "brand"}
        upsert_laptop(db_path, brand_id=brand_ids[laptop["brand"]], **fields)

    logger.info(f"Seeded {len(brand_ids)} brands and {len(SEED_LAPTOPS)} laptops into {db_path}")
    return {"brands": len(brand_ids), "laptops": len(SEED_LAPTOPS)}
