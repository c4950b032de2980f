# shop/data/seed.py
import json
from decimal import Decimal
from pathlib import Path

from sqlalchemy.orm import Session

from shop.data.database import SessionLocal
from shop.data.models.category import CategoryModel
from shop.data.models.product import ProductModel
from shop.repos.category_repo import CategoryRepo
from shop.repos.product_repo import ProductRepo
from shop.utils.settings import DEFAULT_PRODUCT_IMAGE
from shop.utils.logging import get_logger

logger = get_logger(__name__)

SEED_FILE = Path(__file__).with_name("seed_data.json")

# pola nadpisywane przy ponownym seedowaniu istniejacego produktu
UPSERT_FIELDS = ("description", "price", "stock", "img_url")


def load_seed_data(path: Path = SEED_FILE) -> list[dict]:
    with open(path, encoding="utf-8") as fh:
        return json.load(fh, parse_float=Decimal)


def seed_categories(db: Session, data: list[dict] | None = None) -> int:
    """Insert-or-ignore po nazwie, zwraca liczbe nowych kategorii."""
    data = data if data is not None else load_seed_data()
    repo = CategoryRepo(db)

    existing = repo.names()
    missing = sorted({item["category"] for item in data} - existing)

    repo.add_all([CategoryModel(name=name) for name in missing])
    logger.info(f"Seeded {len(missing)} new categories ({len(existing)} already present)")
    return len(missing)


def seed_products(db: Session, data: list[dict] | None = None) -> int:
    """Insert-or-update po nazwie, zwraca liczbe nowych produktow."""
    data = data if data is not None else load_seed_data()
    seed_categories(db, data)

    categories = {c.name: c for c in CategoryRepo(db).list_categories()}
    repo = ProductRepo(db)
    existing = repo.by_names()

    created = []
    for item in data:
        values = {
            "description": item["description"],
            "price": Decimal(str(item["price"])),
            "stock": int(item["stock"]),
            "img_url": item.get("imgUrl") or DEFAULT_PRODUCT_IMAGE,
        }

        product = existing.get(item["name"])
        if product:
            for field in UPSERT_FIELDS:
                setattr(product, field, values[field])
            continue

        product = ProductModel(name=item["name"], category=categories.get(item["category"]), **values)
        existing[item["name"]] = product
        created.append(product)

    repo.add_all(created)
    repo.commit()
    logger.info(f"Seeded {len(created)} new products, {len(data) - len(created)} updated")
    return len(created)


def seed():
    db = SessionLocal()
    try:
        seed_products(db)
    finally:
        db.close()


if __name__ == "__main__":
    seed()
