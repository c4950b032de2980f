# shop/repos/category_repo.py
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from shop.data.models.category import CategoryModel


class CategoryRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_category(self, category_id: UUID) -> CategoryModel | None:
        return self.db.get(CategoryModel, category_id)

    def list_categories(self) -> list[CategoryModel]:
        return list(self.db.execute(select(CategoryModel).order_by(CategoryModel.name)).scalars())

    def names(self) -> set[str]:
        return set(self.db.execute(select(CategoryModel.name)).scalars())

    def add_all(self, categories: list[CategoryModel]) -> None:
        self.db.add_all(categories)
        self.db.commit()
