# shop/services/category_service.py
from shop.data.seed import seed_categories
from shop.domain.schemas import CategoryRead
from shop.repos.category_repo import CategoryRepo


class CategoryService:
    def __init__(self, repo: CategoryRepo):
        self.repo = repo

    def list_categories(self) -> list[CategoryRead]:
        return [CategoryRead.model_validate(c) for c in self.repo.list_categories()]

    def seed(self) -> dict:
        seed_categories(self.repo.db)
        return {"message": "Categories added"}
