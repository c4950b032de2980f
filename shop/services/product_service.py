# shop/services/product_service.py
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from shop.data.models.product import ProductModel
from shop.data.seed import seed_products
from shop.domain.errors import InvalidArgumentError, NotFoundError
from shop.domain.schemas import ProductCreate, ProductRead, ProductUpdate
from shop.repos.category_repo import CategoryRepo
from shop.repos.product_repo import ProductRepo
from shop.utils.settings import DEFAULT_PRODUCT_IMAGE
from shop.utils.logging import get_logger

logger = get_logger(__name__)


class ProductService:
    def __init__(self, repo: ProductRepo, categories: CategoryRepo):
        self.repo = repo
        self.categories = categories

    def list_products(self) -> list[ProductRead]:
        return [ProductRead.model_validate(p) for p in self.repo.list_products()]

    def get_product(self, product_id: UUID) -> ProductRead:
        product = self.repo.get_product(product_id)
        if not product:
            raise NotFoundError("Product not found")
        return ProductRead.model_validate(product)

    def create_product(self, payload: ProductCreate) -> ProductRead:
        if self.repo.get_product_by_name(payload.name):
            raise InvalidArgumentError(f'Product with name "{payload.name}" already exists')

        category = self._require_category(payload.category)

        product = ProductModel(
            name=payload.name,
            description=payload.description,
            price=payload.price,
            stock=payload.stock,
            img_url=payload.img_url or DEFAULT_PRODUCT_IMAGE,
            category=category,
        )

        try:
            created = self.repo.create_product(product)
        except IntegrityError:
            self.repo.rollback()
            raise InvalidArgumentError("Product could not be saved, please try again")

        logger.info(f"Created product {created.id} ({created.name})")
        return ProductRead.model_validate(created)

    def update_product(self, product_id: UUID, payload: ProductUpdate) -> ProductRead:
        product = self.repo.get_product(product_id)
        if not product:
            raise NotFoundError(f"Product with id {product_id} not found")

        changes = payload.model_dump(exclude_unset=True)

        new_name = changes.get("name")
        if new_name and new_name != product.name and self.repo.get_product_by_name(new_name):
            raise InvalidArgumentError(f'Product with name "{new_name}" already exists')

        category_id = changes.pop("category", None)
        if category_id is not None:
            product.category = self._require_category(category_id)

        for field, value in changes.items():
            if value is not None:
                setattr(product, field, value)

        try:
            updated = self.repo.save(product)
        except IntegrityError:
            self.repo.rollback()
            raise InvalidArgumentError("Product could not be updated, please check the submitted data")

        logger.info(f"Updated product {product_id}: {sorted(changes)}")
        return ProductRead.model_validate(updated)

    def delete_product(self, product_id: UUID) -> dict:
        product = self.repo.get_product(product_id)
        if not product:
            raise NotFoundError("Product not found")

        if self.repo.is_referenced(product_id):
            raise InvalidArgumentError(f"Product with id {product_id} is part of existing orders and cannot be deleted")

        self.repo.delete_product(product)
        logger.info(f"Deleted product {product_id}")
        return {"message": f"Product with id {product_id} deleted successfully"}

    def seed(self) -> dict:
        seed_products(self.repo.db)
        return {"message": "Products added"}

    def _require_category(self, category_id: UUID):
        category = self.categories.get_category(category_id)
        if not category:
            raise InvalidArgumentError(f'Category with id "{category_id}" does not exist')
        return category
