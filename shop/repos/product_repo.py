# shop/repos/product_repo.py
from uuid import UUID

from sqlalchemy import select, update, exists
from sqlalchemy.orm import Session, selectinload

from shop.data.models.order_detail import OrderDetailProductModel
from shop.data.models.product import ProductModel


class ProductRepo:
    """Katalog produktow: odczyt, zapis i atomowe zmniejszanie stocku."""

    def __init__(self, db: Session):
        self.db = db

    def get_product(self, product_id: UUID) -> ProductModel | None:
        return self.db.execute(
            select(ProductModel)
            .options(selectinload(ProductModel.category))
            .where(ProductModel.id == product_id)
        ).scalar_one_or_none()

    def lock_products(self, product_ids: list[UUID]) -> None:
        # SELECT ... FOR UPDATE posortowane po id, rownolegle zamowienia czekaja na commit bez zakleszczen
        if not product_ids:
            return
        self.db.execute(
            select(ProductModel.id)
            .where(ProductModel.id.in_(product_ids))
            .order_by(ProductModel.id)
            .with_for_update()
        ).all()

    def get_product_by_name(self, name: str) -> ProductModel | None:
        return self.db.execute(
            select(ProductModel).where(ProductModel.name == name)
        ).scalar_one_or_none()

    def list_products(self) -> list[ProductModel]:
        return list(
            self.db.execute(
                select(ProductModel).options(selectinload(ProductModel.category)).order_by(ProductModel.name)
            ).scalars()
        )

    def by_names(self) -> dict[str, ProductModel]:
        return {p.name: p for p in self.db.execute(select(ProductModel)).scalars()}

    def is_referenced(self, product_id: UUID) -> bool:
        return self.db.execute(
            select(exists().where(OrderDetailProductModel.product_id == product_id))
        ).scalar()

    def decrement_stock(self, product_id: UUID, quantity: int) -> int:
        """
        UPDATE products SET stock = stock - n WHERE id = :id AND stock >= n
        Zwraca rowcount, 0 oznacza brak stocku. Bez commita, robi to wywolujacy.
        """
        result = self.db.execute(
            update(ProductModel)
            .where(ProductModel.id == product_id, ProductModel.stock >= quantity)
            .values(stock=ProductModel.stock - quantity)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount

    def create_product(self, product: ProductModel) -> ProductModel:
        self.db.add(product)
        self.db.commit()
        self.db.refresh(product)
        return product

    def add_all(self, products: list[ProductModel]) -> None:
        self.db.add_all(products)

    def save(self, product: ProductModel) -> ProductModel:
        self.db.commit()
        self.db.refresh(product)
        return product

    def delete_product(self, product: ProductModel) -> None:
        self.db.delete(product)
        self.db.commit()

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
