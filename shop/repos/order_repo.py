# shop/repos/order_repo.py
from decimal import Decimal
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from shop.data.models.order import OrderModel
from shop.data.models.order_detail import OrderDetailModel, OrderDetailProductModel
from shop.data.models.product import ProductModel
from shop.data.models.user import UserModel
from shop.domain.errors import InvalidArgumentError


class OrderRepo:
    """
    Ledger zamowien: tworzy Order i OrderDetail w jednej sesji.
    Nic nie commituje samo, transakcja nalezy do OrderService.
    """

    def __init__(self, db: Session):
        self.db = db

    def create_order(self, user: UserModel) -> OrderModel:
        order = OrderModel(user_id=user.id)
        self.db.add(order)
        self.db.flush()
        return order

    def create_line(self, order: OrderModel, products: list[ProductModel], price: Decimal) -> OrderDetailModel:
        if not products:
            raise InvalidArgumentError("Order detail must reference at least one product")

        expected = sum((p.price for p in products), Decimal("0.00"))
        if price != expected:
            raise InvalidArgumentError(f"Order detail price {price} does not match products total {expected}")

        line = OrderDetailModel(price=price)
        # jawne wiersze tabeli laczacej, pozycja = kolejnosc w zamowieniu
        line.items = [
            OrderDetailProductModel(position=pos, product_id=p.id, product=p)
            for pos, p in enumerate(products)
        ]
        order.order_details.append(line)
        self.db.flush()
        return line

    def get_order(self, order_id: UUID) -> OrderModel | None:
        return self.db.execute(
            select(OrderModel)
            .options(
                selectinload(OrderModel.order_details)
                .selectinload(OrderDetailModel.items)
                .selectinload(OrderDetailProductModel.product)
            )
            .where(OrderModel.id == order_id)
        ).scalar_one_or_none()

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
