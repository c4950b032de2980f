# shop/repos/user_repo.py
from uuid import UUID

from sqlalchemy import select, func
from sqlalchemy.orm import Session, selectinload

from shop.data.models.order import OrderModel
from shop.data.models.order_detail import OrderDetailModel, OrderDetailProductModel
from shop.data.models.user import UserModel


class UserRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: UUID) -> UserModel | None:
        return self.db.get(UserModel, user_id)

    def get_user_by_email(self, email: str) -> UserModel | None:
        return self.db.execute(
            select(UserModel).where(UserModel.email == email)
        ).scalar_one_or_none()

    def list_users(self, offset: int, limit: int) -> list[UserModel]:
        return list(
            self.db.execute(
                select(UserModel)
                .options(
                    selectinload(UserModel.orders)
                    .selectinload(OrderModel.order_details)
                    .selectinload(OrderDetailModel.items)
                    .selectinload(OrderDetailProductModel.product)
                )
                .order_by(UserModel.name, UserModel.id)
                .offset(offset)
                .limit(limit)
            ).scalars()
        )

    def count_orders(self, user_id: UUID) -> int:
        return self.db.execute(
            select(func.count()).select_from(OrderModel).where(OrderModel.user_id == user_id)
        ).scalar_one()

    def create_user(self, user: UserModel) -> UserModel:
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def save(self, user: UserModel) -> UserModel:
        self.db.commit()
        self.db.refresh(user)
        return user

    def delete_user(self, user: UserModel) -> None:
        self.db.delete(user)
        self.db.commit()

    def rollback(self):
        self.db.rollback()
