# shop/api/deps.py
from fastapi import Depends
from sqlalchemy.orm import Session

from shop.data.database import get_db
from shop.repos.category_repo import CategoryRepo
from shop.repos.order_repo import OrderRepo
from shop.repos.product_repo import ProductRepo
from shop.repos.user_repo import UserRepo
from shop.services.category_service import CategoryService
from shop.services.idempotency_service import IdempotencyService
from shop.services.notification_service import NotificationService
from shop.services.order_service import OrderService
from shop.services.product_service import ProductService
from shop.services.user_service import UserService


def get_notification_service() -> NotificationService:
    return NotificationService()


def get_idempotency_service() -> IdempotencyService:
    return IdempotencyService()


def get_order_service(
    db: Session = Depends(get_db),
    notification_service: NotificationService = Depends(get_notification_service),
    idempotency_service: IdempotencyService = Depends(get_idempotency_service),
) -> OrderService:
    return OrderService(
        ledger=OrderRepo(db),
        users=UserRepo(db),
        products=ProductRepo(db),
        notification_service=notification_service,
        idempotency_service=idempotency_service,
    )


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    return UserService(UserRepo(db))


def get_product_service(db: Session = Depends(get_db)) -> ProductService:
    return ProductService(ProductRepo(db), CategoryRepo(db))


def get_category_service(db: Session = Depends(get_db)) -> CategoryService:
    return CategoryService(CategoryRepo(db))
