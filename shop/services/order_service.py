# shop/services/order_service.py
from collections import Counter
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Sequence
from uuid import UUID

import redis

from shop.data.models.order import OrderModel
from shop.data.models.product import ProductModel
from shop.domain.errors import ConflictError, InvalidArgumentError, NotFoundError
from shop.repos.order_repo import OrderRepo
from shop.repos.product_repo import ProductRepo
from shop.repos.user_repo import UserRepo
from shop.services.idempotency_service import IdempotencyService
from shop.services.notification_service import NotificationService
from shop.utils.settings import ORDER_DECREMENT_STOCK
from shop.utils.logging import get_logger

logger = get_logger(__name__)


def _as_uuid(value: Any) -> UUID | None:
    # tylko kanoniczna postac z myslnikami, bez {...}, urn:uuid: i 32 znakow hex
    if isinstance(value, UUID):
        return value
    text = str(value)
    try:
        parsed = UUID(text)
    except (TypeError, ValueError):
        return None
    if str(parsed) != text.lower():
        return None
    return parsed


class OrderService:
    """
    Serwis odpowiedzialny za skladanie zamowien.

    Dostaje gotowe repozytoria w konstruktorze: ledger zamowien,
    katalog produktow i katalog uzytkownikow. Walidacja przerywa sie
    na pierwszym blednym produkcie, a Order i OrderDetail zapisuja sie
    w jednej transakcji.
    """

    def __init__(
        self,
        ledger: OrderRepo,
        users: UserRepo,
        products: ProductRepo,
        notification_service: NotificationService | None = None,
        idempotency_service: IdempotencyService | None = None,
        decrement_stock: bool = ORDER_DECREMENT_STOCK,
    ):
        self.ledger = ledger
        self.users = users
        self.products = products
        self.notification_service = notification_service
        self.idempotency_service = idempotency_service
        self.decrement_stock = decrement_stock

    #commands
    def place_order(
        self,
        user_id: UUID | str,
        product_ids: Sequence[UUID | str],
        idempotency_key: str | None = None,
    ) -> Dict[str, Any]:
        """
        Use Case: Zlozenie zamowienia.

        0. Idempotency-Key (opcjonalny): zajecie klucza albo odtworzenie wyniku
        1. Uzytkownik musi istniec
        2. Kazdy produkt po kolei: poprawny UUID, istnieje, stock > 0
        3. Total = suma cen produktow (Decimal)
        4. Order + OrderDetail w jednej transakcji, rollback przy bledzie
        5. Zapis wyniku pod kluczem, powiadomienie (async)
        """
        uid = _as_uuid(user_id)
        if uid is None:
            raise InvalidArgumentError(f'User id "{user_id}" is not a valid UUID')

        scope = str(uid)
        claimed = False
        if idempotency_key and self.idempotency_service:
            cached, claimed = self._claim_key(scope, idempotency_key)
            if cached:
                logger.info(f"Replaying order {cached['order_id']} for idempotency key {idempotency_key}")
                return self._from_cache(cached)

        try:
            result = self._place(uid, product_ids)
        except Exception:
            if claimed:
                self._release_key(scope, idempotency_key)
            raise

        self._after_commit(uid, result, idempotency_key if claimed else None)
        return result

    #query
    def get_order(self, order_id: UUID) -> OrderModel:
        """
        Use Case: Pobranie zamowienia razem z detalami i produktami.
        """
        order = self.ledger.get_order(order_id)

        if not order:
            raise NotFoundError("Order not found")

        return order

    def _place(self, uid: UUID, product_ids: Sequence[UUID | str]) -> Dict[str, Any]:
        user = self.users.get_user(uid)
        if not user:
            raise NotFoundError("User not found")

        if not product_ids:
            raise InvalidArgumentError("Order must contain at least one product")

        try:
            if self.decrement_stock:
                self.products.lock_products([pid for pid in map(_as_uuid, product_ids) if pid is not None])

            products = self._validate_products(product_ids)
            total = sum((p.price for p in products), Decimal("0.00"))

            if self.decrement_stock:
                self._reserve_stock(products)

            order = self.ledger.create_order(user)
            line = self.ledger.create_line(order, products, total)
            self.ledger.commit()

        except Exception as e:
            # nic nie zostaje w bazie, ani Order ani OrderDetail
            logger.error(f"Order placement for user {uid} failed: {e}")
            self.ledger.rollback()
            raise

        logger.info(
            f"Order {order.id} placed for user {uid}: "
            f"{len(products)} product(s), total {total}"
        )

        return {
            "order_id": order.id,
            "order_date": order.date,
            "total_price": line.price,
            "order_detail_id": line.id,
        }

    def _validate_products(self, product_ids: Sequence[UUID | str]) -> list[ProductModel]:
        validated = []

        for raw_id in product_ids:
            pid = _as_uuid(raw_id)
            if pid is None:
                raise InvalidArgumentError(f'Product id "{raw_id}" is not a valid UUID')

            product = self.products.get_product(pid)
            if not product:
                raise NotFoundError(f'Product with id "{raw_id}" does not exist')

            if product.stock <= 0:
                raise InvalidArgumentError(f'Product with id "{raw_id}" has no stock available')

            validated.append(product)

        return validated

    def _reserve_stock(self, products: list[ProductModel]):
        # ten sam produkt kilka razy w zamowieniu = kilka sztuk
        for product_id, quantity in Counter(p.id for p in products).items():
            rowcount = self.products.decrement_stock(product_id, quantity)
            if rowcount == 0:
                raise InvalidArgumentError(f'Product with id "{product_id}" has no stock available')
            logger.info(f"Stock of product {product_id} decremented by {quantity}")

    def _claim_key(self, scope: str, key: str) -> tuple[Dict[str, Any] | None, bool]:
        """
        Zwraca (zapisany wynik, czy klucz zostal zajety).
        Niedostepny redis nie blokuje zamowienia, idzie ono bez klucza.
        """
        try:
            if self.idempotency_service.claim(scope, key):
                return None, True
            cached = self.idempotency_service.get_result(scope, key)
        except redis.RedisError as e:
            logger.warning(f"Idempotency store unavailable, placing order without key {key}: {e}")
            return None, False

        if cached == IdempotencyService.PENDING:
            raise ConflictError(f'Order with Idempotency-Key "{key}" is already being processed')

        return cached, False

    def _release_key(self, scope: str, key: str):
        try:
            self.idempotency_service.release(scope, key)
        except redis.RedisError as e:
            logger.warning(f"Failed to release idempotency key {key}: {e}")

    def _after_commit(self, user_id: UUID, result: Dict[str, Any], idempotency_key: str | None):
        # zamowienie jest juz w bazie, bledy ponizej tylko logujemy
        if idempotency_key:
            try:
                self.idempotency_service.store_result(str(user_id), idempotency_key, result)
            except redis.RedisError as e:
                logger.warning(f"Failed to store idempotency key {idempotency_key}: {e}")

        if self.notification_service:
            try:
                self.notification_service.send_order_notification(
                    str(user_id), str(result["order_id"]), str(result["total_price"])
                )
            except Exception as e:
                logger.warning(f"Failed to enqueue notification for order {result['order_id']}: {e}")

    @staticmethod
    def _from_cache(cached: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "order_id": UUID(cached["order_id"]),
            "order_date": datetime.fromisoformat(cached["order_date"]),
            "total_price": Decimal(cached["total_price"]),
            "order_detail_id": UUID(cached["order_detail_id"]),
        }
