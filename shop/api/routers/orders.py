# shop/api/routers/orders.py
from uuid import UUID

from fastapi import APIRouter, Depends, Header, HTTPException

from shop.api.deps import get_order_service
from shop.domain.errors import ConflictError, InvalidArgumentError, NotFoundError
from shop.domain.schemas import OrderCreate, OrderOut, OrderPlacedOut
from shop.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("/", response_model=OrderPlacedOut, status_code=201)
def create_order(
    payload: OrderCreate,
    idempotency_key: str | None = Header(None, max_length=128),
    svc: OrderService = Depends(get_order_service),
):
    """
    Sklada zamowienie dla uzytkownika z listy produktow.
    Opcjonalny naglowek Idempotency-Key chroni przed podwojnym zamowieniem.
    """
    try:
        return svc.place_order(
            payload.user_id,
            [p.id for p in payload.products],
            idempotency_key=idempotency_key,
        )
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except InvalidArgumentError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=e.message)


@router.get("/{order_id}", response_model=OrderOut)
def get_order(
    order_id: UUID,
    svc: OrderService = Depends(get_order_service),
):
    """
    Pobiera zamowienie z detalami i produktami.
    """
    try:
        return svc.get_order(order_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
