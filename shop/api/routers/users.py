# shop/api/routers/users.py
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query

from shop.api.deps import get_user_service
from shop.domain.errors import InvalidArgumentError, NotFoundError
from shop.domain.schemas import MessageOut, UserCreate, UserRead, UserUpdate, UserWithOrders
from shop.services.user_service import UserService
from shop.utils.settings import USERS_PAGE_LIMIT

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/", response_model=List[UserWithOrders])
def list_users(
    page: int = Query(1, ge=1),
    limit: int = Query(USERS_PAGE_LIMIT, ge=1, le=100),
    service: UserService = Depends(get_user_service),
):
    return service.list_users(page, limit)


@router.post("/", response_model=UserRead, status_code=201)
def create_user(payload: UserCreate, service: UserService = Depends(get_user_service)):
    try:
        return service.create_user(payload)
    except InvalidArgumentError as e:
        raise HTTPException(status_code=400, detail=e.message)


@router.get("/{user_id}", response_model=UserRead)
def get_user(user_id: UUID, service: UserService = Depends(get_user_service)):
    try:
        return service.get_user(user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)


@router.put("/{user_id}", response_model=UserRead)
def update_user(user_id: UUID, payload: UserUpdate, service: UserService = Depends(get_user_service)):
    try:
        return service.update_user(user_id, payload)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except InvalidArgumentError as e:
        raise HTTPException(status_code=400, detail=e.message)


@router.delete("/{user_id}", response_model=MessageOut)
def delete_user(user_id: UUID, service: UserService = Depends(get_user_service)):
    try:
        return service.delete_user(user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except InvalidArgumentError as e:
        raise HTTPException(status_code=400, detail=e.message)
