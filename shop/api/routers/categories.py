# shop/api/routers/categories.py
from typing import List

from fastapi import APIRouter, Depends

from shop.api.deps import get_category_service
from shop.domain.schemas import CategoryRead, MessageOut
from shop.services.category_service import CategoryService

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("/", response_model=List[CategoryRead])
def list_categories(service: CategoryService = Depends(get_category_service)):
    return service.list_categories()


@router.post("/seeder", response_model=MessageOut)
def seed_categories(service: CategoryService = Depends(get_category_service)):
    return service.seed()
