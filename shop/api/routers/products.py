# shop/api/routers/products.py
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException

from shop.api.deps import get_product_service
from shop.domain.errors import InvalidArgumentError, NotFoundError
from shop.domain.schemas import MessageOut, ProductCreate, ProductRead, ProductUpdate
from shop.services.product_service import ProductService

router = APIRouter(prefix="/products", tags=["products"])


@router.get("/", response_model=List[ProductRead])
def list_products(service: ProductService = Depends(get_product_service)):
    return service.list_products()


@router.post("/seeder", response_model=MessageOut)
def seed_products(service: ProductService = Depends(get_product_service)):
    """Laduje produkty z seed_data.json, ponowne wywolanie aktualizuje istniejace."""
    return service.seed()


@router.post("/", response_model=ProductRead, status_code=201)
def create_product(payload: ProductCreate, service: ProductService = Depends(get_product_service)):
    try:
        return service.create_product(payload)
    except InvalidArgumentError as e:
        raise HTTPException(status_code=400, detail=e.message)


@router.get("/{product_id}", response_model=ProductRead)
def get_product(product_id: UUID, service: ProductService = Depends(get_product_service)):
    try:
        return service.get_product(product_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)


@router.put("/{product_id}", response_model=ProductRead)
def update_product(product_id: UUID, payload: ProductUpdate, service: ProductService = Depends(get_product_service)):
    try:
        return service.update_product(product_id, payload)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except InvalidArgumentError as e:
        raise HTTPException(status_code=400, detail=e.message)


@router.delete("/{product_id}", response_model=MessageOut)
def delete_product(product_id: UUID, service: ProductService = Depends(get_product_service)):
    try:
        return service.delete_product(product_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except InvalidArgumentError as e:
        raise HTTPException(status_code=400, detail=e.message)
