# shopapp/products/controller.py
from typing import List
from fastapi import APIRouter, Query

from . import models
from .service import ProductService
from ..database.core import DbSession

router = APIRouter(prefix="/products", tags=["products"])


@router.get("/", response_model=List[models.ProductResponse])
async def get_all_products(db: DbSession):
    return ProductService.get_all_products(db)


@router.get("/search", response_model=List[models.ProductResponse])
async def search_products(db: DbSession, keyword: str = Query(..., description="Case-insensitive name fragment")):
    return ProductService.search_products(db, keyword)


@router.get("/category/{category}", response_model=List[models.ProductResponse])
async def get_products_by_category(category: str, db: DbSession):
    return ProductService.get_products_by_category(db, category)


@router.get("/{product_id}", response_model=models.ProductResponse)
async def get_product(product_id: int, db: DbSession):
    return ProductService.get_product(db, product_id)
