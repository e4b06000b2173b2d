# shopapp/admin/controller.py
from typing import List
from fastapi import APIRouter
from starlette import status

from . import models
from .service import AdminService
from ..auth.models import MessageResponse
from ..auth.service import CurrentAdmin
from ..database.core import DbSession
from ..products import models as product_models
from ..products.service import ProductService

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/dashboard/stats", response_model=models.DashboardStats)
async def get_dashboard_stats(admin: CurrentAdmin, db: DbSession):
    return AdminService.get_dashboard_stats(db)


# --- Catalog management ---

@router.get("/products", response_model=List[product_models.ProductResponse])
async def get_all_products(admin: CurrentAdmin, db: DbSession):
    return ProductService.get_all_products(db)


@router.get("/products/{product_id}", response_model=product_models.ProductResponse)
async def get_product(product_id: int, admin: CurrentAdmin, db: DbSession):
    return ProductService.get_product(db, product_id)


@router.post("/products", response_model=product_models.ProductMutationResponse, status_code=status.HTTP_201_CREATED)
async def create_product(request: product_models.ProductRequest, admin: CurrentAdmin, db: DbSession):
    product = ProductService.create_product(db, request)
    return product_models.ProductMutationResponse(
        message="Product created successfully",
        product=product_models.ProductResponse.model_validate(product),
    )


@router.put("/products/{product_id}", response_model=product_models.ProductMutationResponse)
async def update_product(product_id: int, request: product_models.ProductRequest, admin: CurrentAdmin, db: DbSession):
    product = ProductService.update_product(db, product_id, request)
    return product_models.ProductMutationResponse(
        message="Product updated successfully",
        product=product_models.ProductResponse.model_validate(product),
    )


@router.delete("/products/{product_id}", response_model=MessageResponse)
async def delete_product(product_id: int, admin: CurrentAdmin, db: DbSession):
    ProductService.delete_product(db, product_id)
    return MessageResponse(message="Product deleted successfully")
