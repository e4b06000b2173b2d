# shopapp/api/main.py

from fastapi import APIRouter

from ..admin.controller import router as admin_router
from ..auth.controller import router as auth_router
from ..cart.controller import router as cart_router
from ..favorites.controller import router as favorites_router
from ..notifications.controller import router as notifications_router
from ..orders.controller import router as orders_router
from ..payments.controller import router as payments_router
from ..products.controller import router as products_router
from ..reviews.controller import router as reviews_router
from ..users.controller import router as users_router

# Create main API router
api_router = APIRouter()

api_router.include_router(auth_router)
api_router.include_router(users_router)
api_router.include_router(products_router)
api_router.include_router(cart_router)
api_router.include_router(orders_router)
api_router.include_router(payments_router)
api_router.include_router(reviews_router)
api_router.include_router(favorites_router)
api_router.include_router(notifications_router)
api_router.include_router(admin_router)
