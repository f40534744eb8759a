from fastapi import APIRouter
from catalog.api.v1 import categories, health, products, toppings

router = APIRouter()
router.include_router(health.router, tags=["health"])
router.include_router(categories.router)
router.include_router(products.router)
router.include_router(toppings.router)
