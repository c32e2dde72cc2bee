from fastapi import APIRouter
from routers.v1.admin_router import admin_router
from routers.v1.auth_router import auth_router
from routers.v1.category_router import category_router
from routers.v1.property_router import property_router
from routers.v1.reservation_router import reservation_router
from routers.v1.seller_router import seller_router

router = APIRouter(
    prefix='/api/v1'
)

router.include_router(auth_router)
router.include_router(category_router)
router.include_router(property_router)
router.include_router(reservation_router)
router.include_router(seller_router)
router.include_router(admin_router)
