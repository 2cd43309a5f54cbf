from fastapi import APIRouter

from orderdesk.api.api_v1.endpoints import (
    auth,
    carriers,
    customers,
    materials,
    orders,
    ship_to,
    system,
    warehouses,
)

api_router = APIRouter()

api_router.include_router(system.router, tags=["system"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(customers.router, prefix="/customers", tags=["customers"])
api_router.include_router(warehouses.router, prefix="/warehouses", tags=["warehouses"])
api_router.include_router(carriers.router, prefix="/carriers", tags=["carriers"])
api_router.include_router(materials.router, prefix="/materials", tags=["materials"])
api_router.include_router(orders.router, prefix="/orders", tags=["orders"])
api_router.include_router(ship_to.router, prefix="/ship-to", tags=["ship-to"])
