"""API routes."""

from fastapi import APIRouter

from tradeshow.routes import admin, customers, portals, products

api_router = APIRouter(prefix="/api")

# Portal wizard lookups
api_router.include_router(customers.router, prefix="/customers", tags=["customers"])
api_router.include_router(products.router, prefix="/products", tags=["products"])

# Portal CRUD + public portal page
api_router.include_router(portals.router, prefix="/portals", tags=["portals"])

# Admin endpoints (sync triggers, portal management)
api_router.include_router(admin.router, prefix="/admin", tags=["admin"])
