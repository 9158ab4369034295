"""API route modules."""

from foodworks.api.routes.batches import router as batches_router
from foodworks.api.routes.compliance import router as compliance_router
from foodworks.api.routes.equipment import router as equipment_router
from foodworks.api.routes.health import router as health_router
from foodworks.api.routes.inventory import router as inventory_router
from foodworks.api.routes.products import router as products_router
from foodworks.api.routes.raw_materials import router as raw_materials_router
from foodworks.api.routes.recipes import router as recipes_router
from foodworks.api.routes.sales import router as sales_router
from foodworks.api.routes.suppliers import router as suppliers_router

__all__ = [
    "health_router",
    "inventory_router",
    "raw_materials_router",
    "recipes_router",
    "products_router",
    "batches_router",
    "sales_router",
    "suppliers_router",
    "equipment_router",
    "compliance_router",
]
