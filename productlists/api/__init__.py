"""API layer module.

Contains FastAPI routers and request/response schemas.
"""

from productlists.api.health import router as health_router
from productlists.api.product_lists import router as product_lists_router

__all__ = [
    "health_router",
    "product_lists_router",
]
