"""Application layer module.

Contains application services (use cases) that orchestrate
domain logic and infrastructure.
"""

from productlists.application.export_service import (
    ExportResult,
    ProductListExporter,
)
from productlists.application.product_list_service import (
    ProductListService,
    get_product_list_service,
)

__all__ = [
    "ExportResult",
    "ProductListExporter",
    "ProductListService",
    "get_product_list_service",
]
