"""Application services - rules shared by the use cases."""

from src.application.services.catalog_rules import CatalogRules
from src.application.services.paging import build_page_request

__all__ = [
    "CatalogRules",
    "build_page_request",
]
