"""
Catalog services.

Client-side access to the catalog HTTP API.
"""

from tcgcatalog.services.catalog_client import CatalogAPIError, CatalogClient, key_path

__all__ = [
    "CatalogAPIError",
    "CatalogClient",
    "key_path",
]
