"""
Medusa admin clients organized by responsibility.

This module contains specialized Admin API clients for the different Medusa
resources the seeder touches, plus the unified client that shares one session.
"""

from .base_client import BaseMedusaAdminClient
from .fulfillment_client import MedusaFulfillmentClient
from .inventory_client import MedusaInventoryClient
from .product_client import MedusaProductClient
from .region_client import MedusaRegionClient
from .store_client import MedusaStoreClient
from .unified_client import MedusaAdminClient

__all__ = [
    "BaseMedusaAdminClient",
    "MedusaStoreClient",
    "MedusaRegionClient",
    "MedusaFulfillmentClient",
    "MedusaProductClient",
    "MedusaInventoryClient",
    "MedusaAdminClient",
]
