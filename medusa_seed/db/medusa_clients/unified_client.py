"""
Unified Medusa admin client that combines all specialized clients.

This module provides the single object handed to the seeding entry point:
it owns the HTTP session and shares it with the specialized clients.
"""

import logging
from typing import Optional

from medusa_seed.core.config import Settings

from .base_client import BaseMedusaAdminClient
from .fulfillment_client import MedusaFulfillmentClient
from .inventory_client import MedusaInventoryClient
from .product_client import MedusaProductClient
from .region_client import MedusaRegionClient
from .store_client import MedusaStoreClient

logger = logging.getLogger(__name__)


class MedusaAdminClient(BaseMedusaAdminClient):
    """
    Unified Medusa admin client.

    Specialized clients are reachable as attributes:
    ``stores``, ``regions``, ``fulfillment``, ``products`` and ``inventory``.
    """

    def __init__(self, settings: Optional[Settings] = None):
        """Initialize the unified client with all specialized clients."""
        super().__init__(settings)

        self.stores = MedusaStoreClient(self.settings)
        self.regions = MedusaRegionClient(self.settings)
        self.fulfillment = MedusaFulfillmentClient(self.settings)
        self.products = MedusaProductClient(self.settings)
        self.inventory = MedusaInventoryClient(self.settings)

    @property
    def specialized_clients(self):
        return [self.stores, self.regions, self.fulfillment, self.products, self.inventory]

    async def initialize(self):
        """
        Initialize the unified client and share its session.
        """
        await super().initialize()
        self._share_session()
        logger.debug("Unified Medusa admin client initialized with all specialized clients")

    def _share_session(self):
        """Share session, credentials and rate limiting with the specialized clients."""
        for client in self.specialized_clients:
            client.session = self.session
            client._auth_header = self._auth_header
            client._throttle = self._throttle

    async def close(self):
        """Close the unified client and all specialized clients."""
        # The specialized clients share the same session, so we only need to close once
        await super().close()

        for client in self.specialized_clients:
            client.session = None
