"""
Medusa admin client for inventory operations.

This module handles inventory item listing and the stocked quantity of
each item per stock location (inventory levels).
"""

import logging
from typing import Any, Dict, List, Optional

from .base_client import BaseMedusaAdminClient

logger = logging.getLogger(__name__)


class MedusaInventoryClient(BaseMedusaAdminClient):
    """
    Specialized client for Medusa inventory items and levels.
    """

    async def list_inventory_items(self, fields: str = "id") -> List[Dict[str, Any]]:
        """
        List every inventory item known to the backend.

        Args:
            fields: Fields to select

        Returns:
            All inventory items across all pages
        """
        items = await self._list("/inventory-items", "inventory_items", {"fields": fields}, all_pages=True)
        logger.debug(f"Fetched {len(items)} inventory items")
        return items

    async def create_inventory_levels(
        self, levels: List[Dict[str, Any]], batch_size: Optional[int] = None
    ) -> int:
        """
        Create inventory levels in batches.

        Args:
            levels: ``inventory_item_id``/``location_id``/``stocked_quantity`` payloads
            batch_size: Levels per request

        Returns:
            Number of levels sent
        """
        batch_size = batch_size or self.settings.INVENTORY_LEVEL_BATCH_SIZE
        created = 0

        for start in range(0, len(levels), batch_size):
            batch = levels[start : start + batch_size]
            await self._post("/inventory-items/location-levels/batch", {"create": batch})
            created += len(batch)
            logger.debug(f"Inventory levels batch sent: {created}/{len(levels)}")

        logger.info(f"✅ {created} inventory levels created")
        return created
