"""
Medusa admin client for store-level resources.

This module handles the store itself, sales channels and publishable
API keys, including the links between keys and sales channels.
"""

import logging
from typing import Any, Dict, List, Optional

from .base_client import BaseMedusaAdminClient

logger = logging.getLogger(__name__)


class MedusaStoreClient(BaseMedusaAdminClient):
    """
    Specialized client for stores, sales channels and API keys.
    """

    async def list_stores(self) -> List[Dict[str, Any]]:
        """Return the stores configured in the backend."""
        return await self._list("/stores", "stores")

    async def update_store(self, store_id: str, update: Dict[str, Any]) -> Dict[str, Any]:
        """
        Update a store.

        Args:
            store_id: Store ID
            update: Fields to update (name, supported currencies, default sales channel)

        Returns:
            Updated store
        """
        data = await self._post(f"/stores/{store_id}", update)
        store = data.get("store", {})
        logger.info(f"✅ Store updated: {store.get('name', store_id)}")
        return store

    async def list_sales_channels(self, name: Optional[str] = None) -> List[Dict[str, Any]]:
        """List sales channels, optionally filtered by exact name."""
        return await self._list("/sales-channels", "sales_channels", {"name": name})

    async def create_sales_channel(self, sales_channel_data: Dict[str, Any]) -> Dict[str, Any]:
        data = await self._post("/sales-channels", sales_channel_data)
        sales_channel = data["sales_channel"]
        logger.info(f"✅ Sales channel created: {sales_channel.get('name')} ({sales_channel.get('id')})")
        return sales_channel

    async def create_api_key(self, title: str, key_type: str = "publishable") -> Dict[str, Any]:
        """
        Create an API key.

        Args:
            title: Key title shown in the admin
            key_type: ``publishable`` or ``secret``

        Returns:
            Created API key
        """
        data = await self._post("/api-keys", {"title": title, "type": key_type})
        api_key = data["api_key"]
        logger.info(f"✅ {key_type.capitalize()} API key created: {title} ({api_key.get('id')})")
        return api_key

    async def add_sales_channels_to_api_key(self, api_key_id: str, sales_channel_ids: List[str]) -> Dict[str, Any]:
        """Scope a publishable API key to the given sales channels."""
        data = await self._post(f"/api-keys/{api_key_id}/sales-channels", {"add": list(sales_channel_ids)})
        return data.get("api_key", {})
