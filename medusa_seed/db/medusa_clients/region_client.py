"""
Medusa admin client for regions and tax regions.
"""

import logging
from typing import Any, Dict, List, Optional

from .base_client import BaseMedusaAdminClient

logger = logging.getLogger(__name__)


class MedusaRegionClient(BaseMedusaAdminClient):
    """
    Specialized client for regions and their tax configuration.
    """

    async def create_region(self, region_data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create a region.

        Args:
            region_data: Name, currency, countries and payment providers

        Returns:
            Created region
        """
        data = await self._post("/regions", region_data)
        region = data["region"]
        logger.info(f"✅ Region created: {region.get('name')} ({region.get('id')})")
        return region

    async def list_regions(self, name: Optional[str] = None) -> List[Dict[str, Any]]:
        """List regions, optionally filtered by exact name."""
        return await self._list("/regions", "regions", {"name": name})

    async def create_tax_region(self, country_code: str, provider_id: str) -> Dict[str, Any]:
        """Create the tax region of one country."""
        data = await self._post("/tax-regions", {"country_code": country_code, "provider_id": provider_id})
        return data.get("tax_region", {})
