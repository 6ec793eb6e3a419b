"""
Medusa admin client for stock locations and fulfillment.

This module handles stock locations and their links (fulfillment providers,
sales channels), shipping profiles, fulfillment sets with service zones and
shipping options.
"""

import logging
from typing import Any, Dict, List, Optional

from medusa_seed.utils.error_handler import MedusaAPIException

from .base_client import BaseMedusaAdminClient

logger = logging.getLogger(__name__)


class MedusaFulfillmentClient(BaseMedusaAdminClient):
    """
    Specialized client for stock locations, shipping profiles and shipping options.
    """

    # =============================================================================
    # STOCK LOCATIONS
    # =============================================================================

    async def create_stock_location(self, location_data: Dict[str, Any]) -> Dict[str, Any]:
        data = await self._post("/stock-locations", location_data)
        location = data["stock_location"]
        logger.info(f"✅ Stock location created: {location.get('name')} ({location.get('id')})")
        return location

    async def add_fulfillment_providers(self, location_id: str, provider_ids: List[str]) -> Dict[str, Any]:
        """Link fulfillment providers to a stock location."""
        data = await self._post(
            f"/stock-locations/{location_id}/fulfillment-providers",
            {"add": list(provider_ids)},
        )
        return data.get("stock_location", {})

    async def add_sales_channels_to_stock_location(
        self, location_id: str, sales_channel_ids: List[str]
    ) -> Dict[str, Any]:
        """Link sales channels to a stock location."""
        data = await self._post(
            f"/stock-locations/{location_id}/sales-channels",
            {"add": list(sales_channel_ids)},
        )
        return data.get("stock_location", {})

    # =============================================================================
    # SHIPPING PROFILES
    # =============================================================================

    async def list_shipping_profiles(self, profile_type: Optional[str] = None) -> List[Dict[str, Any]]:
        return await self._list("/shipping-profiles", "shipping_profiles", {"type": profile_type})

    async def create_shipping_profile(self, profile_data: Dict[str, Any]) -> Dict[str, Any]:
        data = await self._post("/shipping-profiles", profile_data)
        profile = data["shipping_profile"]
        logger.info(f"✅ Shipping profile created: {profile.get('name')} ({profile.get('id')})")
        return profile

    # =============================================================================
    # FULFILLMENT SETS
    # =============================================================================

    async def create_fulfillment_set(self, location_id: str, name: str, set_type: str) -> Dict[str, Any]:
        """
        Create a fulfillment set linked to a stock location.

        Medusa creates the set and the location link in the same call and
        answers with the stock location, so the new set is picked from it.

        Args:
            location_id: Stock location that owns the set
            name: Fulfillment set name
            set_type: Fulfillment set type (e.g. ``shipping``)

        Returns:
            Created fulfillment set

        Raises:
            MedusaAPIException: If the set is missing from the response
        """
        data = await self._post(
            f"/stock-locations/{location_id}/fulfillment-sets",
            {"name": name, "type": set_type},
            params={"fields": "*fulfillment_sets"},
        )
        sets = [
            fulfillment_set
            for fulfillment_set in data.get("stock_location", {}).get("fulfillment_sets", [])
            if fulfillment_set.get("name") == name
        ]
        if not sets:
            raise MedusaAPIException(
                f"Fulfillment set '{name}' missing from stock location {location_id} response",
                endpoint=f"/stock-locations/{location_id}/fulfillment-sets",
            )
        fulfillment_set = sets[-1]
        logger.info(f"✅ Fulfillment set created: {name} ({fulfillment_set.get('id')})")
        return fulfillment_set

    async def create_service_zone(self, fulfillment_set_id: str, zone_data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Add a service zone to a fulfillment set.

        Returns:
            The fulfillment set including its service zones
        """
        data = await self._post(
            f"/fulfillment-sets/{fulfillment_set_id}/service-zones",
            zone_data,
            params={"fields": "*service_zones"},
        )
        return data["fulfillment_set"]

    # =============================================================================
    # SHIPPING OPTIONS
    # =============================================================================

    async def create_shipping_option(self, option_data: Dict[str, Any]) -> Dict[str, Any]:
        data = await self._post("/shipping-options", option_data)
        option = data["shipping_option"]
        logger.info(f"✅ Shipping option created: {option.get('name')} ({option.get('id')})")
        return option
