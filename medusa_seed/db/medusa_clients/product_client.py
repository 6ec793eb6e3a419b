"""
Medusa admin client for catalog operations.

This module handles product categories and product creation.
"""

import logging
from typing import Any, Dict, List

from .base_client import BaseMedusaAdminClient

logger = logging.getLogger(__name__)


class MedusaProductClient(BaseMedusaAdminClient):
    """
    Specialized client for product categories and products.
    """

    async def create_product_category(self, category_data: Dict[str, Any]) -> Dict[str, Any]:
        data = await self._post("/product-categories", category_data)
        category = data["product_category"]
        logger.debug(f"Product category created: {category.get('name')} ({category.get('id')})")
        return category

    async def create_product_categories(self, categories_data: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """
        Create several product categories in order.

        Args:
            categories_data: Category payloads

        Returns:
            Created categories, same order as the input
        """
        categories = []
        for category_data in categories_data:
            categories.append(await self.create_product_category(category_data))
        logger.info(f"✅ {len(categories)} product categories created")
        return categories

    async def create_products(self, products_data: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """
        Create products with their options, variants and prices in one batch.

        Args:
            products_data: Product payloads

        Returns:
            Created products
        """
        data = await self._post("/products/batch", {"create": products_data})
        created = data.get("created", [])
        variant_count = sum(len(product.get("variants") or []) for product in created)
        logger.info(f"✅ {len(created)} products created ({variant_count} variants)")
        return created
