"""
Seeding de datos de demostración para una tienda Medusa nueva.

Ejecuta en orden estricto los pasos del seeding: canal de venta, tienda,
región, regiones de impuestos, bodega, fulfillment, opciones de envío,
API key publicable, categorías, productos y niveles de inventario. Los ids
que devuelve Medusa en cada paso alimentan a los siguientes.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from medusa_seed.core import demo_catalog as catalog
from medusa_seed.db.medusa_clients import MedusaAdminClient
from medusa_seed.utils.error_handler import ErrorCode, MedusaAPIException, SeedException

logger = logging.getLogger(__name__)


@dataclass
class SeedResult:
    """
    Identificadores creados o reutilizados durante el seeding.
    """

    store_id: Optional[str] = None
    sales_channel_id: Optional[str] = None
    sales_channel_created: bool = False
    region_id: Optional[str] = None
    region_reused: bool = False
    tax_regions_created: List[str] = field(default_factory=list)
    tax_regions_skipped: List[str] = field(default_factory=list)
    stock_location_id: Optional[str] = None
    shipping_profile_id: Optional[str] = None
    shipping_profile_created: bool = False
    fulfillment_set_id: Optional[str] = None
    service_zone_id: Optional[str] = None
    shipping_option_ids: List[str] = field(default_factory=list)
    publishable_api_key_id: Optional[str] = None
    publishable_api_key_token: Optional[str] = None
    category_ids: Dict[str, str] = field(default_factory=dict)
    product_ids: List[str] = field(default_factory=list)
    inventory_levels_created: int = 0

    def summary(self) -> Dict[str, Any]:
        """Resumen plano para logs y reportes."""
        return {
            "store": self.store_id,
            "sales_channel": f"{self.sales_channel_id} ({'creado' if self.sales_channel_created else 'reutilizado'})",
            "region": f"{self.region_id} ({'reutilizada' if self.region_reused else 'creada'})",
            "tax_regions": f"{len(self.tax_regions_created)} creadas, {len(self.tax_regions_skipped)} omitidas",
            "stock_location": self.stock_location_id,
            "shipping_profile": (
                f"{self.shipping_profile_id} ({'creado' if self.shipping_profile_created else 'reutilizado'})"
            ),
            "fulfillment_set": self.fulfillment_set_id,
            "shipping_options": len(self.shipping_option_ids),
            "publishable_api_key": self.publishable_api_key_token or self.publishable_api_key_id,
            "categories": len(self.category_ids),
            "products": len(self.product_ids),
            "inventory_levels": self.inventory_levels_created,
        }


class DemoDataSeeder:
    """Orquestador secuencial del seeding de demostración."""

    def __init__(self, client: MedusaAdminClient, stocked_quantity: int = catalog.DEFAULT_STOCKED_QUANTITY):
        self.client = client
        self.stocked_quantity = stocked_quantity
        self.result = SeedResult()

    async def run(self) -> SeedResult:
        """
        Ejecuta todos los pasos del seeding.

        Returns:
            SeedResult: ids creados o reutilizados

        Raises:
            MedusaAPIException: Si alguna llamada a la API falla (salvo los casos tolerados)
            SeedException: Si falta un recurso que el seeding necesita
        """
        logger.info("Sembrando datos de la tienda...")
        store = await self._get_store()
        sales_channel = await self.ensure_default_sales_channel()
        await self.update_store(store, sales_channel)

        logger.info("Sembrando región...")
        region = await self.ensure_region()
        logger.info("Región lista.")

        logger.info("Sembrando regiones de impuestos...")
        await self.create_tax_regions()
        logger.info("Regiones de impuestos listas.")

        logger.info("Sembrando bodega...")
        stock_location = await self.create_stock_location()

        logger.info("Sembrando fulfillment...")
        shipping_profile = await self.ensure_shipping_profile()
        service_zone = await self.create_fulfillment_set(stock_location)
        await self.create_shipping_options(service_zone, shipping_profile, region)
        logger.info("Fulfillment listo.")

        await self.client.fulfillment.add_sales_channels_to_stock_location(
            stock_location["id"], [sales_channel["id"]]
        )
        logger.info("Bodega lista.")

        logger.info("Sembrando API key publicable...")
        await self.create_publishable_api_key(sales_channel)
        logger.info("API key publicable lista.")

        logger.info("Sembrando productos...")
        categories = await self.client.products.create_product_categories(catalog.build_categories())
        await self.create_products(categories, shipping_profile, sales_channel)
        logger.info("Productos listos.")

        logger.info("Sembrando niveles de inventario...")
        await self.create_inventory_levels(stock_location)
        logger.info("Niveles de inventario listos.")

        return self.result

    async def _get_store(self) -> Dict[str, Any]:
        stores = await self.client.stores.list_stores()
        if not stores:
            raise SeedException(
                "No hay ninguna tienda en el backend de Medusa",
                step="store",
                error_code=ErrorCode.SEED_MISSING_RESOURCE,
            )
        store = stores[0]
        self.result.store_id = store["id"]
        return store

    async def ensure_default_sales_channel(self) -> Dict[str, Any]:
        """Reutiliza el canal de venta por defecto o lo crea si no existe."""
        channels = await self.client.stores.list_sales_channels(name=catalog.DEFAULT_SALES_CHANNEL_NAME)

        if channels:
            sales_channel = channels[0]
            logger.info(f"Canal de venta existente reutilizado: {sales_channel['id']}")
        else:
            sales_channel = await self.client.stores.create_sales_channel(
                {"name": catalog.DEFAULT_SALES_CHANNEL_NAME}
            )
            self.result.sales_channel_created = True

        self.result.sales_channel_id = sales_channel["id"]
        return sales_channel

    async def update_store(self, store: Dict[str, Any], sales_channel: Dict[str, Any]) -> Dict[str, Any]:
        return await self.client.stores.update_store(
            store["id"], catalog.build_store_update(sales_channel["id"])
        )

    async def ensure_region(self) -> Dict[str, Any]:
        """
        Crea la región; si Medusa la rechaza, reutiliza la existente con el mismo nombre.

        Raises:
            MedusaAPIException: El error original si tampoco existe una región con ese nombre
        """
        try:
            region = await self.client.regions.create_region(catalog.build_region())
        except MedusaAPIException as e:
            existing = await self.client.regions.list_regions(name=catalog.REGION_NAME)
            if not existing:
                raise
            region = existing[0]
            self.result.region_reused = True
            logger.info(f"Región '{catalog.REGION_NAME}' ya existe, se reutiliza {region['id']} ({e.message})")

        self.result.region_id = region["id"]
        return region

    async def create_tax_regions(self) -> None:
        """
        Crea una región de impuestos por país.

        Las que ya existen se omiten con un warning; cualquier otro error se propaga.
        """
        for country_code in catalog.COUNTRIES:
            try:
                await self.client.regions.create_tax_region(country_code, catalog.TAX_PROVIDER_ID)
            except MedusaAPIException as e:
                if not e.is_duplicate:
                    raise
                logger.warning(f"Omitiendo región de impuestos '{country_code}': {e.message}")
                self.result.tax_regions_skipped.append(country_code)
                continue
            self.result.tax_regions_created.append(country_code)

    async def create_stock_location(self) -> Dict[str, Any]:
        """Crea la bodega y la enlaza con el proveedor de fulfillment manual."""
        stock_location = await self.client.fulfillment.create_stock_location(
            {"name": catalog.STOCK_LOCATION_NAME, "address": dict(catalog.STOCK_LOCATION_ADDRESS)}
        )
        await self.client.fulfillment.add_fulfillment_providers(
            stock_location["id"], [catalog.FULFILLMENT_PROVIDER_ID]
        )
        self.result.stock_location_id = stock_location["id"]
        return stock_location

    async def ensure_shipping_profile(self) -> Dict[str, Any]:
        """Reutiliza el primer perfil de envío de tipo ``default`` o crea uno."""
        profiles = await self.client.fulfillment.list_shipping_profiles(profile_type=catalog.SHIPPING_PROFILE_TYPE)

        if profiles:
            shipping_profile = profiles[0]
        else:
            shipping_profile = await self.client.fulfillment.create_shipping_profile(
                {"name": catalog.SHIPPING_PROFILE_NAME, "type": catalog.SHIPPING_PROFILE_TYPE}
            )
            self.result.shipping_profile_created = True

        self.result.shipping_profile_id = shipping_profile["id"]
        return shipping_profile

    async def create_fulfillment_set(self, stock_location: Dict[str, Any]) -> Dict[str, Any]:
        """
        Crea el fulfillment set de la bodega con su zona de servicio europea.

        Returns:
            La primera zona de servicio del set
        """
        fulfillment_set = await self.client.fulfillment.create_fulfillment_set(
            stock_location["id"], catalog.FULFILLMENT_SET_NAME, catalog.FULFILLMENT_SET_TYPE
        )
        fulfillment_set = await self.client.fulfillment.create_service_zone(
            fulfillment_set["id"], catalog.build_service_zone()
        )

        service_zones = fulfillment_set.get("service_zones") or []
        if not service_zones:
            raise SeedException(
                f"El fulfillment set {fulfillment_set['id']} no tiene zonas de servicio",
                step="fulfillment_set",
                error_code=ErrorCode.SEED_MISSING_RESOURCE,
            )

        self.result.fulfillment_set_id = fulfillment_set["id"]
        self.result.service_zone_id = service_zones[0]["id"]
        return service_zones[0]

    async def create_shipping_options(
        self,
        service_zone: Dict[str, Any],
        shipping_profile: Dict[str, Any],
        region: Dict[str, Any],
    ) -> List[Dict[str, Any]]:
        options = []
        for option_data in catalog.build_shipping_options(service_zone["id"], shipping_profile["id"], region["id"]):
            option = await self.client.fulfillment.create_shipping_option(option_data)
            options.append(option)
            self.result.shipping_option_ids.append(option["id"])
        return options

    async def create_publishable_api_key(self, sales_channel: Dict[str, Any]) -> Dict[str, Any]:
        api_key = await self.client.stores.create_api_key(catalog.PUBLISHABLE_API_KEY_TITLE, "publishable")
        await self.client.stores.add_sales_channels_to_api_key(api_key["id"], [sales_channel["id"]])

        self.result.publishable_api_key_id = api_key["id"]
        self.result.publishable_api_key_token = api_key.get("token")
        return api_key

    async def create_products(
        self,
        categories: List[Dict[str, Any]],
        shipping_profile: Dict[str, Any],
        sales_channel: Dict[str, Any],
    ) -> List[Dict[str, Any]]:
        """
        Crea los productos de demostración enlazados a su categoría.

        Raises:
            SeedException: Si alguna categoría esperada no fue creada
        """
        category_ids = {category["name"]: category["id"] for category in categories}
        missing = [name for name in catalog.CATEGORY_NAMES if name not in category_ids]
        if missing:
            raise SeedException(
                f"Categorías de producto no encontradas: {', '.join(missing)}",
                step="products",
                error_code=ErrorCode.SEED_MISSING_RESOURCE,
            )
        self.result.category_ids = category_ids

        products = await self.client.products.create_products(
            catalog.build_products(category_ids, shipping_profile["id"], sales_channel["id"])
        )
        self.result.product_ids = [product["id"] for product in products]
        return products

    async def create_inventory_levels(self, stock_location: Dict[str, Any]) -> int:
        """Crea un nivel de inventario por cada inventory item en la bodega."""
        items = await self.client.inventory.list_inventory_items()
        levels = catalog.build_inventory_levels(
            (item["id"] for item in items), stock_location["id"], self.stocked_quantity
        )
        if not levels:
            logger.warning("No hay inventory items, no se crean niveles de inventario")
            return 0

        created = await self.client.inventory.create_inventory_levels(levels)
        self.result.inventory_levels_created = created
        return created


async def seed_demo_data(
    container: MedusaAdminClient,
    on_complete: Optional[Callable[[SeedResult], None]] = None,
) -> None:
    """
    Punto de entrada del seeding.

    Args:
        container: Cliente admin inicializado que expone los clientes especializados
        on_complete: Recibe el SeedResult cuando el seeding termina bien

    Raises:
        Cualquier error no tolerado del seeding; el llamador decide el código de salida
    """
    result = await DemoDataSeeder(container).run()
    logger.info(f"Seeding completado: {result.summary()}")
    if on_complete is not None:
        on_complete(result)
