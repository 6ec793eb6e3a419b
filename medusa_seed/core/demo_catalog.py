"""
Datos de demostración para una instalación nueva de la tienda VinTel.

Contiene los valores literales del seeding y los constructores de payloads
para la Admin API de Medusa. Los ids (canal de venta, perfil de envío,
categorías, etc.) se reciben como argumentos porque los asigna Medusa.
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional

# === TIENDA Y CANAL DE VENTA ===
STORE_NAME = "VinTel Store"
DEFAULT_SALES_CHANNEL_NAME = "Default Sales Channel"
SUPPORTED_CURRENCIES = [
    {"currency_code": "eur", "is_default": True},
    {"currency_code": "usd"},
]

# === REGIÓN E IMPUESTOS ===
COUNTRIES = ["gb", "de", "dk", "se", "fr", "es", "it"]
REGION_NAME = "Europe"
REGION_CURRENCY = "eur"
PAYMENT_PROVIDERS = ["pp_system_default"]
TAX_PROVIDER_ID = "tp_system"

# === BODEGA Y FULFILLMENT ===
STOCK_LOCATION_NAME = "European Warehouse"
STOCK_LOCATION_ADDRESS = {
    "city": "Copenhagen",
    "country_code": "DK",
    "address_1": "",
}
FULFILLMENT_PROVIDER_ID = "manual_manual"
SHIPPING_PROFILE_NAME = "Default Shipping Profile"
SHIPPING_PROFILE_TYPE = "default"
FULFILLMENT_SET_NAME = "European Warehouse delivery"
FULFILLMENT_SET_TYPE = "shipping"
SERVICE_ZONE_NAME = "Europe"

SHIPPING_OPTION_TYPES = [
    ("Standard Shipping", {"label": "Standard", "description": "Ship in 2-3 days.", "code": "standard"}),
    ("Express Shipping", {"label": "Express", "description": "Ship in 24 hours.", "code": "express"}),
]
SHIPPING_OPTION_AMOUNT = 10

# === API KEY ===
PUBLISHABLE_API_KEY_TITLE = "Webshop"

# === CATÁLOGO ===
CATEGORY_NAMES = ["Modules", "Accessories", "Hardware", "Software"]
SIZES = ["S", "M", "L", "XL"]
COLORS = ["Black", "White"]
PRODUCT_WEIGHT = 400
VARIANT_PRICES = [
    {"amount": 10, "currency_code": "eur"},
    {"amount": 15, "currency_code": "usd"},
]
PLACEHOLDER_IMAGE_URL = "https://via.placeholder.com/640?text={text}"

# Las variantes se generan por talla, y por color cuando with_colors es True
DEMO_PRODUCTS = [
    {
        "title": "VinTel OBD Module",
        "handle": "vintel-obd-module",
        "category": "Modules",
        "description": (
            "VinTel OBD-II diagnostic module enabling real-time vehicle diagnostics and data collection."
        ),
        "sku_prefix": "SHIRT",
        "with_colors": True,
    },
    {
        "title": "VinTel Tablet Display",
        "handle": "vintel-tablet-display",
        "category": "Accessories",
        "description": (
            "VinTel tablet display provides real-time analytics and user interface for vehicle diagnostics."
        ),
        "sku_prefix": "SWEATSHIRT",
        "with_colors": False,
    },
    {
        "title": "VinTel Rugged Cable",
        "handle": "vintel-rugged-cable",
        "category": "Hardware",
        "description": "Heavy-duty cable designed for reliable connections in harsh automotive environments.",
        "sku_prefix": "SWEATPANTS",
        "with_colors": False,
    },
    {
        "title": "VinTel Diagnostic Software",
        "handle": "vintel-diagnostic-software",
        "category": "Software",
        "description": "Comprehensive diagnostic software unlocking advanced data insights for your vehicles.",
        "sku_prefix": "SHORTS",
        "with_colors": False,
    },
]

# === INVENTARIO ===
DEFAULT_STOCKED_QUANTITY = 1_000_000


def build_store_update(default_sales_channel_id: str) -> Dict[str, Any]:
    """Payload de actualización de la tienda."""
    return {
        "name": STORE_NAME,
        "supported_currencies": [dict(currency) for currency in SUPPORTED_CURRENCIES],
        "default_sales_channel_id": default_sales_channel_id,
    }


def build_region() -> Dict[str, Any]:
    return {
        "name": REGION_NAME,
        "currency_code": REGION_CURRENCY,
        "countries": list(COUNTRIES),
        "payment_providers": list(PAYMENT_PROVIDERS),
    }


def build_service_zone() -> Dict[str, Any]:
    return {
        "name": SERVICE_ZONE_NAME,
        "geo_zones": [{"country_code": country, "type": "country"} for country in COUNTRIES],
    }


def build_shipping_options(
    service_zone_id: str,
    shipping_profile_id: str,
    region_id: str,
) -> List[Dict[str, Any]]:
    """
    Construye las opciones de envío estándar y exprés.

    Args:
        service_zone_id: Zona de servicio del fulfillment set
        shipping_profile_id: Perfil de envío por defecto
        region_id: Región para el precio regional

    Returns:
        Lista de payloads para ``POST /admin/shipping-options``
    """
    options = []
    for name, option_type in SHIPPING_OPTION_TYPES:
        options.append(
            {
                "name": name,
                "price_type": "flat",
                "provider_id": FULFILLMENT_PROVIDER_ID,
                "service_zone_id": service_zone_id,
                "shipping_profile_id": shipping_profile_id,
                "type": dict(option_type),
                "prices": [
                    {"currency_code": "usd", "amount": SHIPPING_OPTION_AMOUNT},
                    {"currency_code": "eur", "amount": SHIPPING_OPTION_AMOUNT},
                    {"region_id": region_id, "amount": SHIPPING_OPTION_AMOUNT},
                ],
                "rules": [
                    {"attribute": "enabled_in_store", "value": "true", "operator": "eq"},
                    {"attribute": "is_return", "value": "false", "operator": "eq"},
                ],
            }
        )
    return options


def build_categories() -> List[Dict[str, Any]]:
    return [{"name": name, "is_active": True} for name in CATEGORY_NAMES]


def _build_variants(sku_prefix: str, with_colors: bool) -> List[Dict[str, Any]]:
    variants = []
    for size in SIZES:
        if with_colors:
            for color in COLORS:
                variants.append(
                    {
                        "title": f"{size} / {color}",
                        "sku": f"{sku_prefix}-{size}-{color.upper()}",
                        "options": {"Size": size, "Color": color},
                        "prices": [dict(price) for price in VARIANT_PRICES],
                    }
                )
        else:
            variants.append(
                {
                    "title": size,
                    "sku": f"{sku_prefix}-{size}",
                    "options": {"Size": size},
                    "prices": [dict(price) for price in VARIANT_PRICES],
                }
            )
    return variants


def build_products(
    category_ids: Mapping[str, str],
    shipping_profile_id: str,
    sales_channel_id: str,
) -> List[Dict[str, Any]]:
    """
    Construye los cuatro productos de demostración.

    Args:
        category_ids: Mapa nombre de categoría -> id asignado por Medusa
        shipping_profile_id: Perfil de envío de los productos
        sales_channel_id: Canal de venta donde se publican

    Returns:
        Lista de payloads de producto

    Raises:
        KeyError: Si falta la categoría de algún producto
    """
    products = []
    for definition in DEMO_PRODUCTS:
        options = [{"title": "Size", "values": list(SIZES)}]
        if definition["with_colors"]:
            options.append({"title": "Color", "values": list(COLORS)})

        products.append(
            {
                "title": definition["title"],
                "categories": [{"id": category_ids[definition["category"]]}],
                "description": definition["description"],
                "handle": definition["handle"],
                "weight": PRODUCT_WEIGHT,
                "status": "published",
                "shipping_profile_id": shipping_profile_id,
                "images": [{"url": PLACEHOLDER_IMAGE_URL.format(text=definition["title"].replace(" ", "+"))}],
                "options": options,
                "variants": _build_variants(definition["sku_prefix"], definition["with_colors"]),
                "sales_channels": [{"id": sales_channel_id}],
            }
        )
    return products


def expected_skus() -> List[str]:
    """SKUs de todas las variantes de demostración, en orden."""
    return [
        variant["sku"]
        for definition in DEMO_PRODUCTS
        for variant in _build_variants(definition["sku_prefix"], definition["with_colors"])
    ]


def build_inventory_levels(
    inventory_item_ids: Iterable[str],
    location_id: str,
    stocked_quantity: Optional[int] = None,
) -> List[Dict[str, Any]]:
    """Un nivel de inventario por item en la bodega indicada."""
    quantity = DEFAULT_STOCKED_QUANTITY if stocked_quantity is None else stocked_quantity
    return [
        {
            "inventory_item_id": item_id,
            "location_id": location_id,
            "stocked_quantity": quantity,
        }
        for item_id in inventory_item_ids
    ]
