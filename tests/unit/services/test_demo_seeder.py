"""Tests unitarios para el seeding de datos de demostración."""

import logging
from unittest.mock import AsyncMock, MagicMock

import pytest

from medusa_seed.core import demo_catalog as catalog
from medusa_seed.services.demo_seeder import DemoDataSeeder, SeedResult, seed_demo_data
from medusa_seed.utils.error_handler import MedusaAPIException, SeedException


def _categories(names):
    return [{"id": f"pcat_{name.lower()}", "name": name} for name in names]


@pytest.fixture
def client():
    """Cliente admin simulado con una tienda vacía."""
    mock_client = MagicMock()

    mock_client.stores.list_stores = AsyncMock(return_value=[{"id": "store_1", "name": "Medusa Store"}])
    mock_client.stores.list_sales_channels = AsyncMock(return_value=[])
    mock_client.stores.create_sales_channel = AsyncMock(
        return_value={"id": "sc_default", "name": catalog.DEFAULT_SALES_CHANNEL_NAME}
    )
    mock_client.stores.update_store = AsyncMock(return_value={"id": "store_1", "name": catalog.STORE_NAME})
    mock_client.stores.create_api_key = AsyncMock(return_value={"id": "apk_1", "token": "pk_123"})
    mock_client.stores.add_sales_channels_to_api_key = AsyncMock(return_value={"id": "apk_1"})

    mock_client.regions.create_region = AsyncMock(return_value={"id": "reg_eu", "name": "Europe"})
    mock_client.regions.list_regions = AsyncMock(return_value=[])
    mock_client.regions.create_tax_region = AsyncMock(return_value={"id": "txreg_1"})

    mock_client.fulfillment.create_stock_location = AsyncMock(
        return_value={"id": "sloc_1", "name": catalog.STOCK_LOCATION_NAME}
    )
    mock_client.fulfillment.add_fulfillment_providers = AsyncMock(return_value={"id": "sloc_1"})
    mock_client.fulfillment.add_sales_channels_to_stock_location = AsyncMock(return_value={"id": "sloc_1"})
    mock_client.fulfillment.list_shipping_profiles = AsyncMock(return_value=[])
    mock_client.fulfillment.create_shipping_profile = AsyncMock(return_value={"id": "sp_default"})
    mock_client.fulfillment.create_fulfillment_set = AsyncMock(
        return_value={"id": "fuset_1", "name": catalog.FULFILLMENT_SET_NAME}
    )
    mock_client.fulfillment.create_service_zone = AsyncMock(
        return_value={"id": "fuset_1", "service_zones": [{"id": "serzo_eu", "name": "Europe"}]}
    )
    mock_client.fulfillment.create_shipping_option = AsyncMock(
        side_effect=lambda data: {"id": f"so_{data['type']['code']}", "name": data["name"]}
    )

    mock_client.products.create_product_categories = AsyncMock(return_value=_categories(catalog.CATEGORY_NAMES))
    mock_client.products.create_products = AsyncMock(
        side_effect=lambda products: [{"id": f"prod_{i}", **p} for i, p in enumerate(products)]
    )

    mock_client.inventory.list_inventory_items = AsyncMock(
        return_value=[{"id": "iitem_1"}, {"id": "iitem_2"}, {"id": "iitem_3"}]
    )
    mock_client.inventory.create_inventory_levels = AsyncMock(side_effect=lambda levels: len(levels))

    return mock_client


class TestFullRun:
    """Tests del flujo completo sobre una tienda nueva."""

    @pytest.mark.asyncio
    async def test_run_threads_ids_between_steps(self, client):
        """Debe pasar los ids de cada paso a los siguientes."""
        result = await DemoDataSeeder(client).run()

        client.stores.update_store.assert_awaited_once_with(
            "store_1",
            {
                "name": "VinTel Store",
                "supported_currencies": [
                    {"currency_code": "eur", "is_default": True},
                    {"currency_code": "usd"},
                ],
                "default_sales_channel_id": "sc_default",
            },
        )
        client.fulfillment.add_fulfillment_providers.assert_awaited_once_with("sloc_1", ["manual_manual"])
        client.fulfillment.create_fulfillment_set.assert_awaited_once_with(
            "sloc_1", "European Warehouse delivery", "shipping"
        )
        client.fulfillment.add_sales_channels_to_stock_location.assert_awaited_once_with("sloc_1", ["sc_default"])
        client.stores.create_api_key.assert_awaited_once_with("Webshop", "publishable")
        client.stores.add_sales_channels_to_api_key.assert_awaited_once_with("apk_1", ["sc_default"])

        assert result.store_id == "store_1"
        assert result.sales_channel_created is True
        assert result.region_id == "reg_eu"
        assert result.region_reused is False
        assert result.service_zone_id == "serzo_eu"
        assert result.shipping_option_ids == ["so_standard", "so_express"]
        assert result.publishable_api_key_token == "pk_123"
        assert len(result.product_ids) == 4

    @pytest.mark.asyncio
    async def test_service_zone_covers_all_countries(self, client):
        """La zona de servicio debe incluir los siete países como geo zones."""
        await DemoDataSeeder(client).run()

        _, zone = client.fulfillment.create_service_zone.await_args.args
        assert zone["name"] == "Europe"
        assert [geo["country_code"] for geo in zone["geo_zones"]] == ["gb", "de", "dk", "se", "fr", "es", "it"]
        assert {geo["type"] for geo in zone["geo_zones"]} == {"country"}

    @pytest.mark.asyncio
    async def test_shipping_options_use_zone_profile_and_region(self, client):
        """Las opciones de envío deben referenciar zona, perfil y región."""
        await DemoDataSeeder(client).run()

        options = [call.args[0] for call in client.fulfillment.create_shipping_option.await_args_list]
        assert [option["name"] for option in options] == ["Standard Shipping", "Express Shipping"]
        for option in options:
            assert option["service_zone_id"] == "serzo_eu"
            assert option["shipping_profile_id"] == "sp_default"
            assert option["provider_id"] == "manual_manual"
            assert {"region_id": "reg_eu", "amount": 10} in option["prices"]

    @pytest.mark.asyncio
    async def test_products_reference_categories_and_skus(self, client):
        """Cada producto debe tener una categoría distinta y los SKUs literales."""
        await DemoDataSeeder(client).run()

        (products,) = client.products.create_products.await_args.args
        category_refs = [product["categories"] for product in products]
        assert category_refs == [
            [{"id": "pcat_modules"}],
            [{"id": "pcat_accessories"}],
            [{"id": "pcat_hardware"}],
            [{"id": "pcat_software"}],
        ]

        skus = [variant["sku"] for product in products for variant in product["variants"]]
        assert skus == catalog.expected_skus()
        for product in products:
            assert product["shipping_profile_id"] == "sp_default"
            assert product["sales_channels"] == [{"id": "sc_default"}]
            assert product["status"] == "published"

    @pytest.mark.asyncio
    async def test_inventory_level_per_item(self, client):
        """Debe crear un nivel de inventario por item con 1,000,000 unidades."""
        result = await DemoDataSeeder(client).run()

        (levels,) = client.inventory.create_inventory_levels.await_args.args
        assert levels == [
            {"inventory_item_id": "iitem_1", "location_id": "sloc_1", "stocked_quantity": 1_000_000},
            {"inventory_item_id": "iitem_2", "location_id": "sloc_1", "stocked_quantity": 1_000_000},
            {"inventory_item_id": "iitem_3", "location_id": "sloc_1", "stocked_quantity": 1_000_000},
        ]
        assert result.inventory_levels_created == 3

    @pytest.mark.asyncio
    async def test_no_inventory_items_skips_levels(self, client):
        """Sin inventory items no debe llamar a la creación de niveles."""
        client.inventory.list_inventory_items = AsyncMock(return_value=[])

        result = await DemoDataSeeder(client).run()

        client.inventory.create_inventory_levels.assert_not_awaited()
        assert result.inventory_levels_created == 0

    @pytest.mark.asyncio
    async def test_seed_demo_data_returns_none(self, client):
        """El punto de entrada no devuelve nada cuando termina bien."""
        assert await seed_demo_data(client) is None

    @pytest.mark.asyncio
    async def test_seed_demo_data_reports_result(self, client):
        """El callback recibe el resultado con los ids creados."""
        received = []

        await seed_demo_data(client, on_complete=received.append)

        (result,) = received
        assert isinstance(result, SeedResult)
        assert result.stock_location_id == "sloc_1"


class TestIdempotentLookups:
    """Tests para los pasos que reutilizan recursos existentes."""

    @pytest.mark.asyncio
    async def test_existing_sales_channel_is_reused(self, client):
        """Debe reutilizar el primer canal con el nombre por defecto."""
        client.stores.list_sales_channels = AsyncMock(
            return_value=[{"id": "sc_existing"}, {"id": "sc_other"}]
        )

        result = await DemoDataSeeder(client).run()

        client.stores.list_sales_channels.assert_awaited_once_with(name="Default Sales Channel")
        client.stores.create_sales_channel.assert_not_awaited()
        assert result.sales_channel_id == "sc_existing"
        assert result.sales_channel_created is False

    @pytest.mark.asyncio
    async def test_existing_shipping_profile_is_reused(self, client):
        """No debe crear un perfil de envío si ya hay uno de tipo default."""
        client.fulfillment.list_shipping_profiles = AsyncMock(return_value=[{"id": "sp_existing"}])

        result = await DemoDataSeeder(client).run()

        client.fulfillment.list_shipping_profiles.assert_awaited_once_with(profile_type="default")
        client.fulfillment.create_shipping_profile.assert_not_awaited()
        assert result.shipping_profile_id == "sp_existing"

    @pytest.mark.asyncio
    async def test_region_failure_reuses_existing_region(self, client):
        """Si la creación falla, debe reutilizar la región existente por nombre."""
        client.regions.create_region = AsyncMock(
            side_effect=MedusaAPIException("Country with code gb is already assigned", api_response_code=400)
        )
        client.regions.list_regions = AsyncMock(return_value=[{"id": "reg_existing", "name": "Europe"}])

        result = await DemoDataSeeder(client).run()

        client.regions.list_regions.assert_awaited_once_with(name="Europe")
        assert result.region_id == "reg_existing"
        assert result.region_reused is True
        option = client.fulfillment.create_shipping_option.await_args_list[0].args[0]
        assert {"region_id": "reg_existing", "amount": 10} in option["prices"]

    @pytest.mark.asyncio
    async def test_region_failure_without_existing_region_raises_original(self, client):
        """Debe relanzar el error original si no hay región para reutilizar."""
        original = MedusaAPIException("Payment provider not found", api_response_code=400)
        client.regions.create_region = AsyncMock(side_effect=original)

        with pytest.raises(MedusaAPIException) as exc_info:
            await DemoDataSeeder(client).run()

        assert exc_info.value is original
        client.regions.create_tax_region.assert_not_awaited()


class TestTaxRegions:
    """Tests para la creación tolerante de regiones de impuestos."""

    @pytest.mark.asyncio
    async def test_creates_one_tax_region_per_country(self, client):
        """Debe crear una región de impuestos por país con el proveedor del sistema."""
        result = await DemoDataSeeder(client).run()

        calls = [call.args for call in client.regions.create_tax_region.await_args_list]
        assert calls == [(country, "tp_system") for country in catalog.COUNTRIES]
        assert result.tax_regions_created == catalog.COUNTRIES

    @pytest.mark.asyncio
    async def test_duplicate_tax_region_is_logged_and_skipped(self, client, caplog):
        """Una región de impuestos existente solo genera un warning."""
        duplicate = MedusaAPIException(
            "Tax region with country_code: gb, already exists.",
            api_response_code=422,
            api_error_type="duplicate_error",
        )
        client.regions.create_tax_region = AsyncMock(side_effect=[duplicate] + [{"id": "txreg"}] * 6)

        with caplog.at_level(logging.WARNING, logger="medusa_seed.services.demo_seeder"):
            result = await DemoDataSeeder(client).run()

        assert result.tax_regions_skipped == ["gb"]
        assert result.tax_regions_created == ["de", "dk", "se", "fr", "es", "it"]
        assert "Omitiendo región de impuestos 'gb'" in caplog.text
        client.products.create_products.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_other_tax_region_errors_propagate(self, client):
        """Errores distintos a duplicado deben abortar el seeding."""
        client.regions.create_tax_region = AsyncMock(
            side_effect=MedusaAPIException(
                "Invalid tax provider: tp_system", api_response_code=400, api_error_type="invalid_data"
            )
        )

        with pytest.raises(MedusaAPIException, match="Invalid tax provider"):
            await DemoDataSeeder(client).run()

        client.fulfillment.create_stock_location.assert_not_awaited()


class TestMissingResources:
    """Tests para recursos requeridos que no existen."""

    @pytest.mark.asyncio
    async def test_missing_store_raises(self, client):
        """Sin tienda no se puede continuar."""
        client.stores.list_stores = AsyncMock(return_value=[])

        with pytest.raises(SeedException) as exc_info:
            await DemoDataSeeder(client).run()

        assert exc_info.value.step == "store"
        client.stores.update_store.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_category_fails_hard(self, client):
        """Si falta una categoría esperada no debe crear productos."""
        client.products.create_product_categories = AsyncMock(
            return_value=_categories(["Modules", "Accessories", "Hardware"])
        )

        with pytest.raises(SeedException, match="Software"):
            await DemoDataSeeder(client).run()

        client.products.create_products.assert_not_awaited()
        client.inventory.create_inventory_levels.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_api_failure_propagates(self, client):
        """Cualquier fallo de la API en los pasos normales aborta el seeding."""
        client.fulfillment.create_stock_location = AsyncMock(
            side_effect=MedusaAPIException("Internal error", api_response_code=500)
        )

        with pytest.raises(MedusaAPIException):
            await seed_demo_data(client)

        client.stores.create_api_key.assert_not_awaited()
