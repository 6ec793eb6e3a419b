"""Tests unitarios para los clientes especializados de Medusa."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from medusa_seed.core.config import Settings
from medusa_seed.db.medusa_clients import (
    MedusaAdminClient,
    MedusaFulfillmentClient,
    MedusaInventoryClient,
    MedusaProductClient,
    MedusaRegionClient,
    MedusaStoreClient,
)
from medusa_seed.utils.error_handler import MedusaAPIException


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        MEDUSA_BACKEND_URL="http://medusa.test",
        MEDUSA_ADMIN_API_TOKEN="sk_test",
        MEDUSA_MIN_REQUEST_INTERVAL=0,
        INVENTORY_LEVEL_BATCH_SIZE=2,
    )


class TestStoreClient:
    """Tests para tiendas, canales de venta y API keys."""

    @pytest.mark.asyncio
    async def test_list_sales_channels_filters_by_name(self, settings):
        client = MedusaStoreClient(settings)
        with patch.object(client, "_list", new=AsyncMock(return_value=[{"id": "sc_1"}])) as list_mock:
            channels = await client.list_sales_channels(name="Default Sales Channel")

        assert channels == [{"id": "sc_1"}]
        list_mock.assert_awaited_once_with("/sales-channels", "sales_channels", {"name": "Default Sales Channel"})

    @pytest.mark.asyncio
    async def test_api_key_and_sales_channel_link(self, settings):
        """Debe crear la key publicable y enlazar los canales con ``add``."""
        client = MedusaStoreClient(settings)
        post = AsyncMock(side_effect=[{"api_key": {"id": "apk_1", "token": "pk_1"}}, {"api_key": {"id": "apk_1"}}])
        with patch.object(client, "_post", new=post):
            api_key = await client.create_api_key("Webshop")
            await client.add_sales_channels_to_api_key("apk_1", ["sc_1"])

        assert api_key["token"] == "pk_1"
        assert post.await_args_list[0].args == ("/api-keys", {"title": "Webshop", "type": "publishable"})
        assert post.await_args_list[1].args == ("/api-keys/apk_1/sales-channels", {"add": ["sc_1"]})


class TestRegionClient:
    """Tests para regiones e impuestos."""

    @pytest.mark.asyncio
    async def test_create_tax_region_payload(self, settings):
        client = MedusaRegionClient(settings)
        post = AsyncMock(return_value={"tax_region": {"id": "txreg_1", "country_code": "dk"}})
        with patch.object(client, "_post", new=post):
            tax_region = await client.create_tax_region("dk", "tp_system")

        assert tax_region["id"] == "txreg_1"
        post.assert_awaited_once_with("/tax-regions", {"country_code": "dk", "provider_id": "tp_system"})


class TestFulfillmentClient:
    """Tests para bodegas y fulfillment sets."""

    @pytest.mark.asyncio
    async def test_create_fulfillment_set_picks_set_from_location(self, settings):
        """Debe devolver el set con el nombre pedido desde la respuesta de la bodega."""
        client = MedusaFulfillmentClient(settings)
        response = {
            "stock_location": {
                "id": "sloc_1",
                "fulfillment_sets": [
                    {"id": "fuset_pickup", "name": "Pickup"},
                    {"id": "fuset_1", "name": "European Warehouse delivery"},
                ],
            }
        }
        post = AsyncMock(return_value=response)
        with patch.object(client, "_post", new=post):
            fulfillment_set = await client.create_fulfillment_set("sloc_1", "European Warehouse delivery", "shipping")

        assert fulfillment_set["id"] == "fuset_1"
        post.assert_awaited_once_with(
            "/stock-locations/sloc_1/fulfillment-sets",
            {"name": "European Warehouse delivery", "type": "shipping"},
            params={"fields": "*fulfillment_sets"},
        )

    @pytest.mark.asyncio
    async def test_create_fulfillment_set_missing_in_response(self, settings):
        client = MedusaFulfillmentClient(settings)
        with patch.object(client, "_post", new=AsyncMock(return_value={"stock_location": {"id": "sloc_1"}})):
            with pytest.raises(MedusaAPIException, match="missing"):
                await client.create_fulfillment_set("sloc_1", "European Warehouse delivery", "shipping")

    @pytest.mark.asyncio
    async def test_stock_location_links_use_add(self, settings):
        client = MedusaFulfillmentClient(settings)
        post = AsyncMock(return_value={"stock_location": {"id": "sloc_1"}})
        with patch.object(client, "_post", new=post):
            await client.add_fulfillment_providers("sloc_1", ["manual_manual"])
            await client.add_sales_channels_to_stock_location("sloc_1", ["sc_1"])

        assert post.await_args_list[0].args == ("/stock-locations/sloc_1/fulfillment-providers", {"add": ["manual_manual"]})
        assert post.await_args_list[1].args == ("/stock-locations/sloc_1/sales-channels", {"add": ["sc_1"]})


class TestProductClient:
    """Tests para categorías y productos."""

    @pytest.mark.asyncio
    async def test_categories_created_in_order(self, settings):
        client = MedusaProductClient(settings)
        post = AsyncMock(
            side_effect=lambda path, data: {"product_category": {"id": f"pcat_{data['name']}", **data}}
        )
        with patch.object(client, "_post", new=post):
            categories = await client.create_product_categories(
                [{"name": "Modules", "is_active": True}, {"name": "Software", "is_active": True}]
            )

        assert [category["id"] for category in categories] == ["pcat_Modules", "pcat_Software"]

    @pytest.mark.asyncio
    async def test_products_created_in_batch(self, settings):
        client = MedusaProductClient(settings)
        post = AsyncMock(return_value={"created": [{"id": "prod_1", "variants": [{"id": "v1"}]}]})
        with patch.object(client, "_post", new=post):
            created = await client.create_products([{"title": "VinTel OBD Module"}])

        assert created == [{"id": "prod_1", "variants": [{"id": "v1"}]}]
        post.assert_awaited_once_with("/products/batch", {"create": [{"title": "VinTel OBD Module"}]})


class TestInventoryClient:
    """Tests para inventory items y niveles."""

    @pytest.mark.asyncio
    async def test_list_inventory_items_reads_all_pages(self, settings):
        client = MedusaInventoryClient(settings)
        with patch.object(client, "_list", new=AsyncMock(return_value=[{"id": "i1"}])) as list_mock:
            items = await client.list_inventory_items()

        assert items == [{"id": "i1"}]
        list_mock.assert_awaited_once_with("/inventory-items", "inventory_items", {"fields": "id"}, all_pages=True)

    @pytest.mark.asyncio
    async def test_inventory_levels_sent_in_batches(self, settings):
        """Debe partir los niveles según INVENTORY_LEVEL_BATCH_SIZE."""
        client = MedusaInventoryClient(settings)
        levels = [{"inventory_item_id": f"i{n}", "location_id": "sloc_1", "stocked_quantity": 1} for n in range(5)]
        post = AsyncMock(return_value={})
        with patch.object(client, "_post", new=post):
            created = await client.create_inventory_levels(levels)

        assert created == 5
        batch_sizes = [len(call.args[1]["create"]) for call in post.await_args_list]
        assert batch_sizes == [2, 2, 1]
        assert {call.args[0] for call in post.await_args_list} == {"/inventory-items/location-levels/batch"}


class TestUnifiedClient:
    """Tests para el cliente unificado."""

    @pytest.mark.asyncio
    async def test_shares_session_and_credentials(self, settings):
        """Los clientes especializados deben usar la sesión del unificado."""
        client = MedusaAdminClient(settings)
        session = MagicMock()
        session.close = AsyncMock()

        with patch("medusa_seed.db.medusa_clients.base_client.aiohttp.ClientSession", return_value=session):
            await client.initialize()

        for specialized in client.specialized_clients:
            assert specialized.session is session
            assert specialized._auth_header == client._auth_header
            assert specialized._throttle is client._throttle

        await client.close()

        session.close.assert_awaited_once()
        assert all(specialized.session is None for specialized in client.specialized_clients)

    @pytest.mark.asyncio
    async def test_request_interval_shared_across_clients(self, settings):
        """Una request de un cliente especializado cuenta para el intervalo de los demás."""
        client = MedusaAdminClient(settings)
        session = MagicMock()
        session.close = AsyncMock()

        with patch("medusa_seed.db.medusa_clients.base_client.aiohttp.ClientSession", return_value=session):
            await client.initialize()

        client.regions._throttle.mark()

        assert client.inventory._throttle.last_request_time == client.regions._throttle.last_request_time > 0

        await client.close()
