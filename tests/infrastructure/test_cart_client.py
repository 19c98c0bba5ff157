"""Tests for the remote cart source client."""

from decimal import Decimal
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from cartstore.domain import CartItem
from cartstore.infrastructure.cart_client import (
    CartItemPayload,
    CartSourceClient,
    CartSourceError,
    parse_cart_items,
)

URL = "http://cart.test/items"


def make_client(handler) -> CartSourceClient:
    """Create a client backed by an httpx mock transport."""
    return CartSourceClient(url=URL, transport=httpx.MockTransport(handler))


class TestCartItemPayload:
    """Tests for the record schema."""

    def test_amount_alias(self) -> None:
        """Older sources send the quantity as 'amount'."""
        payload = CartItemPayload.model_validate(
            {"id": "rec1", "title": "Phone", "price": "599.99", "amount": 2, "img": "p.png"}
        )
        assert payload.quantity == 2
        assert payload.to_cart_item() == CartItem(
            id="rec1", title="Phone", price=Decimal("599.99"), quantity=2, img="p.png"
        )

    def test_quantity_defaults_to_one(self) -> None:
        payload = CartItemPayload.model_validate({"id": 1, "title": "Bag", "price": 30})
        assert payload.quantity == 1
        assert payload.img is None


class TestParseCartItems:
    """Tests for response body normalization."""

    def test_bare_list(self) -> None:
        items = parse_cart_items(URL, [{"id": 9, "title": "Bag", "price": 30, "quantity": 1}])
        assert items == [CartItem(id=9, title="Bag", price=30, quantity=1)]

    @pytest.mark.parametrize("key", ["items", "cartItems"])
    def test_wrapped_list(self, key: str) -> None:
        items = parse_cart_items(URL, {key: [{"id": 9, "title": "Bag", "price": 30}]})
        assert [i.id for i in items] == [9]

    def test_not_a_list(self) -> None:
        with pytest.raises(CartSourceError):
            parse_cart_items(URL, {"data": []})

    def test_invalid_record(self) -> None:
        """Negative prices are rejected with the record index."""
        with pytest.raises(CartSourceError) as exc_info:
            parse_cart_items(URL, [{"id": 1, "title": "Bag", "price": -5}])
        assert "index 0" in exc_info.value.message

    def test_duplicate_ids(self) -> None:
        with pytest.raises(CartSourceError):
            parse_cart_items(
                URL,
                [
                    {"id": 1, "title": "A", "price": 1},
                    {"id": 1, "title": "B", "price": 2},
                ],
            )


class TestCartSourceClient:
    """Tests for CartSourceClient."""

    @pytest.mark.asyncio
    async def test_fetch_success(self) -> None:
        """Items are fetched from the configured URL."""
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(
                200, json=[{"id": 9, "title": "Bag", "price": "30.00", "amount": 1}]
            )

        async with make_client(handler) as client:
            items = await client.fetch_cart_items()

        assert items == [CartItem(id=9, title="Bag", price=Decimal("30.00"), quantity=1)]
        assert str(requests[0].url) == URL
        assert requests[0].headers["Accept"] == "application/json"

    @pytest.mark.asyncio
    async def test_non_200_raises_error(self) -> None:
        client = make_client(lambda request: httpx.Response(503, text="unavailable"))

        with pytest.raises(CartSourceError) as exc_info:
            await client.fetch_cart_items()

        assert exc_info.value.status_code == 503
        assert exc_info.value.details["url"] == URL
        await client.close()

    @pytest.mark.asyncio
    async def test_invalid_json_raises_error(self) -> None:
        client = make_client(lambda request: httpx.Response(200, text="<html>"))

        with pytest.raises(CartSourceError) as exc_info:
            await client.fetch_cart_items()

        assert "not valid JSON" in exc_info.value.message
        await client.close()

    @pytest.mark.asyncio
    async def test_request_error_raises_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Connection refused", request=request)

        client = make_client(handler)
        with pytest.raises(CartSourceError) as exc_info:
            await client.fetch_cart_items()

        assert exc_info.value.status_code is None
        assert "Request failed" in exc_info.value.message
        await client.close()

    @pytest.mark.asyncio
    async def test_timeout_raises_error(self) -> None:
        """Timeouts are reported as CartSourceError."""
        client = CartSourceClient(url=URL)

        with patch.object(client, "_get_client", new_callable=AsyncMock) as mock_get_client:
            mock_http_client = AsyncMock()
            mock_http_client.get = AsyncMock(
                side_effect=httpx.TimeoutException("Connection timeout")
            )
            mock_get_client.return_value = mock_http_client

            with pytest.raises(CartSourceError) as exc_info:
                await client.fetch_cart_items()

        assert "timed out" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_client_reused_and_closed(self) -> None:
        """The httpx client is created once and dropped on close."""
        client = make_client(lambda request: httpx.Response(200, json=[]))

        await client.fetch_cart_items()
        first = client._client
        await client.fetch_cart_items()
        assert client._client is first

        await client.close()
        assert client._client is None
        await client.close()
