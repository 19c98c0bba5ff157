"""HTTP client for the remote cart source.

Fetches the initial cart items and normalizes them into CartItem values.
"""

from decimal import Decimal
from typing import Any

import httpx
import structlog
from pydantic import AliasChoices, BaseModel, Field, ValidationError

from cartstore.domain.exceptions import DomainError
from cartstore.domain.models import CartItem

logger = structlog.get_logger()


# ============================================================================
# Response Schemas
# ============================================================================


class CartItemPayload(BaseModel):
    """One cart item record as returned by the remote source."""

    id: int | str = Field(..., description="Item identifier")
    title: str = Field(..., description="Display label")
    price: Decimal = Field(..., ge=0, description="Unit price, number or numeric string")
    quantity: int = Field(
        default=1,
        ge=0,
        validation_alias=AliasChoices("quantity", "amount"),
        description="Units in the cart; older sources call this 'amount'",
    )
    img: str | None = Field(default=None, description="Image URL")

    model_config = {"extra": "ignore"}

    def to_cart_item(self) -> CartItem:
        """Convert to a domain CartItem."""
        return CartItem(
            id=self.id,
            title=self.title,
            price=self.price,
            quantity=self.quantity,
            img=self.img,
        )


# ============================================================================
# Client Errors
# ============================================================================


class CartSourceError(DomainError):
    """Error fetching or parsing cart items from the remote source."""

    def __init__(
        self, url: str, message: str, status_code: int | None = None
    ) -> None:
        super().__init__(
            f"[{url}] {message}",
            details={"url": url, "status_code": status_code},
        )
        self.url = url
        self.status_code = status_code


# ============================================================================
# Cart Source Client
# ============================================================================


def parse_cart_items(url: str, data: Any) -> list[CartItem]:
    """Normalize a decoded response body into cart items.

    Accepts a bare list of records or an object wrapping them under
    ``items`` or ``cartItems``.

    Args:
        url: Source URL, for error messages.
        data: Decoded JSON body.

    Returns:
        Cart items in response order.

    Raises:
        CartSourceError: If the body does not have the expected shape,
            a record is invalid, or two records share an id.
    """
    if isinstance(data, dict):
        data = data.get("items", data.get("cartItems"))
    if not isinstance(data, list):
        raise CartSourceError(url, "Expected a list of cart items")

    items: list[CartItem] = []
    seen: set[int | str] = set()
    for index, record in enumerate(data):
        try:
            item = CartItemPayload.model_validate(record).to_cart_item()
        except (ValidationError, DomainError) as e:
            raise CartSourceError(url, f"Invalid cart item at index {index}: {e}") from e
        if item.id in seen:
            raise CartSourceError(url, f"Duplicate cart item id {item.id!r}")
        seen.add(item.id)
        items.append(item)
    return items


class CartSourceClient:
    """HTTP client for the remote cart items endpoint.

    The underlying ``httpx.AsyncClient`` is created lazily and reused
    until ``close()`` is called.
    """

    def __init__(
        self,
        url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize cart source client.

        Args:
            url: URL returning the cart items.
            timeout: Request timeout in seconds.
            transport: Optional httpx transport (used by tests).
        """
        self.url = url
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "CartSourceClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                headers={"Accept": "application/json"},
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def fetch_cart_items(self) -> list[CartItem]:
        """Fetch the initial cart items.

        Returns:
            Cart items in response order.

        Raises:
            CartSourceError: On timeout, transport error, non-200 status,
                undecodable body or invalid records.
        """
        try:
            client = await self._get_client()
            logger.debug("Fetching cart items", url=self.url)
            response = await client.get(self.url)
        except httpx.TimeoutException as e:
            logger.error("Cart source request timed out", url=self.url, error=str(e))
            raise CartSourceError(self.url, f"Request timed out: {e}") from e
        except httpx.RequestError as e:
            logger.error("Cart source request failed", url=self.url, error=str(e))
            raise CartSourceError(self.url, f"Request failed: {e}") from e

        if response.status_code != 200:
            raise CartSourceError(
                self.url,
                f"Failed to fetch cart items: {response.text}",
                response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise CartSourceError(
                self.url, "Response is not valid JSON", response.status_code
            ) from e

        items = parse_cart_items(self.url, data)
        logger.info("Fetched cart items", url=self.url, item_count=len(items))
        return items
