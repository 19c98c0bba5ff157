"""Composition root.

Builds a store, loader and HTTP client wired together from settings.
There is no module-level store: callers own the runtime they create and
pass the store to whatever consumes it.
"""

from dataclasses import dataclass, field

import httpx
import structlog

from cartstore.application.bindings import bind_reset_after_load, bind_totals
from cartstore.application.loader import CartLoader, LoadResult
from cartstore.application.store import CartStore, Unsubscribe
from cartstore.infrastructure.cart_client import CartSourceClient
from cartstore.infrastructure.config import Settings, get_settings
from cartstore.infrastructure.log_config import configure_logging

logger = structlog.get_logger()


@dataclass
class CartRuntime:
    """A wired store with its loader and HTTP client."""

    store: CartStore
    loader: CartLoader
    client: CartSourceClient
    bindings: list[Unsubscribe] = field(default_factory=list)

    async def load(self) -> LoadResult:
        """Run the initial load to completion."""
        return await self.loader.load_initial_cart()

    async def aclose(self) -> None:
        """Cancel any load, remove bindings and close the HTTP client."""
        self.loader.cancel()
        for unsubscribe in self.bindings:
            unsubscribe()
        self.bindings.clear()
        await self.client.close()


def create_runtime(
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    setup_logging: bool = False,
) -> CartRuntime:
    """Build a CartRuntime.

    Args:
        settings: Settings to use. Loaded from the environment if omitted.
        transport: Optional httpx transport for the cart source client.
        setup_logging: Configure structlog from settings before building.

    Returns:
        CartRuntime with bindings installed according to settings.
    """
    settings = settings or get_settings()
    if setup_logging:
        configure_logging(settings)

    store = CartStore()
    client = CartSourceClient(
        url=settings.cart_api_url,
        timeout=settings.request_timeout,
        transport=transport,
    )
    runtime = CartRuntime(store=store, loader=CartLoader(store, client), client=client)

    if settings.auto_totals:
        runtime.bindings.append(bind_totals(store))
    if settings.reset_quantities_after_load:
        runtime.bindings.append(bind_reset_after_load(store))

    logger.info(
        "Cart runtime created",
        cart_api_url=settings.cart_api_url,
        auto_totals=settings.auto_totals,
        reset_quantities_after_load=settings.reset_quantities_after_load,
    )
    return runtime
