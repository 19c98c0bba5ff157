"""Initial cart loading.

Drives the loading lifecycle through the store:

    setLoading(True) ──► fetch ──► itemsLoaded(items)      (success)
                              └──► setLoading(False)       (failure)

Failures are reported through the returned LoadResult and
``last_error``; they never reach the store as exceptions.
"""

import asyncio
from dataclasses import dataclass
from typing import Protocol

import structlog

from cartstore.application.store import CartStore
from cartstore.domain.actions import ItemsLoaded, SetLoading
from cartstore.domain.exceptions import DomainError
from cartstore.domain.models import CartItem

logger = structlog.get_logger()


class CartItemSource(Protocol):
    """Anything that can fetch the initial cart items."""

    async def fetch_cart_items(self) -> list[CartItem]: ...


# ============================================================================
# Loader Result Types
# ============================================================================


@dataclass(frozen=True)
class LoadResult:
    """Outcome of one load.

    Attributes:
        success: Whether the source returned items.
        items: Items returned by the source.
        error: The failure, if any.
        stale: True if a newer load started before this one finished;
            stale results are never applied to the store.
    """

    success: bool
    items: tuple[CartItem, ...] = ()
    error: DomainError | None = None
    stale: bool = False


# ============================================================================
# Cart Loader
# ============================================================================


class CartLoader:
    """Loads the initial cart items into a store.

    Each load takes a generation number. Only the most recent load may
    write to the store, so a slow response that resolves after a newer
    load has started is discarded.
    """

    def __init__(self, store: CartStore, source: CartItemSource) -> None:
        self.store = store
        self.source = source
        self.last_error: DomainError | None = None
        self._generation = 0
        self._task: asyncio.Task[LoadResult] | None = None

    def _is_current(self, generation: int) -> bool:
        return generation == self._generation

    async def load_initial_cart(self) -> LoadResult:
        """Fetch the items and apply them to the store.

        Returns:
            LoadResult describing the outcome.

        Raises:
            asyncio.CancelledError: If the load is cancelled. The loading
                flag is cleared first when this load is the current one.
        """
        self._generation += 1
        generation = self._generation
        self.store.dispatch(SetLoading(is_loading=True))
        logger.info("Loading cart items", generation=generation)

        try:
            items = await self.source.fetch_cart_items()
            action = ItemsLoaded(items=tuple(items))
        except DomainError as e:
            return self._fail(generation, e)
        except BaseException:
            if self._is_current(generation):
                self.store.dispatch(SetLoading(is_loading=False))
            raise

        if not self._is_current(generation):
            logger.info(
                "Discarding stale cart load",
                generation=generation,
                current_generation=self._generation,
            )
            return LoadResult(success=True, items=action.items, stale=True)

        self.last_error = None
        self.store.dispatch(action)
        logger.info("Cart items loaded", generation=generation, item_count=len(action.items))
        return LoadResult(success=True, items=action.items)

    def _fail(self, generation: int, error: DomainError) -> LoadResult:
        if not self._is_current(generation):
            logger.info(
                "Ignoring failure of stale cart load",
                generation=generation,
                error=error.message,
            )
            return LoadResult(success=False, error=error, stale=True)

        self.last_error = error
        logger.warning(
            "Cart items load failed",
            generation=generation,
            error=error.message,
            details=error.details,
        )
        self.store.dispatch(SetLoading(is_loading=False))
        return LoadResult(success=False, error=error)

    def start(self) -> "asyncio.Task[LoadResult]":
        """Schedule a load on the running event loop.

        Any load already in flight is cancelled. It is made stale first,
        so it leaves the store to the new load.

        Returns:
            The task running the load; cancel it to abandon the load.
        """
        if self.in_flight:
            self._generation += 1
        self.cancel()
        self._task = asyncio.create_task(self.load_initial_cart())
        return self._task

    def cancel(self) -> bool:
        """Cancel the load started by ``start``, if still running.

        Returns:
            True if a running task was cancelled.
        """
        if self._task is None or self._task.done():
            return False
        return self._task.cancel()

    @property
    def in_flight(self) -> bool:
        return self._task is not None and not self._task.done()
