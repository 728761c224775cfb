"""
Storefront listing controller.

Keeps three things in step: the filter controls, the address bar and the
product request. Discrete controls commit immediately. The price control is
continuous, so edits stay local while the user is typing or dragging and are
committed on blur, on Enter, or once ``debounce_seconds`` pass without a new
edit.

Every commit takes a new generation number. Only the response belonging to
the latest generation is applied; anything older is dropped on arrival, and
superseded requests that have not started yet are cancelled.
"""
import logging
import threading
import time
from concurrent.futures import Executor, Future
from dataclasses import replace
from enum import Enum
from functools import partial
from typing import Callable, List, Optional

from .client import ApiClientError
from .filter_state import (
    FilterState,
    PriceBounds,
    decode_filter_state,
    encode_filter_state,
    request_params,
)

logger = logging.getLogger(__name__)


class PricePhase(Enum):
    IDLE = "idle"
    TYPING = "typing"


class ImmediateExecutor(Executor):
    """Runs each submitted call in the caller's thread"""

    def submit(self, fn, /, *args, **kwargs):
        future = Future()
        future.set_running_or_notify_cancel()
        try:
            result = fn(*args, **kwargs)
        except Exception as e:
            future.set_exception(e)
        else:
            future.set_result(result)
        return future


class FilterStateSynchronizer:
    def __init__(
        self,
        client,
        history,
        executor: Optional[Executor] = None,
        clock: Callable[[], float] = time.monotonic,
        debounce_seconds: float = 0.5,
        page_size: int = 12,
        on_change: Optional[Callable[["FilterStateSynchronizer"], None]] = None,
    ):
        self.client = client
        self.history = history
        self.executor = executor or ImmediateExecutor()
        self.clock = clock
        self.debounce_seconds = debounce_seconds
        self.page_size = page_size
        self.on_change = on_change

        self.bounds: Optional[PriceBounds] = None
        self.state: Optional[FilterState] = None
        self.products: List[dict] = []
        self.pagination: Optional[dict] = None
        self.loading = True
        self.filtering = False

        self.price_phase = PricePhase.IDLE
        self.draft_price = None
        self._last_edit_at = None

        self._deferred: List[Callable[[FilterState], FilterState]] = []
        self._generation = 0
        self._in_flight_state: Optional[FilterState] = None
        self._future: Optional[Future] = None
        self._lock = threading.Lock()

    # ==================== LIFECYCLE ====================

    def mount(self) -> bool:
        """Load the price bounds, then commit the state found in the URL"""
        self._deferred.append(lambda state: state)
        return self.load_price_bounds()

    def load_price_bounds(self) -> bool:
        """Fetch the catalog's price range once and replay deferred commits

        Returns False when the bounds are still unknown.
        """
        if self.bounds is None:
            try:
                self.bounds = self.client.get_price_range()
            except ApiClientError as e:
                logger.warning(f"Price range unavailable, deferring commits: {e}")
                return False
            logger.debug(f"Price bounds {self.bounds.min}-{self.bounds.max}")

        if not self._deferred:
            return True

        state = self._current_state()
        for mutate in self._deferred:
            state = mutate(state)
        self._deferred.clear()
        self._commit(state)
        return True

    # ==================== PRICE (continuous) ====================

    def edit_price(self, min_price: int, max_price: int):
        """Track an in-progress price edit without touching the URL or network"""
        self.draft_price = (min_price, max_price)
        self.price_phase = PricePhase.TYPING
        self._last_edit_at = self.clock()

    def blur_price(self) -> bool:
        return self._commit_price()

    def submit_price(self) -> bool:
        """Enter pressed in a price input"""
        return self._commit_price()

    def tick(self) -> bool:
        """Commit the price edit once the debounce window has passed"""
        if self.price_phase is not PricePhase.TYPING:
            return False
        if self.clock() - self._last_edit_at < self.debounce_seconds:
            return False
        return self._commit_price()

    def _commit_price(self) -> bool:
        if self.price_phase is not PricePhase.TYPING:
            return False
        low, high = self.draft_price
        self.price_phase = PricePhase.IDLE
        self.draft_price = None
        self._last_edit_at = None
        return self._update(
            lambda state: replace(state, min_price=low, max_price=high, page=1)
        )

    # ==================== DISCRETE CONTROLS ====================

    def toggle_category(self, slug: str) -> bool:
        return self._update(lambda state: state.with_category_toggled(slug))

    def set_in_stock(self, value: bool) -> bool:
        return self._update(lambda state: replace(state, in_stock=bool(value), page=1))

    def set_featured(self, value: bool) -> bool:
        return self._update(lambda state: replace(state, featured=bool(value), page=1))

    def set_sort(self, sort: str) -> bool:
        return self._update(lambda state: replace(state, sort=sort, page=1))

    def go_to_page(self, page: int) -> bool:
        return self._update(lambda state: replace(state, page=page))

    def clear_filters(self) -> bool:
        """Reset every dimension and strip the query string in one commit"""
        self.price_phase = PricePhase.IDLE
        self.draft_price = None
        self._last_edit_at = None
        return self._update(lambda state: FilterState.defaults(self.bounds))

    # ==================== COMMIT ====================

    def _current_state(self) -> FilterState:
        if self.state is not None:
            return self.state
        return decode_filter_state(self.history.query, self.bounds)

    def _update(self, mutate: Callable[[FilterState], FilterState]) -> bool:
        if self.bounds is None:
            logger.debug("Price bounds unknown, deferring commit")
            self._deferred.append(mutate)
            return False
        return self._commit(mutate(self._current_state()))

    def _commit(self, state: FilterState) -> bool:
        state = state.normalized(self.bounds)
        with self._lock:
            if self.filtering and state == self._in_flight_state:
                logger.debug("Commit matches the request in flight, skipping")
                return False
            self.state = state
            self._generation += 1
            generation = self._generation
            self._in_flight_state = state
            self.filtering = True
            previous, self._future = self._future, None

        self.history.replace(self.history.path, encode_filter_state(state, self.bounds))

        if previous is not None and not previous.done():
            previous.cancel()

        future = self.executor.submit(
            self.client.list_products, request_params(state, self.page_size)
        )
        with self._lock:
            if generation == self._generation:
                self._future = future
        future.add_done_callback(partial(self._on_response, generation))
        return True

    def _on_response(self, generation: int, future: Future):
        if future.cancelled():
            return

        with self._lock:
            if generation != self._generation:
                logger.debug(f"Discarding stale response for generation {generation}")
                return
            self.filtering = False
            self.loading = False
            self._in_flight_state = None
            self._future = None
            try:
                payload = future.result()
            except ApiClientError as e:
                logger.warning(f"Product refresh failed, keeping previous results: {e}")
            else:
                self.products = payload.get("products", [])
                self.pagination = payload.get("pagination")

        if self.on_change is not None:
            self.on_change(self)

