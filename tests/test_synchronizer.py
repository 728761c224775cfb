from concurrent.futures import Executor, Future

import pytest

from app.storefront.client import ApiClientError
from app.storefront.filter_state import PriceBounds
from app.storefront.history import BrowserHistory
from app.storefront.synchronizer import FilterStateSynchronizer, PricePhase


class FakeClient:
    def __init__(self, bounds=PriceBounds(0, 1000)):
        self.bounds = bounds
        self.calls = []
        self.fail_bounds = False
        self.fail_products = False

    def get_price_range(self):
        if self.fail_bounds:
            raise ApiClientError("offline")
        return self.bounds

    def list_products(self, params):
        self.calls.append(params)
        if self.fail_products:
            raise ApiClientError("offline")
        return {
            "products": [{"name": f"call-{len(self.calls)}"}],
            "pagination": {"page": int(params["page"]), "limit": 12, "total": 1, "totalPages": 1},
        }


class ManualClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


class ManualExecutor(Executor):
    """Queues submitted calls until the test runs them"""

    def __init__(self):
        self.pending = []

    def submit(self, fn, /, *args, **kwargs):
        future = Future()
        self.pending.append((future, fn, args, kwargs))
        return future

    def run(self, index):
        future, fn, args, kwargs = self.pending[index]
        if not future.set_running_or_notify_cancel():
            return
        try:
            future.set_result(fn(*args, **kwargs))
        except ApiClientError as e:
            future.set_exception(e)


@pytest.fixture
def client():
    return FakeClient()


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def history():
    return BrowserHistory("/products")


@pytest.fixture
def sync(client, history, clock):
    synchronizer = FilterStateSynchronizer(client, history, clock=clock)
    synchronizer.mount()
    client.calls.clear()
    return synchronizer


class TestMount:
    def test_mount_decodes_url_and_fetches(self, client, clock):
        history = BrowserHistory("/products?categories=divani&page=2")
        sync = FilterStateSynchronizer(client, history, clock=clock)

        assert sync.mount() is True
        assert sync.state.categories == frozenset({"divani"})
        assert sync.state.page == 2
        assert len(client.calls) == 1
        assert client.calls[0]["categories"] == "divani"
        assert sync.products == [{"name": "call-1"}]
        assert sync.loading is False
        assert sync.filtering is False

    def test_mount_without_bounds_defers_everything(self, client, history, clock):
        client.fail_bounds = True
        sync = FilterStateSynchronizer(client, history, clock=clock)

        assert sync.mount() is False
        assert sync.toggle_category("galdi") is False
        assert client.calls == []
        assert history.url == "/products"

        client.fail_bounds = False
        assert sync.load_price_bounds() is True

        assert len(client.calls) == 1
        assert client.calls[0]["categories"] == "galdi"
        assert history.url == "/products?categories=galdi"

    def test_committed_prices_use_dataset_bounds(self, history, clock):
        client = FakeClient(bounds=PriceBounds(80, 500))
        sync = FilterStateSynchronizer(client, history, clock=clock)
        sync.mount()

        assert client.calls[0]["minPrice"] == "80"
        assert client.calls[0]["maxPrice"] == "500"


class TestPriceDebounce:
    def test_rapid_edits_produce_one_fetch_with_final_value(self, sync, client, clock, history):
        sync.edit_price(100, 900)
        clock.now = 0.2
        sync.edit_price(200, 800)
        clock.now = 0.5
        assert sync.tick() is False
        assert client.calls == []
        assert history.url == "/products"

        clock.now = 0.8
        assert sync.tick() is True

        assert len(client.calls) == 1
        assert client.calls[0]["minPrice"] == "200"
        assert client.calls[0]["maxPrice"] == "800"
        assert history.url == "/products?minPrice=200&maxPrice=800"
        assert sync.tick() is False

    def test_typing_touches_neither_url_nor_network(self, sync, client, history):
        sync.edit_price(10, 20)

        assert sync.price_phase is PricePhase.TYPING
        assert client.calls == []
        assert history.url == "/products"

    def test_blur_commits_immediately(self, sync, client):
        sync.edit_price(300, 400)

        assert sync.blur_price() is True
        assert sync.price_phase is PricePhase.IDLE
        assert client.calls[0]["minPrice"] == "300"

    def test_enter_commits_immediately(self, sync, client):
        sync.edit_price(300, 400)

        assert sync.submit_price() is True
        assert len(client.calls) == 1

    def test_blur_without_edit_does_nothing(self, sync, client):
        assert sync.blur_price() is False
        assert client.calls == []

    def test_committed_price_is_clamped(self, sync, client):
        sync.edit_price(-50, 5000)
        sync.blur_price()

        assert sync.state.min_price == 0
        assert sync.state.max_price == 1000
        assert client.calls[0]["maxPrice"] == "1000"


class TestDiscreteControls:
    def test_toggle_category_commits_and_resets_page(self, sync, client, history):
        sync.go_to_page(3)
        sync.toggle_category("divani")

        assert sync.state.page == 1
        assert history.url == "/products?categories=divani"
        assert len(client.calls) == 2

    def test_toggle_twice_removes_category(self, sync, history):
        sync.toggle_category("divani")
        sync.toggle_category("divani")

        assert sync.state.categories == frozenset()
        assert history.url == "/products"

    def test_flags_and_sort(self, sync, history):
        sync.set_in_stock(True)
        sync.set_featured(True)
        sync.set_sort("price_desc")

        assert history.url == "/products?inStock=true&featured=true&sort=price_desc"

    def test_invalid_sort_falls_back(self, sync):
        sync.set_sort("bogus")

        assert sync.state.sort == "name"

    def test_history_is_replaced_not_pushed(self, sync, history):
        sync.toggle_category("a")
        sync.toggle_category("b")

        assert len(history.entries) == 1

    def test_clear_filters_is_one_commit_to_bare_path(self, sync, client, history):
        sync.toggle_category("divani")
        sync.set_in_stock(True)
        sync.edit_price(100, 200)
        client.calls.clear()

        assert sync.clear_filters() is True

        assert history.url == "/products"
        assert len(client.calls) == 1
        assert sync.price_phase is PricePhase.IDLE
        assert sync.state.categories == frozenset()
        assert (sync.state.min_price, sync.state.max_price) == (0, 1000)


class TestInFlight:
    @pytest.fixture
    def executor(self):
        return ManualExecutor()

    @pytest.fixture
    def sync(self, client, history, clock, executor):
        synchronizer = FilterStateSynchronizer(client, history, executor=executor, clock=clock)
        synchronizer.mount()
        executor.run(0)
        executor.pending.clear()
        client.calls.clear()
        return synchronizer

    def test_duplicate_commit_while_filtering_is_suppressed(self, sync, executor):
        assert sync.toggle_category("divani") is True
        assert sync.filtering is True

        sync.edit_price(0, 1000)
        assert sync.blur_price() is False
        assert len(executor.pending) == 1

    def test_stale_response_is_discarded(self, sync, executor):
        sync.go_to_page(2)
        # the first request has already started when it is superseded
        executor.pending[0][0].set_running_or_notify_cancel()
        sync.go_to_page(3)

        executor.run(1)
        assert sync.pagination["page"] == 3
        assert sync.filtering is False

        future, fn, args, kwargs = executor.pending[0]
        future.set_result(fn(*args, **kwargs))
        assert sync.pagination["page"] == 3

    def test_superseded_request_is_cancelled(self, sync, executor, client):
        sync.go_to_page(2)
        sync.go_to_page(3)

        assert executor.pending[0][0].cancelled()
        executor.run(0)
        executor.run(1)
        assert [call["page"] for call in client.calls] == ["3"]

    def test_failed_fetch_keeps_previous_products(self, sync, executor, client):
        previous = list(sync.products)
        client.fail_products = True

        sync.toggle_category("galdi")
        executor.run(0)

        assert sync.products == previous
        assert sync.filtering is False
        assert sync.state.categories == frozenset({"galdi"})

    def test_on_change_is_notified(self, client, history, clock, executor):
        seen = []
        sync = FilterStateSynchronizer(
            client, history, executor=executor, clock=clock, on_change=seen.append
        )
        sync.mount()
        executor.run(0)

        assert seen == [sync]
