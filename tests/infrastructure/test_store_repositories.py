"""Tests for the store-backed repositories: persistence layout, store
failures, decode errors and ID/number generation."""

import json
import logging

import pytest

from invtrack.domain.exceptions import StorageDecodeError
from invtrack.domain.model.order import OrderDraft, OrderItem, OrderType
from invtrack.infrastructure.persistence.store import (
    ORDERS_KEY,
    PRODUCTS_KEY,
    FileStore,
    InMemoryStore,
)
from invtrack.infrastructure.persistence.store_order_repository import StoreOrderRepository
from invtrack.infrastructure.persistence.store_product_repository import (
    StoreProductRepository,
)
from tests.fakes import FrozenClock, TickingClock, UnavailableStore, make_repos, widget_draft


def _sale_draft(product) -> OrderDraft:
    return OrderDraft(
        type=OrderType.SALE,
        items=[OrderItem.snapshot(product, 1)],
        customer_name="Alice",
    )


class TestPersistenceLayout:

    def test_each_collection_under_its_own_key(self):
        store = InMemoryStore()
        product_repo, order_repo = make_repos(store)

        product = product_repo.create(widget_draft())
        order_repo.create(_sale_draft(product))

        assert [p["id"] for p in json.loads(store.get(PRODUCTS_KEY))] == [product.id]
        assert len(json.loads(store.get(ORDERS_KEY))) == 1

    def test_list_preserves_insertion_order(self):
        product_repo, _ = make_repos()
        skus = ["C", "A", "B"]
        for sku in skus:
            product_repo.create(widget_draft(sku=sku))
        assert [p.sku for p in product_repo.list_all()] == skus

    def test_update_rewrites_in_place(self):
        product_repo, _ = make_repos()
        a = product_repo.create(widget_draft(sku="A"))
        b = product_repo.create(widget_draft(sku="B"))

        product_repo.update(a.id, {"quantity": 99})

        assert [p.id for p in product_repo.list_all()] == [a.id, b.id]
        assert product_repo.get_by_id(a.id).quantity == 99

    def test_file_store_round_trip(self, tmp_path):
        store = FileStore(tmp_path)
        product = StoreProductRepository(store).create(widget_draft())

        reopened = StoreProductRepository(FileStore(tmp_path))
        assert reopened.list_all() == [product]

    def test_stalled_clock_still_advances_updated_at(self):
        repo = StoreProductRepository(InMemoryStore(), clock=FrozenClock())
        product = repo.create(widget_draft())
        first = repo.update(product.id, {"quantity": 1})
        second = repo.update(product.id, {"quantity": 2})
        assert product.updated_at < first.updated_at < second.updated_at


class TestIdGeneration:

    def test_default_ids_are_unique_uuids(self):
        repo = StoreProductRepository(InMemoryStore())
        ids = {repo.create(widget_draft(sku=str(n))).id for n in range(5)}
        assert len(ids) == 5
        assert all(len(i) == 36 for i in ids)

    def test_colliding_id_factory_is_retried(self):
        ids = iter(["dup", "dup", "fresh"])
        repo = StoreProductRepository(InMemoryStore(), id_factory=lambda: next(ids))
        first = repo.create(widget_draft(sku="A"))
        second = repo.create(widget_draft(sku="B"))
        assert (first.id, second.id) == ("dup", "fresh")

    def test_order_numbers_follow_highest_in_use(self):
        product_repo, order_repo = make_repos()
        product = product_repo.create(widget_draft())
        first = order_repo.create(_sale_draft(product))
        second = order_repo.create(_sale_draft(product))
        order_repo.delete(first.id)

        third = order_repo.create(_sale_draft(product))

        assert second.order_number == "ORD-000002"
        assert third.order_number == "ORD-000003"

    def test_foreign_order_numbers_ignored(self):
        store = InMemoryStore()
        product_repo, order_repo = make_repos(store)
        product = product_repo.create(widget_draft())
        legacy = order_repo.create(_sale_draft(product))

        raw = json.loads(store.get(ORDERS_KEY))
        raw[0]["orderNumber"] = "ORD-1717171717171-42"
        store.set(ORDERS_KEY, json.dumps(raw).encode())

        assert order_repo.create(_sale_draft(product)).order_number == "ORD-000001"
        assert order_repo.get_by_id(legacy.id).order_number == "ORD-1717171717171-42"


class TestStoreUnavailable:

    def test_reads_are_empty(self):
        product_repo, order_repo = make_repos(UnavailableStore())
        assert product_repo.list_all() == []
        assert order_repo.list_all() == []
        assert product_repo.get_by_id("x") is None

    def test_writes_are_skipped_without_raising(self, caplog):
        product_repo, order_repo = make_repos(UnavailableStore())

        with caplog.at_level(logging.WARNING):
            product = product_repo.create(widget_draft())

        assert product.name == "Widget"
        assert product_repo.list_all() == []
        assert "unavailable" in caplog.text

    def test_update_and_delete_report_not_found(self):
        product_repo, order_repo = make_repos(UnavailableStore())
        assert product_repo.update("x", {"quantity": 1}) is None
        assert product_repo.delete("x") is False
        assert order_repo.update("x", {"status": "completed"}) is None
        assert order_repo.delete("x") is False


class TestDecodeErrorsSurface:

    def test_corrupt_products_raise(self):
        store = InMemoryStore({PRODUCTS_KEY: b"garbage"})
        product_repo, _ = make_repos(store)
        with pytest.raises(StorageDecodeError):
            product_repo.list_all()

    def test_corrupt_orders_raise(self):
        store = InMemoryStore({ORDERS_KEY: b'[{"id": 1}]'})
        repo = StoreOrderRepository(store, clock=TickingClock())
        with pytest.raises(StorageDecodeError):
            repo.list_all()
