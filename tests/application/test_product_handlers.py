"""Integration tests for the product use cases.

Uses the in-memory store — no file I/O.
"""

import pytest

from invtrack.application.add_product import AddProductHandler
from invtrack.application.delete_product import DeleteProductHandler
from invtrack.application.update_product import UpdateProductHandler
from invtrack.domain.exceptions import ValidationError
from invtrack.domain.model.value_objects import Money
from tests.fakes import make_repos, widget_draft


def _setup():
    product_repo, order_repo = make_repos()
    return product_repo, order_repo


class TestAddProduct:

    def test_creates_product_with_fresh_id(self):
        product_repo, _ = _setup()
        product = AddProductHandler(product_repo).handle(widget_draft())

        stored = product_repo.list_all()
        assert len(stored) == 1
        assert stored[0] == product
        assert product.id == "p-1"
        assert product.created_at == product.updated_at

    def test_ids_are_unique(self):
        product_repo, _ = _setup()
        handler = AddProductHandler(product_repo)
        first = handler.handle(widget_draft(sku="A"))
        second = handler.handle(widget_draft(sku="B"))
        assert first.id != second.id

    def test_duplicate_sku_rejected(self):
        product_repo, _ = _setup()
        handler = AddProductHandler(product_repo)
        handler.handle(widget_draft(sku="W-1"))

        with pytest.raises(ValidationError, match="already in use"):
            handler.handle(widget_draft(sku="w-1"))
        assert len(product_repo.list_all()) == 1

    def test_invalid_product_not_stored(self):
        product_repo, _ = _setup()
        with pytest.raises(ValidationError):
            AddProductHandler(product_repo).handle(widget_draft(quantity=-1))
        assert product_repo.list_all() == []


class TestUpdateProduct:

    def test_overlays_fields_and_refreshes_updated_at(self):
        product_repo, _ = _setup()
        product = AddProductHandler(product_repo).handle(widget_draft())

        updated = UpdateProductHandler(product_repo).handle(product.id, {"price": "12.00"})

        assert updated.price == Money.of("12.00")
        assert updated.quantity == product.quantity
        assert updated.name == product.name
        assert updated.created_at == product.created_at
        assert updated.updated_at > product.updated_at
        assert product_repo.get_by_id(product.id) == updated

    def test_unknown_id_returns_none(self):
        product_repo, _ = _setup()
        AddProductHandler(product_repo).handle(widget_draft())
        before = product_repo.list_all()

        assert UpdateProductHandler(product_repo).handle("nope", {"quantity": 1}) is None
        assert product_repo.list_all() == before

    def test_sku_collision_rejected(self):
        product_repo, _ = _setup()
        handler = AddProductHandler(product_repo)
        handler.handle(widget_draft(sku="A"))
        b = handler.handle(widget_draft(sku="B"))

        with pytest.raises(ValidationError, match="already in use"):
            UpdateProductHandler(product_repo).handle(b.id, {"sku": "a"})

    def test_keeping_own_sku_allowed(self):
        product_repo, _ = _setup()
        product = AddProductHandler(product_repo).handle(widget_draft(sku="A"))
        updated = UpdateProductHandler(product_repo).handle(product.id, {"sku": "A", "quantity": 9})
        assert updated.quantity == 9


class TestDeleteProduct:

    def test_delete_existing(self):
        product_repo, _ = _setup()
        handler = AddProductHandler(product_repo)
        keep = handler.handle(widget_draft(sku="A"))
        drop = handler.handle(widget_draft(sku="B"))

        assert DeleteProductHandler(product_repo).handle(drop.id) is True
        assert [p.id for p in product_repo.list_all()] == [keep.id]

    def test_delete_missing_returns_false(self):
        product_repo, _ = _setup()
        AddProductHandler(product_repo).handle(widget_draft())
        before = product_repo.list_all()

        assert DeleteProductHandler(product_repo).handle("nope") is False
        assert product_repo.list_all() == before
