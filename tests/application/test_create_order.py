"""Integration tests for the CreateOrder use case."""

import pytest

from invtrack.application.create_order import CreateOrderHandler
from invtrack.application.dto import OrderItemSpec
from invtrack.domain.exceptions import EntityNotFoundError, ValidationError
from invtrack.domain.model.order import OrderStatus, OrderType
from invtrack.domain.model.value_objects import Money
from tests.fakes import make_repos, widget_draft


def _setup():
    product_repo, order_repo = make_repos()
    widget = product_repo.create(widget_draft(name="Widget", sku="W-1", price="15.00"))
    gadget = product_repo.create(widget_draft(name="Gadget", sku="G-1", price="25.00"))
    handler = CreateOrderHandler(order_repo, product_repo)
    return handler, order_repo, product_repo, widget, gadget


class TestCreateOrderHappyPath:

    def test_creates_order_with_correct_total(self):
        handler, _, _, widget, gadget = _setup()
        order = handler.handle(
            "sale",
            [OrderItemSpec(widget.id, 3), OrderItemSpec(gadget.id, 5)],
            customer_name="Alice",
        )
        assert order.total_amount == Money.of("170.00")
        assert order.status == OrderStatus.PENDING
        assert order.type == OrderType.SALE
        assert order.customer_name == "Alice"
        assert len(order.items) == 2

    def test_resolves_products_by_sku(self):
        handler, _, _, widget, _ = _setup()
        order = handler.handle("purchase", [OrderItemSpec("g-1", 2)], supplier_name="Acme")
        assert order.items[0].product_name == "Gadget"

    def test_assigns_id_and_order_number(self):
        handler, _, _, widget, _ = _setup()
        order = handler.handle("sale", [OrderItemSpec(widget.id, 1)], customer_name="Alice")
        assert order.id == "o-1"
        assert order.order_number == "ORD-000001"

    def test_sequential_order_numbers(self):
        handler, _, _, widget, _ = _setup()
        first = handler.handle("sale", [OrderItemSpec(widget.id, 1)], customer_name="Alice")
        second = handler.handle("sale", [OrderItemSpec(widget.id, 1)], customer_name="Bob")
        assert first.order_number == "ORD-000001"
        assert second.order_number == "ORD-000002"

    def test_persists_order(self):
        handler, order_repo, _, widget, _ = _setup()
        order = handler.handle("sale", [OrderItemSpec(widget.id, 1)], customer_name="Alice")
        assert order_repo.get_by_id(order.id) == order

    def test_repeated_product_merged_into_one_line(self):
        handler, _, _, widget, _ = _setup()
        order = handler.handle(
            "sale",
            [OrderItemSpec(widget.id, 1), OrderItemSpec("W-1", 2)],
            customer_name="Alice",
        )
        assert len(order.items) == 1
        assert order.items[0].quantity.value == 3
        assert order.items[0].subtotal == Money.of("45.00")


class TestCreateOrderPriceLock:

    def test_price_snapshot_at_creation(self):
        handler, order_repo, product_repo, widget, _ = _setup()
        order = handler.handle("sale", [OrderItemSpec(widget.id, 1)], customer_name="Alice")

        product_repo.update(widget.id, {"price": "99.99", "name": "Widget v2"})

        saved = order_repo.get_by_id(order.id)
        assert saved.total_amount == Money.of("15.00")
        assert saved.items[0].product_name == "Widget"


class TestCreateOrderValidation:

    def test_unknown_product_rejected(self):
        handler, order_repo, _, _, _ = _setup()
        with pytest.raises(EntityNotFoundError, match="Product not found"):
            handler.handle("sale", [OrderItemSpec("NonExistent", 1)], customer_name="Alice")
        assert order_repo.list_all() == []

    def test_no_items_rejected(self):
        handler, _, _, _, _ = _setup()
        with pytest.raises(ValidationError, match="at least one item"):
            handler.handle("sale", [], customer_name="Alice")

    def test_non_positive_quantity_rejected(self):
        handler, _, _, widget, _ = _setup()
        with pytest.raises(ValidationError, match="must be positive"):
            handler.handle("sale", [OrderItemSpec(widget.id, 0)], customer_name="Alice")

    def test_sale_without_customer_rejected(self):
        handler, _, _, widget, _ = _setup()
        with pytest.raises(ValidationError, match="Customer name"):
            handler.handle("sale", [OrderItemSpec(widget.id, 1)])

    def test_purchase_with_customer_rejected(self):
        handler, _, _, widget, _ = _setup()
        with pytest.raises(ValidationError, match="cannot have a customer"):
            handler.handle(
                "purchase", [OrderItemSpec(widget.id, 1)],
                customer_name="Alice", supplier_name="Acme",
            )
