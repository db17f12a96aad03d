"""Unit tests for the Product aggregate."""

from datetime import timedelta

import pytest

from invtrack.domain.exceptions import ValidationError
from invtrack.domain.model.product import Product, StockStatus
from invtrack.domain.model.value_objects import Money
from tests.fakes import START, widget_draft


def _make_product(**overrides) -> Product:
    return Product.create("p-1", widget_draft(**overrides), START)


class TestProductCreation:

    def test_happy_path(self):
        product = _make_product()
        assert product.id == "p-1"
        assert product.name == "Widget"
        assert product.price == Money.of("10.00")
        assert product.created_at == product.updated_at == START

    def test_text_is_stripped(self):
        product = _make_product(name="  Widget  ", sku=" W-1 ")
        assert product.name == "Widget"
        assert product.sku == "W-1"

    def test_blank_description_becomes_none(self):
        assert _make_product(description="   ").description is None

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError, match="Product name"):
            _make_product(name=" ")

    def test_blank_sku_rejected(self):
        with pytest.raises(ValidationError, match="SKU"):
            _make_product(sku="")

    def test_negative_quantity_rejected(self):
        with pytest.raises(ValidationError, match="Quantity cannot be negative"):
            _make_product(quantity=-1)

    def test_negative_reorder_level_rejected(self):
        with pytest.raises(ValidationError, match="Reorder level"):
            _make_product(reorder_level=-5)

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            _make_product(price="-0.01")


class TestProductStockStatus:

    def test_out_of_stock(self):
        product = _make_product(quantity=0)
        assert product.is_out_of_stock
        assert not product.is_low_stock
        assert product.stock_status == StockStatus.OUT_OF_STOCK

    def test_low_stock_at_threshold(self):
        product = _make_product(quantity=10, reorder_level=10)
        assert product.is_low_stock
        assert product.stock_status == StockStatus.LOW_STOCK

    def test_in_stock_above_threshold(self):
        product = _make_product(quantity=11, reorder_level=10)
        assert not product.is_low_stock
        assert product.stock_status == StockStatus.IN_STOCK

    def test_stock_value(self):
        assert _make_product(quantity=5, price="10.00").stock_value == Money.of("50.00")


class TestProductWithChanges:

    def test_overlays_only_given_fields(self):
        product = _make_product()
        later = START + timedelta(minutes=1)

        updated = product.with_changes({"quantity": 42, "price": "12.50"}, later)

        assert updated.quantity == 42
        assert updated.price == Money.of("12.50")
        assert updated.name == product.name
        assert updated.sku == product.sku
        assert updated.created_at == product.created_at
        assert updated.updated_at == later

    def test_original_is_untouched(self):
        product = _make_product()
        product.with_changes({"quantity": 1}, START + timedelta(seconds=1))
        assert product.quantity == 5

    def test_updated_at_moves_forward_with_stalled_clock(self):
        product = _make_product()
        updated = product.with_changes({"quantity": 1}, START)
        assert updated.updated_at > product.updated_at

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError, match="Unknown product field"):
            _make_product().with_changes({"colour": "red"}, START)

    @pytest.mark.parametrize("field", ["id", "created_at", "updated_at"])
    def test_immutable_field_rejected(self, field):
        with pytest.raises(ValidationError, match="Cannot change product field"):
            _make_product().with_changes({field: "x"}, START)

    def test_result_is_revalidated(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            _make_product().with_changes({"quantity": -3}, START)
