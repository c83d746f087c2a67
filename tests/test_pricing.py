import json

import pytest

from aws_bill_audit.errors import PricingError
from aws_bill_audit.pricing import on_demand_price, price_filters, unit_price

from tests.conftest import price_item


class TestOnDemandPrice:

    def test_parses_json_document(self):
        assert on_demand_price(price_item("0.0116000000")) == pytest.approx(0.0116)

    def test_accepts_dict(self):
        assert on_demand_price(json.loads(price_item("1.5"))) == 1.5

    def test_zero_price(self):
        assert on_demand_price(price_item("0.0000000000")) == 0.0

    @pytest.mark.parametrize("item", [
        {},
        {"terms": {}},
        {"terms": {"OnDemand": {}}},
        {"terms": {"OnDemand": {"X": {"priceDimensions": {}}}}},
        {"terms": {"OnDemand": {"X": {"priceDimensions": {"Y": {"pricePerUnit": {"EUR": "1"}}}}}}},
        {"terms": {"OnDemand": {"X": {"priceDimensions": {"Y": {"pricePerUnit": {"USD": "n/a"}}}}}}},
    ])
    def test_unexpected_shape_raises(self, item):
        with pytest.raises(PricingError):
            on_demand_price(item)


class TestUnitPrice:

    def test_queries_type_and_location(self, mock_clients):
        price = unit_price(mock_clients, "AmazonEC2", "t3.micro", "Asia Pacific (Mumbai)")

        assert price == pytest.approx(0.1)
        mock_clients.price_list.assert_called_once_with(
            "AmazonEC2", price_filters("t3.micro", "Asia Pacific (Mumbai)"), max_results=1)

    def test_filters(self):
        assert price_filters("db.t3.micro", "Asia Pacific (Mumbai)") == [
            {"Type": "TERM_MATCH", "Field": "instanceType", "Value": "db.t3.micro"},
            {"Type": "TERM_MATCH", "Field": "location", "Value": "Asia Pacific (Mumbai)"},
        ]

    def test_no_matching_product_raises(self, mock_clients):
        mock_clients.price_list.return_value = []
        with pytest.raises(PricingError, match="cache.t3.micro"):
            unit_price(mock_clients, "AmazonElastiCache", "cache.t3.micro", "Asia Pacific (Mumbai)")
