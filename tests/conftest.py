"""Pytest fixtures for aws_bill_audit tests."""

import io
import json
from datetime import datetime
from unittest.mock import MagicMock

import pytest
from rich.console import Console

from aws_bill_audit.config import AuditConfig

# 2024-04-11 06:30 local: 10 days and 6 hours into a 30-day month
FIXED_NOW = datetime(2024, 4, 11, 6, 30)


def price_item(usd):
    """Minimal Price List product document with one on-demand rate."""
    return json.dumps({
        "product": {"sku": "SKU1"},
        "terms": {
            "OnDemand": {
                "SKU1.JRTCKXETXF": {
                    "priceDimensions": {
                        "SKU1.JRTCKXETXF.6YS6EN2CT7": {
                            "unit": "Hrs",
                            "pricePerUnit": {"USD": usd},
                        }
                    }
                }
            }
        },
    })


@pytest.fixture
def config():
    return AuditConfig(access_key_id="AKIATEST", secret_access_key="secret")


@pytest.fixture
def mock_clients(config):
    """Fake collaborator layer: empty inventory, no metrics, $0.10/hour."""
    clients = MagicMock()
    clients.config = config
    clients.list_instances.return_value = []
    clients.list_db_instances.return_value = []
    clients.list_cache_clusters.return_value = []
    clients.metric_samples.return_value = []
    clients.price_list.return_value = [price_item("0.1000000000")]
    return clients


@pytest.fixture
def console():
    return Console(file=io.StringIO(), width=300, color_system=None)


@pytest.fixture
def clock():
    return lambda: FIXED_NOW
