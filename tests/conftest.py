"""Shared fixtures: isolated apps over temporary data directories."""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from ristoword.core.config import Settings
from ristoword.main import create_app
from ristoword.models import InventoryItem, Order
from ristoword.services.collection import JsonCollection


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(data_directory=str(tmp_path / "data"))


@pytest.fixture
def orders(settings: Settings) -> JsonCollection[Order]:
    return JsonCollection(settings.orders_path, Order)


@pytest.fixture
def inventory(settings: Settings) -> JsonCollection[InventoryItem]:
    return JsonCollection(settings.inventory_path, InventoryItem)


@pytest.fixture
def make_client(settings: Settings):
    """Build a client over fresh collections loaded from the data directory."""
    def factory() -> TestClient:
        app = create_app(
            settings=settings,
            orders=JsonCollection(settings.orders_path, Order),
            inventory=JsonCollection(settings.inventory_path, InventoryItem),
        )
        return TestClient(app)
    return factory


@pytest.fixture
def client(make_client) -> TestClient:
    return make_client()
