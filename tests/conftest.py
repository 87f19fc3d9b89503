"""
Shared pytest fixtures and configuration for dbent tests.

This module provides:
- Logging/env isolation fixtures
- Sample records in each container state

Usage:
    Fixtures are auto-discovered by pytest. Use them as function arguments.
"""

from typing import Generator

import pytest
import structlog

from dbent import Entity, EntityLabel, Key, Many
from tests._support.records import Customer, Order, OrderLine, Product


# =============================================================================
# Test Markers Configuration
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Mark all tests without explicit markers as unit tests."""
    for item in items:
        markers = {mark.name for mark in item.iter_markers()}
        if "unit" not in markers:
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Isolation Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_structlog() -> Generator[None, None, None]:
    """Undo any configure_logging() a test performed."""
    yield
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove DBENT_* variables so settings tests see defaults."""
    for name in ("DBENT_LOG_LEVEL", "DBENT_LOG_JSON", "DBENT_SERVICE_NAME"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


# =============================================================================
# Sample Records
# =============================================================================


@pytest.fixture
def customer() -> Customer:
    return Customer(id=Key.new(5), name="Ada", email="ada@example.com")


@pytest.fixture
def product() -> Product:
    return Product(id=Key.new("SKU-1"), title="Widget")


@pytest.fixture
def order(customer: Customer, product: Product) -> Order:
    """Order with a fetched customer and two loaded lines."""
    return Order(
        id=Key.new(100),
        customer=EntityLabel.from_value(customer),
        lines=Many.from_values(
            [
                OrderLine(id=Key.new(1), quantity=2, product=Entity.from_value(product)),
                OrderLine(id=Key.new(2), quantity=1, product=Entity.from_key(Key.new("SKU-2"))),
            ]
        ),
    )
