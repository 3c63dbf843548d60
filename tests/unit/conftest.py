"""Shared fixtures for kubeinformer unit tests."""

from __future__ import annotations

import pytest

from kubeinformer.suppliers import SupplierRegistry


@pytest.fixture
def suppliers() -> SupplierRegistry:
    return SupplierRegistry()
