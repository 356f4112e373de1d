"""Shared pytest fixtures for picowire tests."""

import pytest

from picowire.constructors import ConstructorInspector
from picowire.registry import Registry


@pytest.fixture()
def registry() -> Registry:
    """Default registry, later registrations override earlier ones."""
    return Registry()


@pytest.fixture()
def strict_registry() -> Registry:
    """Registry that rejects duplicate registrations."""
    return Registry(allow_overrides=False)


@pytest.fixture()
def constructor_inspector() -> ConstructorInspector:
    """ConstructorInspector instance."""
    return ConstructorInspector()
