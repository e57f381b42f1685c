"""Shared fixtures for typesafe_codegen tests."""

import pytest

from typesafe_codegen.core.schema import MappingTypeIndex, TypeDescriptor
from typesafe_codegen.typesafe.types import TypeResolver


@pytest.fixture
def index():
    """Index with Person registered under com.example.model and Address unqualified."""
    return MappingTypeIndex({"Person": "com.example.model", "Address": None})


@pytest.fixture
def resolver(index):
    return TypeResolver(index)


@pytest.fixture
def person():
    return TypeDescriptor("Person", is_composite=True)


@pytest.fixture
def string_type():
    return TypeDescriptor("string")
