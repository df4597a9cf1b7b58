"""
Shared test fixtures and helpers for the apidesc test suite.
"""

import pytest
from typing import Any, Iterable, Optional

from apidesc.config import DescriberConfig
from apidesc.di import ServiceCollection
from apidesc.endpoint.metadata import EndpointMetadata, HttpMethodMetadata
from apidesc.endpoint.signature import HandlerSignature, Nullability, ParameterDescriptor
from apidesc.openapi import CapabilityCache, OperationGenerator, ParameterClassifier, TypeSchemaResolver
from apidesc.patterns import RoutePattern


# ============================================================================
# Sample domain types
# ============================================================================


class Widget:
    """Complex payload type."""

    def __init__(self, name: str = "", size: int = 0):
        self.name = name
        self.size = size


class ProblemDetails:
    """Error payload type."""

    def __init__(self, title: str = "", status: int = 500):
        self.title = title
        self.status = status


class Point:
    """Custom type bound from a string via ``try_parse``."""

    def __init__(self, x: float, y: float):
        self.x = x
        self.y = y

    @classmethod
    def try_parse(cls, value: str) -> Optional["Point"]:
        x, _, y = value.partition(",")
        try:
            return cls(float(x), float(y))
        except ValueError:
            return None


class Pager:
    """Custom type that binds itself from the request."""

    @classmethod
    async def bind_async(cls, ctx: Any) -> "Pager":
        return cls()


class UserRepository:
    """A registered service."""


# ============================================================================
# Builders
# ============================================================================


def make_param(
    name: str,
    tp: Any = str,
    *annotations: Any,
    has_default: bool = False,
    nullability: Nullability = Nullability.NOT_NULL,
) -> ParameterDescriptor:
    return ParameterDescriptor(
        name=name,
        type=tp,
        annotations=tuple(annotations),
        has_default=has_default,
        nullability=nullability,
    )


def make_signature(
    *parameters: ParameterDescriptor,
    return_type: Any = None,
    declaring_type: Optional[type] = None,
    name: str = "handler",
) -> HandlerSignature:
    return HandlerSignature(
        parameters=tuple(parameters),
        return_type=type(None) if return_type is None else return_type,
        declaring_type=declaring_type,
        name=name,
    )


def make_metadata(method: Optional[str] = "GET", *items: Any) -> EndpointMetadata:
    head: Iterable[Any] = [HttpMethodMetadata([method])] if method else []
    return EndpointMetadata([*head, *items])


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def services():
    collection = ServiceCollection()
    collection.add(UserRepository)
    return collection


@pytest.fixture
def capability_cache():
    return CapabilityCache()


@pytest.fixture
def classifier(capability_cache, services):
    return ParameterClassifier(capability_cache, services)


@pytest.fixture
def resolver():
    return TypeSchemaResolver()


@pytest.fixture
def generator(capability_cache, services):
    return OperationGenerator(
        capability_cache=capability_cache,
        service_registry=services,
        config=DescriberConfig(application_name="ShopApi"),
    )


@pytest.fixture
def empty_route():
    return RoutePattern.parse("/items")


@pytest.fixture
def item_route():
    return RoutePattern.parse("/items/{id}")
