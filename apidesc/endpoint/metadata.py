"""
Endpoint Metadata

Declarative markers attached to handlers and their parameters, and the
ordered collection that holds endpoint-level markers.

Markers are plain objects; a marker's capability is its base class.
Lookups on ``EndpointMetadata`` test capabilities with ``isinstance``,
so a single object may expose several capabilities.
"""

from typing import Any, Iterable, Iterator, List, Optional, Sequence, Tuple, Type, TypeVar, get_origin


T = TypeVar("T")

VOID = type(None)


def is_void(tp: Any) -> bool:
    """True for the no-body marker (``None`` or ``NoneType``)."""
    return tp is None or tp is VOID


def is_class(tp: Any) -> bool:
    """True for plain classes; parameterized generics such as ``list[int]`` are not classes."""
    return isinstance(tp, type) and get_origin(tp) is None


# ============================================================================
# Parameter markers
# ============================================================================

class ParameterMarker:
    """Base class for markers placed in ``Annotated[T, ...]`` parameter hints."""

    def __repr__(self) -> str:
        fields = ", ".join(f"{k}={v!r}" for k, v in vars(self).items() if v not in (None, False))
        return f"{type(self).__name__}({fields})"

    def __eq__(self, other: Any) -> bool:
        return type(self) is type(other) and vars(self) == vars(other)

    def __hash__(self) -> int:
        return hash((type(self), tuple(sorted(vars(self).items()))))


class FromRoute(ParameterMarker):
    """Bind the parameter from a route segment."""

    def __init__(self, name: Optional[str] = None):
        self.name = name


class FromQuery(ParameterMarker):
    """Bind the parameter from the query string."""

    def __init__(self, name: Optional[str] = None):
        self.name = name


class FromHeader(ParameterMarker):
    """Bind the parameter from a request header."""

    def __init__(self, name: Optional[str] = None):
        self.name = name


class FromBody(ParameterMarker):
    """
    Bind the parameter from the request body.

    Args:
        allow_empty: Accept requests with no body (makes the body optional)
    """

    def __init__(self, allow_empty: bool = False):
        self.allow_empty = allow_empty


class FromForm(ParameterMarker):
    """Bind the parameter from form data."""

    def __init__(self, name: Optional[str] = None):
        self.name = name


class FromServices(ParameterMarker):
    """Resolve the parameter from the service container."""


# ============================================================================
# Endpoint markers
# ============================================================================

class EndpointMarker:
    """Base class for endpoint-level metadata."""

    def __repr__(self) -> str:
        fields = ", ".join(f"{k}={v!r}" for k, v in vars(self).items())
        return f"{type(self).__name__}({fields})"

    def __eq__(self, other: Any) -> bool:
        return type(self) is type(other) and vars(self) == vars(other)

    def __hash__(self) -> int:
        return hash(type(self))


class HttpMethodMetadata(EndpointMarker):
    """HTTP methods the endpoint answers to."""

    def __init__(self, methods: Iterable[str]):
        if isinstance(methods, str):
            methods = [methods]
        self.methods: Tuple[str, ...] = tuple(m.upper() for m in methods)


class ExcludeFromDescription(EndpointMarker):
    """Keep the endpoint out of the API description."""

    def __init__(self, exclude_from_description: bool = True):
        self.exclude_from_description = exclude_from_description


class EndpointName(EndpointMarker):
    """Unique endpoint name, used as the operation id."""

    def __init__(self, name: str):
        self.name = name


class EndpointSummary(EndpointMarker):
    def __init__(self, summary: str):
        self.summary = summary


class EndpointDescription(EndpointMarker):
    def __init__(self, description: str):
        self.description = description


class Tags(EndpointMarker):
    """Grouping tags for the endpoint."""

    def __init__(self, *tags: str):
        self.tags: Tuple[str, ...] = tuple(tags)


class Accepts(EndpointMarker):
    """
    Content types (and optionally the request type) the endpoint accepts.

    Args:
        content_types: Accepted request content types
        request_type: Type of the request payload, overrides the body parameter type
        is_optional: Whether the body may be omitted
    """

    def __init__(
        self,
        *content_types: str,
        request_type: Optional[type] = None,
        is_optional: bool = False,
    ):
        self.content_types: Tuple[str, ...] = tuple(content_types) or ("application/json",)
        self.request_type = request_type
        self.is_optional = is_optional


class ProducesResponseType(EndpointMarker):
    """
    Explicit response annotation.

    A ``type`` of ``None`` means "no explicit type"; for 200 and 201 the
    handler's return type is used instead.
    """

    def __init__(
        self,
        status_code: int = 200,
        type: Optional[Any] = None,
        content_types: Sequence[str] = (),
    ):
        self.status_code = status_code
        self.type = type
        self.content_types: Tuple[str, ...] = tuple(content_types)


class ResponseTypeProvider(EndpointMarker):
    """
    Provider-style response metadata.

    Subclasses report a status code and a type, and may contribute the
    content types of the response.
    """

    status_code: int = 200
    type: Optional[Any] = None

    def content_types(self) -> Tuple[str, ...]:
        return ()


class DefaultResponseProvider(ResponseTypeProvider):
    """Catch-all provider describing the default error response."""

    def __init__(self, status_code: int = 500, type: Optional[Any] = None):
        self.status_code = status_code
        self.type = type


class ProducesErrorResponseType(EndpointMarker):
    """Default error type used for 4xx and catch-all providers without an explicit type."""

    def __init__(self, type: Any):
        self.type = type


# ============================================================================
# Metadata collection
# ============================================================================

class EndpointMetadata:
    """
    Ordered, immutable collection of endpoint markers.

    Two retrieval modes:
    - ``get_last(cls)``: most recently attached match wins
    - ``get_ordered(cls)``: every match, in declaration order
    """

    __slots__ = ("_items",)

    def __init__(self, items: Iterable[Any] = ()):
        self._items: Tuple[Any, ...] = tuple(items)

    @classmethod
    def from_callable(cls, func: Any) -> "EndpointMetadata":
        """Collect markers attached by the decorators in ``apidesc.endpoint.decorators``."""
        target = getattr(func, "__func__", func)
        return cls(getattr(target, "__endpoint_metadata__", ()))

    def get_last(self, capability: Type[T]) -> Optional[T]:
        for item in reversed(self._items):
            if isinstance(item, capability):
                return item
        return None

    def get_ordered(self, capability: Type[T]) -> List[T]:
        return [item for item in self._items if isinstance(item, capability)]

    def with_items(self, *items: Any) -> "EndpointMetadata":
        return EndpointMetadata(self._items + items)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"EndpointMetadata({list(self._items)!r})"
