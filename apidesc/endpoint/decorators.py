"""
Endpoint Decorators

HTTP method decorators and metadata decorators for handlers.
Attach markers without import-time side effects; the description
engine reads them back through ``EndpointMetadata.from_callable``.
"""

from typing import Any, Callable, List, Optional, Sequence, TypeVar, Union

from .metadata import (
    Accepts,
    EndpointDescription,
    EndpointName,
    EndpointSummary,
    ExcludeFromDescription,
    HttpMethodMetadata,
    ProducesErrorResponseType,
    ProducesResponseType,
    Tags,
)


F = TypeVar("F", bound=Callable[..., Any])


def _attach(func: F, *items: Any) -> F:
    target = getattr(func, "__func__", func)
    if "__endpoint_metadata__" not in vars(target):
        target.__endpoint_metadata__ = []
    target.__endpoint_metadata__.extend(items)
    return func


class RouteDecorator:
    """
    Base route decorator.

    Records the HTTP method and route template, plus any optional
    name/summary/description/tags/exclusion markers.
    """

    method: Optional[str] = None

    def __init__(
        self,
        path: str = "/",
        *,
        name: Optional[str] = None,
        summary: Optional[str] = None,
        description: Optional[str] = None,
        tags: Optional[List[str]] = None,
        exclude: bool = False,
    ):
        """
        Initialize route decorator.

        Args:
            path: Route template (e.g., "/items/{id}")
            name: Endpoint name (operation id)
            summary: Operation summary
            description: Operation description
            tags: Grouping tags
            exclude: Keep the endpoint out of the description
        """
        self.path = path
        self.name = name
        self.summary = summary
        self.description = description
        self.tags = tags
        self.exclude = exclude

    def markers(self, methods: Optional[Sequence[str]] = None) -> List[Any]:
        items: List[Any] = [HttpMethodMetadata(list(methods or (self.method,)))]
        if self.name is not None:
            items.append(EndpointName(self.name))
        if self.summary is not None:
            items.append(EndpointSummary(self.summary))
        if self.description is not None:
            items.append(EndpointDescription(self.description))
        if self.tags:
            items.append(Tags(*self.tags))
        if self.exclude:
            items.append(ExcludeFromDescription())
        return items

    def __call__(self, func: F) -> F:
        target = getattr(func, "__func__", func)
        target.__route_template__ = self.path
        return _attach(func, *self.markers())


class GET(RouteDecorator):
    """GET request decorator."""
    method = "GET"


class POST(RouteDecorator):
    """POST request decorator."""
    method = "POST"


class PUT(RouteDecorator):
    method = "PUT"


class PATCH(RouteDecorator):
    method = "PATCH"


class DELETE(RouteDecorator):
    method = "DELETE"


class HEAD(RouteDecorator):
    method = "HEAD"


class OPTIONS(RouteDecorator):
    method = "OPTIONS"


class TRACE(RouteDecorator):
    method = "TRACE"


class CONNECT(RouteDecorator):
    method = "CONNECT"


def route(methods: Union[str, Sequence[str]], path: str = "/", **kwargs) -> Callable[[F], F]:
    """
    Generic route decorator.

    Several methods produce a single HttpMethodMetadata listing all of
    them; such endpoints are not describable as one operation.

    Example:
        @route(["GET", "HEAD"], "/items")
        async def items():
            ...
    """
    method_list = [methods] if isinstance(methods, str) else list(methods)

    def decorator(func: F) -> F:
        getattr(func, "__func__", func).__route_template__ = path
        return _attach(func, *RouteDecorator(path, **kwargs).markers(methods=method_list))

    return decorator


# ============================================================================
# Metadata decorators
# ============================================================================

def with_metadata(*items: Any) -> Callable[[F], F]:
    """Attach arbitrary marker objects (e.g. custom ResponseTypeProvider instances)."""

    def decorator(func: F) -> F:
        return _attach(func, *items)

    return decorator


def name(endpoint_name: str) -> Callable[[F], F]:
    return with_metadata(EndpointName(endpoint_name))


def summary(text: str) -> Callable[[F], F]:
    return with_metadata(EndpointSummary(text))


def description(text: str) -> Callable[[F], F]:
    return with_metadata(EndpointDescription(text))


def tags(*names: str) -> Callable[[F], F]:
    return with_metadata(Tags(*names))


def accepts(
    *content_types: str,
    request_type: Optional[type] = None,
    is_optional: bool = False,
) -> Callable[[F], F]:
    return with_metadata(Accepts(*content_types, request_type=request_type, is_optional=is_optional))


def produces(
    status_code: int = 200,
    response_type: Optional[Any] = None,
    *content_types: str,
) -> Callable[[F], F]:
    """
    Declare a response.

    Example:
        @produces(404, ProblemDetails)
        @produces(200, Widget, "application/json", "application/xml")
    """
    return with_metadata(ProducesResponseType(status_code, response_type, content_types))


def produces_error(error_type: Any) -> Callable[[F], F]:
    return with_metadata(ProducesErrorResponseType(error_type))


def exclude_from_description(func: F) -> F:
    return _attach(func, ExcludeFromDescription())
