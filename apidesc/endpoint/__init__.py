"""
Endpoint inputs for description.

- Markers: declarative capabilities on handlers and parameters
- EndpointMetadata: ordered marker collection (last-wins / all-ordered)
- HandlerSignature: static descriptor of a handler's signature
- Decorators: attach markers to handler functions

Example:
    from typing import Annotated
    from apidesc.endpoint import GET, FromHeader, produces

    @GET("/items/{id}")
    @produces(404, ProblemDetails)
    async def get_item(id: int, etag: Annotated[str, FromHeader()]) -> Widget:
        ...
"""

from .context import (
    CancellationToken,
    HttpResponse,
    Identity,
    Request,
    RequestCtx,
    Result,
    StringValues,
    UploadFile,
    UploadFileCollection,
)
from .metadata import (
    VOID,
    Accepts,
    DefaultResponseProvider,
    EndpointDescription,
    EndpointMarker,
    EndpointMetadata,
    EndpointName,
    EndpointSummary,
    ExcludeFromDescription,
    FromBody,
    FromForm,
    FromHeader,
    FromQuery,
    FromRoute,
    FromServices,
    HttpMethodMetadata,
    ParameterMarker,
    ProducesErrorResponseType,
    ProducesResponseType,
    ResponseTypeProvider,
    Tags,
    is_void,
)
from .signature import (
    HandlerSignature,
    Nullability,
    ParameterDescriptor,
)
from .decorators import (
    GET, POST, PUT, PATCH, DELETE,
    HEAD, OPTIONS, TRACE, CONNECT,
    route,
    accepts,
    description,
    exclude_from_description,
    with_metadata,
    name,
    produces,
    produces_error,
    summary,
    tags,
)

__all__ = [
    # Framework types
    "CancellationToken", "HttpResponse", "Identity", "Request", "RequestCtx",
    "Result", "StringValues", "UploadFile", "UploadFileCollection",

    # Markers
    "VOID", "is_void",
    "ParameterMarker", "FromRoute", "FromQuery", "FromHeader", "FromBody",
    "FromForm", "FromServices",
    "EndpointMarker", "HttpMethodMetadata", "ExcludeFromDescription",
    "EndpointName", "EndpointSummary", "EndpointDescription", "Tags",
    "Accepts", "ProducesResponseType", "ResponseTypeProvider",
    "DefaultResponseProvider", "ProducesErrorResponseType",
    "EndpointMetadata",

    # Signature
    "HandlerSignature", "ParameterDescriptor", "Nullability",

    # Decorators
    "GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS", "TRACE", "CONNECT",
    "route", "accepts", "description", "exclude_from_description", "with_metadata",
    "name", "produces", "produces_error", "summary", "tags",
]
