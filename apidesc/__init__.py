"""
apidesc - static OpenAPI operation inference for HTTP handlers.

Builds OpenAPI 3.x Operation descriptions from a handler's signature,
its endpoint metadata and its route template, without running it.

Example:
    from apidesc import GET, OperationGenerator, produces

    @GET("/items/{id}")
    @produces(404, ProblemDetails)
    async def get_item(id: int) -> Widget:
        ...

    operation = OperationGenerator().describe(get_item)
    operation.to_dict()
"""

__version__ = "0.1.0"

from .config import ConfigLoader, DescriberConfig
from .di import ServiceCollection, ServiceRegistry
from .endpoint import *  # noqa: F401,F403
from .endpoint import __all__ as _endpoint_all
from .faults import (
    DescriptionFault,
    DuplicateResponseStatusFault,
    Fault,
    FaultDomain,
    InvalidRoutePatternFault,
    Severity,
)
from .openapi import (
    CapabilityCache,
    Endpoint,
    MediaType,
    Operation,
    OperationGenerator,
    Parameter,
    ParameterLocation,
    RequestBody,
    Response,
    SchemaType,
    Tag,
    TypeSchemaResolver,
)
from .patterns import RoutePattern

__all__ = [
    "__version__",
    "ConfigLoader", "DescriberConfig",
    "ServiceCollection", "ServiceRegistry",
    "Fault", "FaultDomain", "Severity",
    "DescriptionFault", "DuplicateResponseStatusFault", "InvalidRoutePatternFault",
    "CapabilityCache", "Endpoint", "OperationGenerator", "TypeSchemaResolver",
    "Operation", "Parameter", "ParameterLocation", "RequestBody", "Response",
    "MediaType", "SchemaType", "Tag",
    "RoutePattern",
] + list(_endpoint_all)
