"""
OpenAPI operation inference.

Components, leaf-first:
- ParameterClassifier: path/query/header/body/ignored per parameter
- RequestBodyResolver: the operation's request body
- ResponseResolver: status code → content map
- TagResolver: grouping tags
- OperationGenerator: applicability checks and assembly
"""

from .capabilities import CacheStats, CapabilityCache
from .classifier import Classification, ParameterClassifier
from .generator import Endpoint, OperationGenerator, should_disable_inferred_body
from .models import (
    MediaType,
    Operation,
    Parameter,
    ParameterLocation,
    RequestBody,
    Response,
    Tag,
)
from .request_body import RequestBodyResolver
from .responses import ResponseResolver, logical_response_type
from .schema import SchemaResolver, SchemaType, TypeSchemaResolver
from .tags import TagResolver

__all__ = [
    # Generation
    "OperationGenerator",
    "Endpoint",
    "should_disable_inferred_body",

    # Resolvers
    "ParameterClassifier",
    "Classification",
    "RequestBodyResolver",
    "ResponseResolver",
    "logical_response_type",
    "TagResolver",

    # Collaborators
    "CapabilityCache",
    "CacheStats",
    "SchemaResolver",
    "SchemaType",
    "TypeSchemaResolver",

    # Models
    "Operation",
    "Parameter",
    "ParameterLocation",
    "RequestBody",
    "Response",
    "MediaType",
    "Tag",
]
