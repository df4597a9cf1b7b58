"""
Parameter classification.

Decides, from static signature shape and markers alone, whether a handler
parameter is a path/query/header value, part of the request body or form,
or an infrastructure value supplied by the framework.

Rules are evaluated first-match-wins:

1. ``FromRoute``                              → path
2. ``FromQuery``                              → query
3. ``FromHeader``                             → header
4. ``FromBody``                               → body
5. ``FromForm``                               → body (form)
6. framework/service types, ``FromServices``  → ignored
7. ``str`` or parseable type                  → path if named in the route, else query
8. file upload types                          → body (form)
9. collections of parseable values, when body inference is disabled → query
10. anything else                             → body
"""

import collections.abc
from typing import Any, Iterable, NamedTuple, Optional, get_args, get_origin

from ..di import ServiceRegistry
from ..endpoint.context import (
    FILE_TYPES,
    FRAMEWORK_TYPES,
    StringValues,
    UploadFile,
)
from ..endpoint.metadata import (
    FromBody,
    FromForm,
    FromHeader,
    FromQuery,
    FromRoute,
    FromServices,
    is_class,
)
from ..endpoint.signature import Nullability, ParameterDescriptor, unwrap_optional
from ..patterns import RoutePattern
from .capabilities import CapabilityCache
from .models import ParameterLocation


_PRIMITIVE_TYPES = (int, float, bool, str)

_COLLECTION_ORIGINS = (
    list, set, frozenset, tuple,
    collections.abc.Sequence, collections.abc.MutableSequence,
    collections.abc.Set, collections.abc.MutableSet,
    collections.abc.Iterable, collections.abc.Collection,
)


class Classification(NamedTuple):
    """Outcome for one parameter: body/form candidacy and location (never both)."""
    is_body_or_form: bool
    location: Optional[ParameterLocation]

    @property
    def is_ignored(self) -> bool:
        return not self.is_body_or_form and self.location is None


BODY = Classification(True, None)
IGNORED = Classification(False, None)
PATH = Classification(False, ParameterLocation.PATH)
QUERY = Classification(False, ParameterLocation.QUERY)
HEADER = Classification(False, ParameterLocation.HEADER)


class ParameterClassifier:
    """
    Classifies handler parameters.

    Args:
        capabilities: Shared capability cache
        service_registry: Registry consulted for injected services
        infrastructure_types: Extra types supplied by the host framework
    """

    def __init__(
        self,
        capabilities: Optional[CapabilityCache] = None,
        service_registry: Optional[ServiceRegistry] = None,
        infrastructure_types: Iterable[type] = (),
    ):
        self.capabilities = capabilities or CapabilityCache()
        self.service_registry = service_registry
        self.infrastructure_types = FRAMEWORK_TYPES + tuple(infrastructure_types)

    def classify(
        self,
        parameter: ParameterDescriptor,
        pattern: RoutePattern,
        disable_inferred_body: bool,
    ) -> Classification:
        if parameter.has(FromRoute):
            return PATH
        if parameter.has(FromQuery):
            return QUERY
        if parameter.has(FromHeader):
            return HEADER
        if parameter.has(FromBody):
            return BODY
        if parameter.has(FromForm):
            return BODY
        if self.is_infrastructure(parameter):
            return IGNORED

        tp = parameter.type
        if tp is str or self.capabilities.has_parse_capability(tp):
            if parameter.name and pattern.has_path_parameter(parameter.name):
                return PATH
            return QUERY
        if is_file_type(tp):
            return BODY
        if disable_inferred_body and self.is_query_collection(tp):
            return QUERY
        return BODY

    def is_infrastructure(self, parameter: ParameterDescriptor) -> bool:
        if parameter.has(FromServices):
            return True
        tp = parameter.type
        if is_class(tp) and issubclass(tp, self.infrastructure_types):
            return True
        if self.capabilities.has_async_bind_capability(parameter):
            return True
        return self.service_registry is not None and self.service_registry.is_service(tp)

    def is_query_collection(self, tp: Any) -> bool:
        """Arrays of parseable elements, string arrays and multi-value strings."""
        if tp is StringValues:
            return True
        element = collection_element_type(tp)
        if element is None:
            return False
        element, _ = unwrap_optional(element)
        return element is str or self.capabilities.has_parse_capability(element)

    def display_type(self, parameter: ParameterDescriptor) -> Any:
        """
        Type used for the parameter's schema.

        String-bound values of non-primitive parseable types are shown as
        strings; primitives keep their own type, nullable ones included.
        """
        tp = parameter.type
        if not (tp is str or self.capabilities.has_parse_capability(tp)):
            return tp
        if tp in _PRIMITIVE_TYPES:
            if parameter.nullability == Nullability.NULLABLE:
                return Optional[tp]
            return tp
        return str


def is_file_type(tp: Any) -> bool:
    if is_class(tp) and issubclass(tp, FILE_TYPES):
        return True
    return collection_element_type(tp) is UploadFile


def collection_element_type(tp: Any) -> Optional[Any]:
    """Element type of a homogeneous collection annotation, else None."""
    origin = get_origin(tp)
    if origin not in _COLLECTION_ORIGINS:
        return None
    args = get_args(tp)
    if not args:
        return None
    if origin is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            return args[0]
        return None
    return args[0]
