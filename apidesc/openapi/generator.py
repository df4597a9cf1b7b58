"""
Operation generation.

Synthesizes one OpenAPI Operation per endpoint from its handler signature,
endpoint metadata and route template, with no runtime request data.

An endpoint is describable only when its metadata names exactly one HTTP
method and it is not excluded from the description. Everything else about
the operation (tags, parameters, request body, responses) is delegated to
the resolvers in this package.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Union

from ..config import DescriberConfig
from ..di import ServiceRegistry
from ..endpoint.metadata import (
    Accepts,
    EndpointDescription,
    EndpointMetadata,
    EndpointName,
    EndpointSummary,
    ExcludeFromDescription,
    HttpMethodMetadata,
)
from ..endpoint.signature import HandlerSignature, ParameterDescriptor
from ..patterns import RoutePattern
from .capabilities import CapabilityCache
from .classifier import ParameterClassifier
from .models import MediaType, Operation, Parameter, frozen_map
from .request_body import RequestBodyResolver
from .responses import ResponseResolver
from .schema import SchemaResolver, TypeSchemaResolver
from .tags import TagResolver

logger = logging.getLogger("apidesc.openapi.generator")


# GET, DELETE, HEAD, OPTIONS, TRACE and CONNECT normally carry no body
_BODYLESS_METHODS = frozenset({"GET", "DELETE", "HEAD", "OPTIONS", "TRACE", "CONNECT"})


def should_disable_inferred_body(method: str) -> bool:
    return method.upper() in _BODYLESS_METHODS


@dataclass(frozen=True)
class Endpoint:
    """
    A registered endpoint awaiting description.

    Attributes:
        handler: The handler callable
        pattern: Route template or parsed pattern; read from the handler's
            route decorator when omitted
        metadata: Endpoint metadata; read from the handler when omitted
    """
    handler: Any
    pattern: Union[str, RoutePattern, None] = None
    metadata: Optional[EndpointMetadata] = None


class OperationGenerator:
    """
    Builds Operation values for endpoints.

    Usage::

        generator = OperationGenerator(config=DescriberConfig(application_name="Shop"))
        operation = generator.get_operation(signature, metadata, RoutePattern.parse("/items/{id}"))

    Or straight from a decorated handler::

        operation = generator.describe(get_item)

    The generator holds no per-endpoint state; one instance may describe
    endpoints from several threads at once.
    """

    def __init__(
        self,
        schema_resolver: Optional[SchemaResolver] = None,
        capability_cache: Optional[CapabilityCache] = None,
        service_registry: Optional[ServiceRegistry] = None,
        config: Optional[DescriberConfig] = None,
    ):
        self.config = config or DescriberConfig()
        self.schema_resolver = schema_resolver or TypeSchemaResolver()
        self.capability_cache = capability_cache or CapabilityCache()
        self.classifier = ParameterClassifier(
            self.capability_cache,
            service_registry,
            self.config.infrastructure_types,
        )
        self.request_bodies = RequestBodyResolver(self.classifier, self.schema_resolver)
        self.responses = ResponseResolver(self.schema_resolver)
        self.tags = TagResolver(self.config.application_name)

    # ── Entry points ─────────────────────────────────────────────────────

    def get_operation(
        self,
        signature: HandlerSignature,
        metadata: EndpointMetadata,
        pattern: RoutePattern,
    ) -> Optional[Operation]:
        """Describe one endpoint, or return None when it is not describable."""
        method_metadata = metadata.get_last(HttpMethodMetadata)
        if method_metadata is None or len(method_metadata.methods) != 1:
            logger.debug(
                "Skipping %s %s: expected exactly one HTTP method",
                signature.name or "<handler>", pattern,
            )
            return None

        exclusion = metadata.get_last(ExcludeFromDescription)
        if exclusion is not None and exclusion.exclude_from_description:
            logger.debug("Skipping %s %s: excluded from description", signature.name or "<handler>", pattern)
            return None

        method = method_metadata.methods[0]
        operation = self._build_operation(method, signature, metadata, pattern)
        logger.debug(
            "Described %s %s (%d parameters, %d responses)",
            method, pattern, len(operation.parameters), len(operation.responses),
        )
        return operation

    def describe(
        self,
        handler: Any,
        pattern: Union[str, RoutePattern, None] = None,
        metadata: Optional[EndpointMetadata] = None,
    ) -> Optional[Operation]:
        """Describe a handler using the markers and route template its decorators attached."""
        signature = HandlerSignature.from_callable(handler)
        if metadata is None:
            metadata = EndpointMetadata.from_callable(handler)
        if pattern is None:
            target = getattr(handler, "__func__", handler)
            pattern = getattr(target, "__route_template__", "/")
        if isinstance(pattern, str):
            pattern = RoutePattern.parse(pattern)
        return self.get_operation(signature, metadata, pattern)

    def describe_all(
        self,
        endpoints: Iterable[Endpoint],
        max_workers: Optional[int] = None,
        skip_undescribable: bool = False,
    ) -> List[Optional[Operation]]:
        """
        Describe many endpoints, in parallel when ``max_workers`` > 1.

        Results keep input order. The first fault raised by any endpoint
        propagates and aborts the batch.
        """
        endpoints = list(endpoints)
        workers = max_workers if max_workers is not None else self.config.max_workers

        def run(endpoint: Endpoint) -> Optional[Operation]:
            return self.describe(endpoint.handler, endpoint.pattern, endpoint.metadata)

        if workers > 1 and len(endpoints) > 1:
            with ThreadPoolExecutor(max_workers=workers) as pool:
                results = list(pool.map(run, endpoints))
        else:
            results = [run(endpoint) for endpoint in endpoints]

        if skip_undescribable:
            return [op for op in results if op is not None]
        return results

    # ── Assembly ─────────────────────────────────────────────────────────

    def _build_operation(
        self,
        method: str,
        signature: HandlerSignature,
        metadata: EndpointMetadata,
        pattern: RoutePattern,
    ) -> Operation:
        disable_inferred_body = should_disable_inferred_body(method)

        name = metadata.get_last(EndpointName)
        summary = metadata.get_last(EndpointSummary)
        description = metadata.get_last(EndpointDescription)

        return Operation(
            operation_id=name.name if name is not None else None,
            summary=summary.summary if summary is not None else None,
            description=description.description if description is not None else None,
            tags=self.tags.resolve(signature, metadata),
            parameters=self._build_parameters(signature, metadata, pattern, disable_inferred_body),
            request_body=self.request_bodies.resolve(signature, metadata, pattern),
            responses=frozen_map(self.responses.resolve(signature.return_type, metadata)),
        )

    def _build_parameters(
        self,
        signature: HandlerSignature,
        metadata: EndpointMetadata,
        pattern: RoutePattern,
        disable_inferred_body: bool,
    ) -> tuple:
        accepts = metadata.get_last(Accepts)
        content = frozen_map(
            {content_type: MediaType() for content_type in accepts.content_types}
            if accepts is not None else {}
        )

        parameters = []
        for parameter in signature.parameters:
            classification = self.classifier.classify(parameter, pattern, disable_inferred_body)
            # Framework and service values are not part of the API surface
            if classification.is_ignored:
                continue
            parameters.append(self._build_parameter(parameter, classification.location, content))
        return tuple(parameters)

    def _build_parameter(self, parameter: ParameterDescriptor, location, content) -> Parameter:
        return Parameter(
            name=parameter.name,
            location=location,
            required=not parameter.is_optional,
            schema=self.schema_resolver.schema_type_for(self.classifier.display_type(parameter)),
            content=content,
        )
