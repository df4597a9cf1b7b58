"""
Response resolution.

Merges explicit response annotations, provider-style response metadata and
the handler's return type into one status → content map:

1. Unwrap one awaitable level from the return type; a ``Result`` return
   means the shape is not statically known (void).
2. Record every ``ProducesResponseType`` in declaration order.
3. Record every ``ResponseTypeProvider`` in declaration order, falling
   back to the default error type for 4xx and catch-all providers.
4. Without a recorded 2xx entry, the return type becomes the 200
   response: always when nothing was recorded, otherwise only when the
   return type is not void.

A status code recorded twice raises ``DuplicateResponseStatusFault``.
"""

import asyncio
import collections.abc
from typing import Any, Dict, NamedTuple, Optional, Tuple, get_args, get_origin

from ..endpoint.context import Result
from ..endpoint.metadata import (
    DefaultResponseProvider,
    EndpointMetadata,
    ProducesErrorResponseType,
    ProducesResponseType,
    ResponseTypeProvider,
    VOID,
    is_class,
    is_void,
)
from ..endpoint.signature import unwrap_optional
from ..faults import DuplicateResponseStatusFault
from .models import MediaType, Response, frozen_map
from .schema import SchemaResolver


JSON_CONTENT_TYPE = "application/json"
TEXT_CONTENT_TYPE = "text/plain"

_AWAITABLE_ORIGINS = (
    collections.abc.Awaitable,
    collections.abc.Coroutine,
    asyncio.Future,
    asyncio.Task,
)

_RETURN_TYPE_STATUSES = (200, 201)


class ResponseEntry(NamedTuple):
    type: Any
    content_types: Tuple[str, ...]
    source: Any


def logical_response_type(return_type: Any) -> Any:
    """Return type after unwrapping one awaitable level and result markers."""
    tp = return_type
    if tp in _AWAITABLE_ORIGINS:
        return VOID
    if get_origin(tp) in _AWAITABLE_ORIGINS:
        args = get_args(tp)
        tp = args[-1] if args else VOID
    if is_void(tp):
        return VOID
    if is_class(tp) and issubclass(tp, Result):
        return VOID
    return tp


def default_content_types(tp: Any) -> Tuple[str, ...]:
    if is_void(tp):
        return ()
    tp, _ = unwrap_optional(tp)
    if tp is str:
        return (TEXT_CONTENT_TYPE,)
    return (JSON_CONTENT_TYPE,)


class ResponseResolver:

    def __init__(self, schema_resolver: SchemaResolver):
        self.schema_resolver = schema_resolver

    def resolve(self, return_type: Any, metadata: EndpointMetadata) -> Dict[int, Response]:
        entries = self.collect(return_type, metadata)
        return {
            status: Response(content=frozen_map(self._content(entry)))
            for status, entry in entries.items()
        }

    def collect(self, return_type: Any, metadata: EndpointMetadata) -> Dict[int, ResponseEntry]:
        response_type = logical_response_type(return_type)

        error_metadata = metadata.get_last(ProducesErrorResponseType)
        default_error_type = error_metadata.type if error_metadata is not None else None

        entries: Dict[int, ResponseEntry] = {}

        for annotation in metadata.get_ordered(ProducesResponseType):
            status = annotation.status_code
            tp = annotation.type
            if is_void(tp):
                # 200/201 by rule, every other status by fallback
                tp = response_type
            _record(entries, status, tp, annotation.content_types, annotation)

        for provider in metadata.get_ordered(ResponseTypeProvider):
            status = provider.status_code
            tp = provider.type
            if is_void(tp):
                if status in _RETURN_TYPE_STATUSES:
                    tp = response_type
                elif 400 <= status < 500:
                    tp = default_error_type if default_error_type is not None else tp
                elif isinstance(provider, DefaultResponseProvider):
                    tp = default_error_type
            if is_void(tp):
                tp = response_type
            _record(entries, status, tp, tuple(provider.content_types()), provider)

        has_success = any(200 <= status < 300 for status in entries)
        if not entries or (not has_success and not is_void(response_type)):
            # The return type is the 200 response unless a 2xx was declared
            inferred = ResponseEntry(response_type, default_content_types(response_type), None)
            entries = {200: inferred, **entries}

        return entries

    def _content(self, entry: ResponseEntry) -> Dict[str, MediaType]:
        if not entry.content_types:
            return {}
        schema = self.schema_resolver.schema_type_for(entry.type)
        return {content_type: MediaType(schema) for content_type in entry.content_types}


def _record(
    entries: Dict[int, ResponseEntry],
    status: int,
    tp: Any,
    content_types: Tuple[str, ...],
    source: Any,
) -> None:
    existing: Optional[ResponseEntry] = entries.get(status)
    if existing is not None:
        raise DuplicateResponseStatusFault(status, existing.source, source)
    entries[status] = ResponseEntry(tp, tuple(content_types) or default_content_types(tp), source)
