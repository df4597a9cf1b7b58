"""
Operation document model.

Immutable values shaped like OpenAPI 3.x Operation fragments. ``to_dict``
projects them onto plain dictionaries for downstream document assembly;
nothing here encodes bytes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from .schema import SchemaType


class ParameterLocation(str, Enum):
    PATH = "path"
    QUERY = "query"
    HEADER = "header"


def frozen_map(items: Optional[Mapping] = None) -> Mapping:
    """Read-only copy of a mapping, preserving insertion order."""
    return MappingProxyType(dict(items or {}))


@dataclass(frozen=True)
class Tag:
    name: str

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name}


@dataclass(frozen=True)
class MediaType:
    """Content entry; ``schema`` is None for parameter content declared by accepts metadata."""
    schema: Optional[SchemaType] = None

    def to_dict(self) -> Dict[str, Any]:
        if self.schema is None:
            return {}
        return {"schema": self.schema.to_dict()}


def _content_to_dict(content: Mapping[str, MediaType]) -> Dict[str, Any]:
    return {content_type: media.to_dict() for content_type, media in content.items()}


@dataclass(frozen=True)
class Parameter:
    """
    A described handler parameter.

    Attributes:
        name: Parameter name
        location: PATH, QUERY or HEADER; None for body/form parameters
        required: Whether the parameter must be supplied
        schema: Schema handle of the parameter's display type
        content: Content type to media entry (from accepts metadata)
    """
    name: str
    location: Optional[ParameterLocation]
    required: bool
    schema: SchemaType
    content: Mapping[str, MediaType] = field(default_factory=frozen_map)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"name": self.name}
        if self.location is not None:
            data["in"] = self.location.value
        data["required"] = self.required
        data["schema"] = self.schema.to_dict()
        if self.content:
            data["content"] = _content_to_dict(self.content)
        return data


@dataclass(frozen=True)
class RequestBody:
    required: bool
    content: Mapping[str, MediaType] = field(default_factory=frozen_map)

    def to_dict(self) -> Dict[str, Any]:
        return {"required": self.required, "content": _content_to_dict(self.content)}


@dataclass(frozen=True)
class Response:
    content: Mapping[str, MediaType] = field(default_factory=frozen_map)

    def to_dict(self) -> Dict[str, Any]:
        return {"content": _content_to_dict(self.content)}


@dataclass(frozen=True)
class Operation:
    """
    One HTTP-verb + path API description unit.

    Attributes:
        operation_id: Explicit endpoint name, if any
        summary: Explicit summary, if any
        description: Explicit description, if any
        tags: Grouping tags
        parameters: Described parameters, in declaration order
        request_body: Request body, if the endpoint takes one
        responses: Status code to response, in resolution order
    """
    operation_id: Optional[str] = None
    summary: Optional[str] = None
    description: Optional[str] = None
    tags: Tuple[Tag, ...] = ()
    parameters: Tuple[Parameter, ...] = ()
    request_body: Optional[RequestBody] = None
    responses: Mapping[int, Response] = field(default_factory=frozen_map)

    def to_dict(self) -> Dict[str, Any]:
        """Project onto an OpenAPI Operation object fragment."""
        data: Dict[str, Any] = {}
        if self.operation_id is not None:
            data["operationId"] = self.operation_id
        if self.summary is not None:
            data["summary"] = self.summary
        if self.description is not None:
            data["description"] = self.description
        data["tags"] = [tag.to_dict() for tag in self.tags]
        data["parameters"] = [param.to_dict() for param in self.parameters]
        if self.request_body is not None:
            data["requestBody"] = self.request_body.to_dict()
        data["responses"] = {
            str(status): response.to_dict() for status, response in self.responses.items()
        }
        return data
