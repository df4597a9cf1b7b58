"""
Schema type handles.

The description engine treats schema resolution as a black box: it asks a
``SchemaResolver`` for the handle of a type and stores whatever comes back.
``TypeSchemaResolver`` is the default resolver: a shallow Python type to
OpenAPI type mapping that never recurses into class fields.
"""

from __future__ import annotations

import collections.abc
import datetime
import decimal
import enum
import uuid
from dataclasses import dataclass
from typing import (
    Annotated,
    Any,
    Dict,
    Optional,
    Protocol,
    Tuple,
    get_args,
    get_origin,
    runtime_checkable,
)

from ..endpoint.context import StringValues, UploadFile, UploadFileCollection
from ..endpoint.metadata import is_class, is_void
from ..endpoint.signature import unwrap_optional


@dataclass(frozen=True)
class SchemaType:
    """
    Opaque handle to a JSON-schema-shaped type description.

    Attributes:
        type: OpenAPI primitive type ("string", "integer", ...), None for void
        format: OpenAPI format qualifier
        nullable: Whether ``null`` is accepted
        items: Element handle for arrays
        ref: Name of a component schema for complex types
    """
    type: Optional[str] = None
    format: Optional[str] = None
    nullable: bool = False
    items: Optional["SchemaType"] = None
    ref: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        schema: Dict[str, Any] = {}
        if self.ref:
            schema["$ref"] = f"#/components/schemas/{self.ref}"
            return schema
        if self.type:
            schema["type"] = self.type
        if self.format:
            schema["format"] = self.format
        if self.items is not None:
            schema["items"] = self.items.to_dict()
        if self.nullable:
            schema["nullable"] = True
        return schema


@runtime_checkable
class SchemaResolver(Protocol):
    def schema_type_for(self, tp: Any) -> SchemaType:
        ...


# ─── Type → schema mapping ──────────────────────────────────────────────────

_PYTHON_TYPE_MAP: Dict[type, Tuple[str, Optional[str]]] = {
    str: ("string", None),
    int: ("integer", "int64"),
    float: ("number", "double"),
    bool: ("boolean", None),
    bytes: ("string", "binary"),
    decimal.Decimal: ("number", None),
    uuid.UUID: ("string", "uuid"),
    datetime.datetime: ("string", "date-time"),
    datetime.date: ("string", "date"),
    datetime.time: ("string", "time"),
    datetime.timedelta: ("string", "duration"),
    UploadFile: ("string", "binary"),
}

_ARRAY_ORIGINS = (
    list, tuple, set, frozenset,
    collections.abc.Sequence, collections.abc.MutableSequence,
    collections.abc.Set, collections.abc.MutableSet,
    collections.abc.Iterable, collections.abc.Collection,
)

_OBJECT_ORIGINS = (dict, collections.abc.Mapping, collections.abc.MutableMapping)


class TypeSchemaResolver:
    """
    Default resolver mapping Python annotations to schema handles.

    Usage::

        resolver = TypeSchemaResolver()
        resolver.schema_type_for(list[int])
        # SchemaType(type="array", items=SchemaType(type="integer", format="int64"))
    """

    def schema_type_for(self, tp: Any) -> SchemaType:
        if is_void(tp) or tp is Any:
            return SchemaType()

        if get_origin(tp) is Annotated:
            return self.schema_type_for(get_args(tp)[0])

        inner, nullable = unwrap_optional(tp)
        if nullable:
            schema = self.schema_type_for(inner)
            return SchemaType(
                type=schema.type,
                format=schema.format,
                nullable=True,
                items=schema.items,
                ref=schema.ref,
            )

        if tp in _PYTHON_TYPE_MAP:
            kind, fmt = _PYTHON_TYPE_MAP[tp]
            return SchemaType(type=kind, format=fmt)

        if is_class(tp) and issubclass(tp, enum.Enum):
            return SchemaType(type="string")

        if tp is UploadFileCollection:
            return SchemaType(type="array", items=self.schema_type_for(UploadFile))
        if tp is StringValues:
            return SchemaType(type="array", items=SchemaType(type="string"))

        origin = get_origin(tp)
        args = get_args(tp)

        if origin in _ARRAY_ORIGINS or tp in (list, tuple, set, frozenset):
            element = args[0] if args else Any
            if origin is tuple and len(args) == 2 and args[1] is Ellipsis:
                element = args[0]
            return SchemaType(type="array", items=self.schema_type_for(element))

        if origin in _OBJECT_ORIGINS or tp is dict:
            return SchemaType(type="object")

        if is_class(tp):
            return SchemaType(type="object", ref=tp.__name__)

        return SchemaType(type="object")
