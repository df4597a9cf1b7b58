"""
Handler Signature Extraction

Static descriptor of a handler's parameters and return type, built once
from the declared signature. The classifier and resolvers only ever see
these descriptors, never the live callable.
"""

import inspect
import types
from dataclasses import dataclass, field
from enum import Enum
from typing import (
    Annotated,
    Any,
    Optional,
    Tuple,
    Type,
    TypeVar,
    Union,
    get_args,
    get_origin,
    get_type_hints,
)

from .metadata import ParameterMarker, VOID


M = TypeVar("M", bound=ParameterMarker)

_SKIPPED_PARAMS = ("self", "cls")


class Nullability(str, Enum):
    NOT_NULL = "not_null"
    NULLABLE = "nullable"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class ParameterDescriptor:
    """
    A single handler parameter.

    Attributes:
        name: Parameter name
        type: Declared type with ``Optional``/``Annotated`` wrappers removed
        annotations: Markers from ``Annotated[T, ...]``, in declaration order
        has_default: Whether the parameter declares a default value
        default: The default value (``inspect.Parameter.empty`` if none)
        nullability: NOT_NULL, NULLABLE or UNKNOWN (no annotation)
    """
    name: str
    type: Any = Any
    annotations: Tuple[ParameterMarker, ...] = ()
    has_default: bool = False
    default: Any = inspect.Parameter.empty
    nullability: Nullability = Nullability.NOT_NULL

    def find(self, marker: Type[M]) -> Optional[M]:
        for annotation in self.annotations:
            if isinstance(annotation, marker):
                return annotation
        return None

    def has(self, marker: Type[ParameterMarker]) -> bool:
        return self.find(marker) is not None

    @property
    def is_optional(self) -> bool:
        return self.has_default or self.nullability != Nullability.NOT_NULL


@dataclass(frozen=True)
class HandlerSignature:
    """
    Parameters and return type of a handler.

    Attributes:
        parameters: Parameter descriptors in declaration order
        return_type: Declared return type (possibly awaitable or a Result)
        declaring_type: Class declaring the handler, None for free functions
        name: Handler name
    """
    parameters: Tuple[ParameterDescriptor, ...] = field(default_factory=tuple)
    return_type: Any = VOID
    declaring_type: Optional[type] = None
    name: str = ""

    @classmethod
    def from_callable(cls, func: Any, declaring_type: Optional[type] = None) -> "HandlerSignature":
        """
        Build a signature descriptor from a Python callable.

        Args:
            func: Function, bound method or unbound method
            declaring_type: Owning class; derived from the callable when omitted

        Example:
            sig = HandlerSignature.from_callable(ItemsController.retrieve)
        """
        target = getattr(func, "__func__", func)
        signature = inspect.signature(target)
        hints = get_type_hints(target, include_extras=True)

        parameters = []
        for param_name, param in signature.parameters.items():
            if param_name in _SKIPPED_PARAMS:
                continue
            if param.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
                continue
            parameters.append(_describe_parameter(param, hints.get(param_name, param.annotation)))

        return_type = hints.get("return", signature.return_annotation)
        if return_type is inspect.Signature.empty:
            return_type = VOID

        if declaring_type is None:
            declaring_type = _find_declaring_type(func)

        return cls(
            parameters=tuple(parameters),
            return_type=return_type,
            declaring_type=declaring_type,
            name=getattr(target, "__name__", ""),
        )


def _describe_parameter(param: inspect.Parameter, hint: Any) -> ParameterDescriptor:
    markers: Tuple[ParameterMarker, ...] = ()
    nullability = Nullability.NOT_NULL

    if hint is inspect.Parameter.empty:
        hint = Any
        nullability = Nullability.UNKNOWN

    if get_origin(hint) is Annotated:
        args = get_args(hint)
        hint = args[0]
        markers = tuple(a for a in args[1:] if isinstance(a, ParameterMarker))

    hint, nullable = unwrap_optional(hint)
    if nullable:
        nullability = Nullability.NULLABLE

    # Optional[Annotated[T, ...]]
    if get_origin(hint) is Annotated:
        args = get_args(hint)
        hint = args[0]
        markers = markers + tuple(a for a in args[1:] if isinstance(a, ParameterMarker))
        hint, nullable = unwrap_optional(hint)
        if nullable:
            nullability = Nullability.NULLABLE

    return ParameterDescriptor(
        name=param.name,
        type=hint,
        annotations=markers,
        has_default=param.default is not inspect.Parameter.empty,
        default=param.default,
        nullability=nullability,
    )


def unwrap_optional(tp: Any) -> Tuple[Any, bool]:
    """Strip ``None`` from ``Optional[T]`` / ``T | None``; returns (type, was_nullable)."""
    origin = get_origin(tp)
    if origin is Union or origin is types.UnionType:
        args = get_args(tp)
        non_none = tuple(a for a in args if a is not VOID)
        if len(non_none) < len(args):
            if len(non_none) == 1:
                return non_none[0], True
            return Union[non_none], True
    return tp, False


def _find_declaring_type(func: Any) -> Optional[type]:
    owner = getattr(func, "__self__", None)
    if owner is not None:
        return owner if isinstance(owner, type) else type(owner)

    target = getattr(func, "__func__", func)
    qualname = getattr(target, "__qualname__", "")
    if "." not in qualname or "<locals>" in qualname:
        return None

    module = inspect.getmodule(target)
    current: Any = module
    for part in qualname.split(".")[:-1]:
        current = getattr(current, part, None)
        if current is None:
            return None
    return current if isinstance(current, type) else None
