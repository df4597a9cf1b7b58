"""
Test: Handler signature extraction

Tests HandlerSignature.from_callable():
- Parameter markers from Annotated hints
- Optional / default / unannotated nullability
- Return type extraction
- Declaring type discovery
"""

from typing import Annotated, Any, List, Optional, Union

from apidesc.endpoint import FromBody, FromQuery, FromRoute
from apidesc.endpoint.metadata import VOID
from apidesc.endpoint.signature import HandlerSignature, Nullability, unwrap_optional


class ItemsController:

    async def retrieve(self, id: int) -> str:
        ...

    @classmethod
    def build(cls, name: str) -> None:
        ...


async def get_item(
    id: Annotated[int, FromRoute()],
    q: Annotated[Optional[str], FromQuery()] = None,
    *args,
    **kwargs,
) -> str:
    ...


def untyped(value, other=3):
    ...


def optional_outside(body: Optional[Annotated[dict, FromBody(allow_empty=True)]]):
    ...


def union_syntax(tag: str | None, ids: List[int]) -> int:
    ...


# ============================================================================
# Parameters
# ============================================================================

class TestParameters:

    def test_markers_extracted(self):
        sig = HandlerSignature.from_callable(get_item)
        id_param, q_param = sig.parameters
        assert id_param.name == "id"
        assert id_param.type is int
        assert id_param.has(FromRoute)
        assert not id_param.has(FromQuery)
        assert q_param.find(FromQuery) == FromQuery()

    def test_var_args_skipped(self):
        sig = HandlerSignature.from_callable(get_item)
        assert [p.name for p in sig.parameters] == ["id", "q"]

    def test_optional_with_default(self):
        q_param = HandlerSignature.from_callable(get_item).parameters[1]
        assert q_param.type is str
        assert q_param.nullability == Nullability.NULLABLE
        assert q_param.has_default is True
        assert q_param.default is None
        assert q_param.is_optional is True

    def test_required_parameter(self):
        id_param = HandlerSignature.from_callable(get_item).parameters[0]
        assert id_param.nullability == Nullability.NOT_NULL
        assert id_param.is_optional is False

    def test_unannotated_parameter(self):
        value, other = HandlerSignature.from_callable(untyped).parameters
        assert value.type is Any
        assert value.nullability == Nullability.UNKNOWN
        assert value.is_optional is True
        assert other.has_default is True

    def test_optional_wrapping_annotated(self):
        body = HandlerSignature.from_callable(optional_outside).parameters[0]
        assert body.type is dict
        assert body.nullability == Nullability.NULLABLE
        assert body.find(FromBody).allow_empty is True

    def test_pipe_union(self):
        tag, ids = HandlerSignature.from_callable(union_syntax).parameters
        assert tag.type is str
        assert tag.nullability == Nullability.NULLABLE
        assert ids.type == List[int]

    def test_self_and_cls_skipped(self):
        assert [p.name for p in HandlerSignature.from_callable(ItemsController.retrieve).parameters] == ["id"]
        assert [p.name for p in HandlerSignature.from_callable(ItemsController.build).parameters] == ["name"]


# ============================================================================
# Return type
# ============================================================================

class TestReturnType:

    def test_declared_return_type(self):
        assert HandlerSignature.from_callable(get_item).return_type is str

    def test_missing_return_annotation_is_void(self):
        assert HandlerSignature.from_callable(untyped).return_type is VOID

    def test_none_return_is_void(self):
        assert HandlerSignature.from_callable(ItemsController.build).return_type is VOID


# ============================================================================
# Declaring type
# ============================================================================

class TestDeclaringType:

    def test_module_function_has_none(self):
        sig = HandlerSignature.from_callable(get_item)
        assert sig.declaring_type is None
        assert sig.name == "get_item"

    def test_unbound_method(self):
        assert HandlerSignature.from_callable(ItemsController.retrieve).declaring_type is ItemsController

    def test_bound_method(self):
        sig = HandlerSignature.from_callable(ItemsController().retrieve)
        assert sig.declaring_type is ItemsController
        assert sig.name == "retrieve"

    def test_classmethod(self):
        assert HandlerSignature.from_callable(ItemsController.build).declaring_type is ItemsController

    def test_local_function_has_none(self):
        def local(x: int) -> int:
            return x

        assert HandlerSignature.from_callable(local).declaring_type is None

    def test_explicit_declaring_type(self):
        sig = HandlerSignature.from_callable(get_item, declaring_type=ItemsController)
        assert sig.declaring_type is ItemsController


class TestUnwrapOptional:

    def test_plain_type(self):
        assert unwrap_optional(int) == (int, False)

    def test_optional(self):
        assert unwrap_optional(Optional[int]) == (int, True)

    def test_multi_member_union(self):
        tp, nullable = unwrap_optional(Optional[Union[int, str]])
        assert nullable is True
        assert set(tp.__args__) == {int, str}
