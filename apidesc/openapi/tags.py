"""
Tag resolution: explicit ``Tags`` metadata, else the declaring class name,
else the application name for free functions and synthesized handlers.
"""

from typing import Optional, Tuple

from ..endpoint.metadata import EndpointMetadata, Tags
from ..endpoint.signature import HandlerSignature
from .models import Tag


def is_synthesized_type(tp: Optional[type]) -> bool:
    """True for missing owners and classes created inside functions or lambdas."""
    if tp is None:
        return True
    name = getattr(tp, "__name__", "")
    qualname = getattr(tp, "__qualname__", name)
    return name.startswith("<") or "<locals>" in qualname or "<lambda>" in qualname


class TagResolver:

    def __init__(self, application_name: str = ""):
        self.application_name = application_name or ""

    def resolve(self, signature: HandlerSignature, metadata: EndpointMetadata) -> Tuple[Tag, ...]:
        explicit = metadata.get_last(Tags)
        if explicit is not None:
            return tuple(Tag(name) for name in explicit.tags)

        if is_synthesized_type(signature.declaring_type):
            return (Tag(self.application_name),)
        return (Tag(signature.declaring_type.__name__),)
