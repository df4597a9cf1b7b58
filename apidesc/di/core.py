"""
Service registry used to recognize injected handler parameters.

The description engine never resolves services; it only asks whether a
parameter type is something the container would supply.
"""

from typing import Any, Dict, Protocol, Set, Type, runtime_checkable

from ..endpoint.metadata import is_class


@runtime_checkable
class ServiceRegistry(Protocol):
    """Answers "is this type a registered service?"."""

    def is_service(self, service_type: Any) -> bool:
        ...


class ServiceCollection:
    """
    Minimal service registry keyed by type.

    Example:
        services = ServiceCollection()
        services.add(UserRepository)
        services.is_service(UserRepository)  # True
    """

    __slots__ = ("_services", "_base_types")

    def __init__(self):
        self._services: Set[str] = set()
        self._base_types: Dict[str, type] = {}  # match subclasses too

    def add(self, service_type: Type, *, include_subclasses: bool = False) -> "ServiceCollection":
        key = self._token_to_key(service_type)
        self._services.add(key)
        if include_subclasses and is_class(service_type):
            self._base_types[key] = service_type
        return self

    def is_service(self, service_type: Any) -> bool:
        if self._token_to_key(service_type) in self._services:
            return True
        if is_class(service_type):
            return any(issubclass(service_type, base) for base in self._base_types.values())
        return False

    def __len__(self) -> int:
        return len(self._services)

    @staticmethod
    def _token_to_key(token: Any) -> str:
        if isinstance(token, str):
            return token
        if is_class(token):
            return f"{token.__module__}.{token.__qualname__}"
        # typing generics
        return str(token)
