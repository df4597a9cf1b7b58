"""
apidesc faults - Core types.

Faults are exceptions with a stable machine-readable code, a domain and a
severity. Subclasses pin their code and domain as class attributes and
build the message from the offending input, which is kept in ``metadata``.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, ClassVar, Mapping, Optional


class Severity(str, Enum):
    """How far a fault aborts work: one endpoint (ERROR) or the whole run (FATAL)."""
    ERROR = "error"
    FATAL = "fatal"


class FaultDomain(str, Enum):
    """Functional area a fault belongs to."""
    CONFIG = "config"
    ROUTING = "routing"
    DESCRIPTION = "description"


DOMAIN_DEFAULTS: Mapping[FaultDomain, Severity] = {
    FaultDomain.CONFIG: Severity.FATAL,
    FaultDomain.ROUTING: Severity.ERROR,
    FaultDomain.DESCRIPTION: Severity.ERROR,
}


class Fault(Exception):
    """
    Base fault.

    Attributes:
        code: Stable identifier (e.g. "DUPLICATE_RESPONSE_STATUS")
        domain: Area the fault belongs to
        message: Human-readable summary
        severity: Defaults from the domain
        metadata: The input that caused the fault

    Example:
        ```python
        class SchemaUnresolvedFault(DescriptionFault):
            code = "SCHEMA_UNRESOLVED"

        raise SchemaUnresolvedFault("No schema for Widget", metadata={"type": "Widget"})
        ```
    """

    code: ClassVar[str] = ""
    domain: ClassVar[Optional[FaultDomain]] = None

    def __init__(
        self,
        message: str,
        *,
        severity: Optional[Severity] = None,
        metadata: Optional[Mapping[str, Any]] = None,
    ):
        if not self.code or self.domain is None:
            raise TypeError(f"{type(self).__name__} must define a code and a domain")
        super().__init__(message)
        self.message = message
        self.severity = severity or DOMAIN_DEFAULTS[self.domain]
        self.metadata = dict(metadata or {})

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, severity={self.severity.value})"

    def to_dict(self) -> dict[str, Any]:
        """Flatten for structured logs and CLI output."""
        return {
            "code": self.code,
            "domain": self.domain.value,
            "severity": self.severity.value,
            "message": self.message,
            "metadata": self.metadata,
        }
