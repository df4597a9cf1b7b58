"""
apidesc faults - structured fault signals for description generation.

Description runs at startup, so every fault here aborts generation for the
endpoint (or the whole application) instead of producing a partial,
incorrect operation.

Core exports:
- Fault: Base fault class
- FaultDomain: Domain enumeration
- Severity: Severity levels
"""

from .core import (
    Fault,
    FaultDomain,
    Severity,
    DOMAIN_DEFAULTS,
)

from .domains import (
    ConfigFault,
    ConfigInvalidFault,
    RoutingFault,
    InvalidRoutePatternFault,
    DescriptionFault,
    DuplicateResponseStatusFault,
)

__all__ = [
    # Core types
    "Fault",
    "FaultDomain",
    "Severity",
    "DOMAIN_DEFAULTS",

    # Domain faults
    "ConfigFault",
    "ConfigInvalidFault",
    "RoutingFault",
    "InvalidRoutePatternFault",
    "DescriptionFault",
    "DuplicateResponseStatusFault",
]
