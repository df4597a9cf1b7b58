"""
apidesc faults - Concrete fault types, one base per domain.
"""

from typing import Any

from .core import Fault, FaultDomain


# ============================================================================
# CONFIG
# ============================================================================

class ConfigFault(Fault):
    """Settings could not be loaded or are unusable."""
    domain = FaultDomain.CONFIG


class ConfigInvalidFault(ConfigFault):
    code = "CONFIG_INVALID"

    def __init__(self, key: str, reason: str):
        super().__init__(
            f"Configuration key '{key}' is invalid: {reason}",
            metadata={"key": key, "reason": reason},
        )


# ============================================================================
# ROUTING
# ============================================================================

class RoutingFault(Fault):
    """A route template could not be understood."""
    domain = FaultDomain.ROUTING


class InvalidRoutePatternFault(RoutingFault):
    code = "ROUTE_PATTERN_INVALID"

    def __init__(self, template: str, reason: str):
        super().__init__(
            f"Route template '{template}' is invalid: {reason}",
            metadata={"template": template, "reason": reason},
        )


# ============================================================================
# DESCRIPTION
# ============================================================================

class DescriptionFault(Fault):
    """An endpoint's metadata cannot be turned into one consistent operation."""
    domain = FaultDomain.DESCRIPTION


class DuplicateResponseStatusFault(DescriptionFault):
    """Two response annotations declare the same status code."""
    code = "DUPLICATE_RESPONSE_STATUS"

    def __init__(self, status_code: int, first_source: Any, second_source: Any):
        super().__init__(
            f"Status code {status_code} is declared more than once: "
            f"{first_source!r} and {second_source!r}",
            metadata={
                "status_code": status_code,
                "first_source": repr(first_source),
                "second_source": repr(second_source),
            },
        )
