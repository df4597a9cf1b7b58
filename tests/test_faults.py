"""
Test: Fault taxonomy and service registry
"""

from typing import List

import pytest

from apidesc.di import ServiceCollection, ServiceRegistry
from apidesc.faults import (
    DOMAIN_DEFAULTS,
    ConfigFault,
    ConfigInvalidFault,
    DescriptionFault,
    DuplicateResponseStatusFault,
    Fault,
    FaultDomain,
    InvalidRoutePatternFault,
    RoutingFault,
    Severity,
)


# ============================================================================
# Faults
# ============================================================================

class TestFaultDomain:

    def test_values(self):
        assert FaultDomain.CONFIG.value == "config"
        assert FaultDomain.ROUTING == "routing"
        assert FaultDomain("description") is FaultDomain.DESCRIPTION

    def test_default_severities(self):
        assert DOMAIN_DEFAULTS[FaultDomain.CONFIG] == Severity.FATAL
        assert DOMAIN_DEFAULTS[FaultDomain.DESCRIPTION] == Severity.ERROR


class SchemaUnresolvedFault(DescriptionFault):
    code = "SCHEMA_UNRESOLVED"


class TestFault:

    def test_subclass_pins_code_and_domain(self):
        fault = SchemaUnresolvedFault("No schema for Widget", metadata={"type": "Widget"})
        assert fault.code == "SCHEMA_UNRESOLVED"
        assert fault.domain is FaultDomain.DESCRIPTION
        assert fault.severity == Severity.ERROR
        assert str(fault) == "[SCHEMA_UNRESOLVED] No schema for Widget"

    def test_severity_override(self):
        assert SchemaUnresolvedFault("x", severity=Severity.FATAL).severity == Severity.FATAL

    def test_base_class_cannot_be_raised_directly(self):
        with pytest.raises(TypeError):
            Fault("boom")
        with pytest.raises(TypeError):
            DescriptionFault("no code")

    def test_to_dict(self):
        fault = ConfigInvalidFault("max_workers", "must be at least 1")
        assert fault.to_dict() == {
            "code": "CONFIG_INVALID",
            "domain": "config",
            "severity": "fatal",
            "message": "Configuration key 'max_workers' is invalid: must be at least 1",
            "metadata": {"key": "max_workers", "reason": "must be at least 1"},
        }

    def test_hierarchy(self):
        assert issubclass(ConfigInvalidFault, ConfigFault)
        assert issubclass(DuplicateResponseStatusFault, DescriptionFault)
        assert issubclass(InvalidRoutePatternFault, RoutingFault)
        assert issubclass(RoutingFault, Fault)

    def test_duplicate_status_message(self):
        fault = DuplicateResponseStatusFault(404, "first", "second")
        assert "404" in fault.message
        assert fault.domain is FaultDomain.DESCRIPTION
        assert fault.metadata["first_source"] == "'first'"

    def test_is_exception(self):
        with pytest.raises(Fault):
            raise InvalidRoutePatternFault("/{", "unclosed")


# ============================================================================
# Service registry
# ============================================================================

class Repository:
    pass


class SqlRepository(Repository):
    pass


class Mailer:
    pass


class TestServiceCollection:

    def test_registered(self):
        services = ServiceCollection().add(Repository)
        assert services.is_service(Repository)
        assert not services.is_service(SqlRepository)
        assert not services.is_service(Mailer)

    def test_include_subclasses(self):
        services = ServiceCollection().add(Repository, include_subclasses=True)
        assert services.is_service(SqlRepository)

    def test_registration_is_idempotent(self):
        services = ServiceCollection().add(Mailer).add(Mailer)
        assert len(services) == 1

    def test_string_token(self):
        services = ServiceCollection().add("mailer")
        assert services.is_service("mailer")
        assert not services.is_service(Mailer)

    def test_generic_annotations(self):
        services = ServiceCollection().add(Repository, include_subclasses=True)
        assert not services.is_service(List[int])
        assert not services.is_service(list[int])

    def test_satisfies_protocol(self):
        assert isinstance(ServiceCollection(), ServiceRegistry)
