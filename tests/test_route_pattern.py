"""
Test: Route template parsing

Tests RoutePattern.parse():
- Plain, typed, optional and catch-all tokens
- Chevron tokens
- Malformed templates raise InvalidRoutePatternFault
"""

import pytest

from apidesc.faults import InvalidRoutePatternFault, RoutingFault
from apidesc.patterns import RoutePattern, RouteToken


# ============================================================================
# Token extraction
# ============================================================================

class TestRoutePatternParse:

    def test_static_template_has_no_tokens(self):
        pattern = RoutePattern.parse("/items")
        assert pattern.tokens == ()
        assert pattern.parameter_names == ()
        assert str(pattern) == "/items"

    def test_single_token(self):
        pattern = RoutePattern.parse("/items/{id}")
        assert pattern.tokens == (RouteToken(name="id"),)
        assert pattern.has_path_parameter("id")
        assert not pattern.has_path_parameter("name")

    def test_typed_token(self):
        token = RoutePattern.parse("/items/{id:int}").get_parameter("id")
        assert token.constraint == "int"
        assert token.optional is False

    def test_optional_token(self):
        pattern = RoutePattern.parse("/items/{page?}")
        assert pattern.get_parameter("page").optional is True

    def test_optional_typed_token(self):
        token = RoutePattern.parse("/items/{page:int?}").get_parameter("page")
        assert token.constraint == "int"
        assert token.optional is True

    @pytest.mark.parametrize("template", ["/files/{*path}", "/files/{**path}"])
    def test_catch_all_token(self, template):
        token = RoutePattern.parse(template).get_parameter("path")
        assert token is not None
        assert token.catch_all is True

    def test_chevron_token(self):
        pattern = RoutePattern.parse("/items/«id:int»/parts/«part»")
        assert pattern.parameter_names == ("id", "part")
        assert pattern.get_parameter("id").constraint == "int"

    def test_multiple_tokens_keep_template_order(self):
        pattern = RoutePattern.parse("/orgs/{org}/repos/{repo}/issues/{number:int}")
        assert pattern.parameter_names == ("org", "repo", "number")

    def test_get_parameter_missing(self):
        assert RoutePattern.parse("/items/{id}").get_parameter("other") is None


# ============================================================================
# Malformed templates
# ============================================================================

class TestRoutePatternErrors:

    def test_unclosed_brace(self):
        with pytest.raises(InvalidRoutePatternFault) as exc_info:
            RoutePattern.parse("/items/{id")
        assert "unclosed" in exc_info.value.message
        assert exc_info.value.code == "ROUTE_PATTERN_INVALID"

    def test_unexpected_closer(self):
        with pytest.raises(InvalidRoutePatternFault):
            RoutePattern.parse("/items/id}")

    def test_empty_name(self):
        with pytest.raises(InvalidRoutePatternFault):
            RoutePattern.parse("/items/{}")

    def test_non_identifier_name(self):
        with pytest.raises(InvalidRoutePatternFault):
            RoutePattern.parse("/items/{item-id}")

    def test_duplicate_name(self):
        with pytest.raises(InvalidRoutePatternFault) as exc_info:
            RoutePattern.parse("/items/{id}/copy/{id}")
        assert exc_info.value.metadata["template"] == "/items/{id}/copy/{id}"

    def test_is_routing_fault(self):
        with pytest.raises(RoutingFault):
            RoutePattern.parse("/{")
