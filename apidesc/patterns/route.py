"""
Route template parsing.

Extracts the named path-parameter tokens of a route template so the
classifier can decide whether a parameter is a path segment. Supports:

- ``/items/{id}`` and typed ``/items/{id:int}``
- optional tokens ``/items/{id?}``
- catch-all tokens ``/files/{*path}`` and ``/files/{**path}``
- chevron tokens ``/items/«id:int»``
"""

from dataclasses import dataclass, field
from typing import Dict, Tuple

from ..faults import InvalidRoutePatternFault


_OPENERS: Dict[str, str] = {"{": "}", "«": "»"}


@dataclass(frozen=True)
class RouteToken:
    """A single named path-parameter token."""
    name: str
    constraint: str = ""
    optional: bool = False
    catch_all: bool = False


@dataclass(frozen=True)
class RoutePattern:
    """
    Parsed route template.

    Attributes:
        template: The raw template string
        tokens: Path-parameter tokens in template order
    """
    template: str
    tokens: Tuple[RouteToken, ...] = field(default_factory=tuple)

    @classmethod
    def parse(cls, template: str) -> "RoutePattern":
        """Parse a route template, raising InvalidRoutePatternFault on malformed input."""
        tokens = []
        seen = set()
        i = 0
        while i < len(template):
            char = template[i]
            if char in _OPENERS:
                closer = _OPENERS[char]
                end = template.find(closer, i + 1)
                if end == -1:
                    raise InvalidRoutePatternFault(template, f"unclosed '{char}' at position {i}")
                token = _parse_token(template, template[i + 1:end])
                if token.name in seen:
                    raise InvalidRoutePatternFault(template, f"duplicate parameter '{token.name}'")
                seen.add(token.name)
                tokens.append(token)
                i = end + 1
                continue
            if char in ("}", "»"):
                raise InvalidRoutePatternFault(template, f"unexpected '{char}' at position {i}")
            i += 1

        return cls(template=template, tokens=tuple(tokens))

    @property
    def parameter_names(self) -> Tuple[str, ...]:
        return tuple(token.name for token in self.tokens)

    def get_parameter(self, name: str):
        for token in self.tokens:
            if token.name == name:
                return token
        return None

    def has_path_parameter(self, name: str) -> bool:
        return self.get_parameter(name) is not None

    def __str__(self) -> str:
        return self.template


def _parse_token(template: str, body: str) -> RouteToken:
    text = body.strip()
    catch_all = False
    optional = False

    if text.startswith("**"):
        text, catch_all = text[2:], True
    elif text.startswith("*"):
        text, catch_all = text[1:], True

    name, _, constraint = text.partition(":")
    name = name.strip()
    if name.endswith("?"):
        name, optional = name[:-1], True
    if constraint.endswith("?"):
        constraint, optional = constraint[:-1], True

    if not name:
        raise InvalidRoutePatternFault(template, "empty parameter name")
    if not name.isidentifier():
        raise InvalidRoutePatternFault(template, f"parameter name '{name}' is not an identifier")

    return RouteToken(
        name=name,
        constraint=constraint.strip(),
        optional=optional,
        catch_all=catch_all,
    )
