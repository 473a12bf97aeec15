"""Route pattern tokenizer.

Splits a route string into literal text and ``{name}`` /
``{name:pattern}`` placeholders::

    "/users"                -> [Literal("/users")]
    "/users/{id}"           -> [Literal("/users/"), Placeholder("id")]
    "/users/{id:int}"       -> [Literal("/users/"), Placeholder("id", r"\\d+")]
    "/y/{year:\\d{4}}.json" -> [Literal("/y/"), Placeholder("year", r"\\d{4}"), Literal(".json")]

The compiler only depends on the ``Tokenizer`` shape, so any callable
returning the same token types can be swapped in.
"""

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TypeAlias

from trill.errors import ConfigurationError
from trill.routing.params import converter_pattern

_NAME_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_FLASK_PARAM_RE = re.compile(r"/<[A-Za-z_][^<>/]*>(?=/|$)")


@dataclass(frozen=True, slots=True)
class Literal:
    """Literal path text, matched verbatim."""

    text: str


@dataclass(frozen=True, slots=True)
class Placeholder:
    """A named variable segment.

    ``pattern`` is ``None`` when the route did not declare one; the
    variable builder substitutes its default.
    """

    name: str
    pattern: str | None = None


RouteToken: TypeAlias = Literal | Placeholder
Tokenizer: TypeAlias = Callable[[str], Sequence[RouteToken]]


def tokenize(pattern: str) -> list[RouteToken]:
    """Tokenize *pattern* into literals and placeholders.

    Raises ``ConfigurationError`` for malformed patterns.
    """
    if not pattern:
        msg = "Route pattern must not be empty."
        raise ConfigurationError(msg)
    if not pattern.startswith("/"):
        msg = f"Route pattern {pattern!r} must start with '/'."
        raise ConfigurationError(msg)

    if _FLASK_PARAM_RE.search(pattern):
        msg = (
            f"Route pattern {pattern!r} uses <param> syntax; "
            "trill expects {param} placeholders, e.g. '/users/{id}'."
        )
        raise ConfigurationError(msg)

    tokens: list[RouteToken] = []
    text: list[str] = []
    i = 0
    while i < len(pattern):
        char = pattern[i]
        if char == "{":
            end = _closing_brace(pattern, i)
            placeholder = _parse_placeholder(pattern, pattern[i + 1 : end])
            if text:
                tokens.append(Literal("".join(text)))
                text = []
            tokens.append(placeholder)
            i = end + 1
        elif char == "}":
            msg = f"Unbalanced '}}' at position {i} in route pattern {pattern!r}."
            raise ConfigurationError(msg)
        else:
            text.append(char)
            i += 1

    if text:
        tokens.append(Literal("".join(text)))
    return tokens


def _closing_brace(pattern: str, start: int) -> int:
    """Index of the brace closing the one opened at *start*.

    Escaped braces (``\\{``) and braces inside a character class
    (``[{]``) belong to the sub-pattern and are not counted.
    """
    depth = 0
    in_class = False
    index = start
    while index < len(pattern):
        char = pattern[index]
        if char == "\\":
            index += 2
            continue
        if in_class:
            if char == "]":
                in_class = False
        elif char == "[":
            in_class = True
            # A leading "]" (or "^]") is a literal member of the class.
            if pattern.startswith("^", index + 1):
                index += 1
            if pattern.startswith("]", index + 1):
                index += 1
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return index
        index += 1
    msg = f"Unclosed '{{' at position {start} in route pattern {pattern!r}."
    raise ConfigurationError(msg)


def _parse_placeholder(pattern: str, inner: str) -> Placeholder:
    name, sep, spec = inner.partition(":")
    name = name.strip()
    if not _NAME_RE.fullmatch(name):
        msg = f"Invalid placeholder name {name!r} in route pattern {pattern!r}."
        raise ConfigurationError(msg)
    if not sep:
        return Placeholder(name)
    spec = spec.strip()
    if not spec:
        msg = f"Placeholder {name!r} in route pattern {pattern!r} has an empty pattern."
        raise ConfigurationError(msg)
    return Placeholder(name, converter_pattern(spec))
