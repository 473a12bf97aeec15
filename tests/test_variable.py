"""Tests for trill.routing.variable — pattern compilation and the variable table."""

import pytest

from trill.errors import ConfigurationError, DuplicatePlaceholderError, DuplicateRouteError
from trill.routing.tokens import tokenize
from trill.routing.variable import VariableRouteTable, compile_pattern


def _pattern(route: str):
    return compile_pattern(tokenize(route), source=route)


class TestCompilePattern:
    def test_default_placeholder(self) -> None:
        pattern = _pattern("/users/{id}")
        assert pattern.regex == "/users/([^/]+)"
        assert pattern.template == "/users/{id}"
        assert pattern.variables == ("id",)

    def test_custom_default(self) -> None:
        pattern = compile_pattern(tokenize("/users/{id}"), default_pattern=r"\w+")
        assert pattern.regex == r"/users/(\w+)"

    def test_literal_escaped_in_regex_not_template(self) -> None:
        pattern = _pattern("/feeds/{name}.rss")
        assert pattern.regex == r"/feeds/([^/]+)\.rss"
        assert pattern.template == "/feeds/{name}.rss"

    def test_ordered_variables(self) -> None:
        pattern = _pattern("/posts/{year:int}/{slug}")
        assert pattern.variables == ("year", "slug")
        assert pattern.template == "/posts/{year}/{slug}"

    def test_duplicate_placeholder(self) -> None:
        with pytest.raises(DuplicatePlaceholderError) as exc_info:
            _pattern("/a/{id}/b/{id}")
        assert exc_info.value.name == "id"
        assert "/a/{id}/b/{id}" in str(exc_info.value)

    def test_invalid_regex(self) -> None:
        with pytest.raises(ConfigurationError, match="invalid pattern"):
            _pattern("/a/{id:[0-9}")

    def test_capturing_group_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="capturing group"):
            _pattern("/a/{kind:(cat|dog)}")

    def test_inline_global_flag_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="/a/{x:\\(\\?i\\)abc}"):
            _pattern("/a/{x:(?i)abc}")

    def test_non_capturing_group_allowed(self) -> None:
        pattern = _pattern("/a/{kind:(?:cat|dog)}")
        assert pattern.regex == "/a/((?:cat|dog))"


class TestVariableRouteTable:
    def test_groups_by_regex(self) -> None:
        table = VariableRouteTable()
        table.add(("GET",), _pattern("/users/{id}"), "show")
        table.add(("PUT", "DELETE"), _pattern("/users/{id}"), "edit")
        table.add(("GET",), _pattern("/posts/{id}"), "post")

        assert len(table) == 2
        groups = list(table.groups())
        assert list(groups[0]) == ["GET", "PUT", "DELETE"]
        assert groups[0]["DELETE"].callback == "edit"
        assert list(groups[1]) == ["GET"]

    def test_duplicate_key(self) -> None:
        table = VariableRouteTable()
        table.add(("GET",), _pattern("/users/{id}"), "a")
        with pytest.raises(DuplicateRouteError) as exc_info:
            table.add(("POST", "GET"), _pattern("/users/{id}"), "b")
        assert exc_info.value.method == "GET"

    def test_duplicate_check_inserts_nothing(self) -> None:
        table = VariableRouteTable()
        table.add(("GET",), _pattern("/users/{id}"), "a")
        with pytest.raises(DuplicateRouteError):
            table.add(("POST", "GET"), _pattern("/users/{id}"), "b")
        assert list(next(table.groups())) == ["GET"]

    def test_same_shape_different_names_are_distinct_regexes(self) -> None:
        table = VariableRouteTable()
        table.add(("GET",), _pattern("/users/{id:int}"), "a")
        table.add(("GET",), _pattern("/users/{name}"), "b")
        assert len(table) == 2

    def test_first_match_in_declaration_order(self) -> None:
        table = VariableRouteTable()
        table.add(("GET",), _pattern("/users/{name}"), "by_name")
        table.add(("GET",), _pattern("/users/{id:int}"), "by_id")
        entry = table.first_match("GET", "/users/42")
        assert entry is not None
        assert entry.callback == "by_name"

    def test_first_match_requires_full_match(self) -> None:
        table = VariableRouteTable()
        table.add(("GET",), _pattern("/users/{id:int}"), "a")
        assert table.first_match("GET", "/users/42/edit") is None
        assert table.first_match("GET", "/x/users/42") is None

    def test_first_match_filters_method(self) -> None:
        table = VariableRouteTable()
        table.add(("POST",), _pattern("/users/{id}"), "a")
        assert table.first_match("GET", "/users/1") is None
