"""Tests for trill.routing.urls — reverse routing."""

import pytest

from trill.errors import URLBuildError
from trill.routing.table import NamedRoute
from trill.routing.urls import build_url

POST = NamedRoute("/posts/{year}/{slug}", ("year", "slug"))


class TestBuildUrl:
    def test_substitutes_in_order(self) -> None:
        assert build_url("post", POST, {"slug": "hello", "year": 2024}) == "/posts/2024/hello"

    def test_static_template(self) -> None:
        assert build_url("about", NamedRoute("/about", ()), {}) == "/about"

    def test_values_are_quoted(self) -> None:
        assert build_url("post", POST, {"year": 2024, "slug": "a b?c"}) == "/posts/2024/a%20b%3Fc"

    def test_slash_kept(self) -> None:
        route = NamedRoute("/files/{path}", ("path",))
        assert build_url("file", route, {"path": "docs/index.html"}) == "/files/docs/index.html"

    def test_missing_value(self) -> None:
        with pytest.raises(URLBuildError, match="slug"):
            build_url("post", POST, {"year": 2024})

    def test_extra_values_ignored(self) -> None:
        assert build_url("post", POST, {"year": 1, "slug": "s", "page": 2}) == "/posts/1/s"
