"""Tests for trill.storage — JSON persistence of dispatch tables."""

import json
import os
from pathlib import Path

import pytest

from trill.errors import ConfigurationError
from trill.routing.compiler import RouteCompiler
from trill.routing.matcher import Matcher
from trill.routing.route import HandlerRef, RouteMatch
from trill.routing.table import DispatchTable
from trill.storage import FORMAT_VERSION, decode_table, dump_table, encode_table, load_table


def _compile() -> DispatchTable:
    c = RouteCompiler()
    c.add_route("GET", "/", HandlerRef("site.pages:Pages", "home"), name="home")
    c.add_route(["GET", "POST"], "/contact", HandlerRef("site.pages:Pages", "contact"))
    c.add_route("GET", "/posts/{year:int}/{slug}", HandlerRef("site.blog:Blog", "show"), name="post")
    c.add_route("DELETE", "/posts/{year:int}/{slug}", "site.blog:delete_post")
    for i in range(12):
        c.add_route("GET", f"/section{i}/{{id}}", HandlerRef("site.sections:Sections", f"s{i}"))
    return c.compile()


class TestEncoding:
    def test_document_shape(self) -> None:
        document = json.loads(encode_table(_compile()))
        assert document["format"] == FORMAT_VERSION
        assert document["static"]["/"] == {"GET": ["site.pages:Pages", "home"]}
        assert document["named"]["post"] == ["/posts/{year}/{slug}", ["year", "slug"]]
        first = document["variable"][0]
        assert first["routeMap"]["3"]["DELETE"] == ["site.blog:delete_post", ["year", "slug"]]

    def test_deterministic_across_fresh_compilers(self) -> None:
        assert encode_table(_compile()) == encode_table(_compile())

    def test_round_trip(self) -> None:
        table = _compile()
        assert decode_table(encode_table(table)) == table

    def test_unserializable_callback(self) -> None:
        c = RouteCompiler()
        c.add_route("GET", "/", lambda: None)
        with pytest.raises(ConfigurationError, match="Cannot persist"):
            encode_table(c.compile())

    def test_wrong_format(self) -> None:
        with pytest.raises(ConfigurationError, match="Unsupported"):
            decode_table('{"format": 99}')

    def test_invalid_json(self) -> None:
        with pytest.raises(ConfigurationError, match="not valid JSON"):
            decode_table("{")

    def test_malformed(self) -> None:
        with pytest.raises(ConfigurationError, match="Malformed"):
            decode_table('{"format": 1, "static": {}}')


class TestDumpLoad:
    def test_dump_then_match(self, tmp_path: Path) -> None:
        path = dump_table(_compile(), tmp_path / "var" / "routes.json")
        matcher = Matcher(load_table(path))
        assert matcher.match("GET", "/posts/2024/hi") == RouteMatch(
            HandlerRef("site.blog:Blog", "show"), {"year": "2024", "slug": "hi"}
        )
        assert matcher.match("GET", "/section11/x") == RouteMatch(
            HandlerRef("site.sections:Sections", "s11"), {"id": "x"}
        )
        assert matcher.url_for("post", year=2024, slug="hi") == "/posts/2024/hi"

    def test_byte_identical(self, tmp_path: Path) -> None:
        first = dump_table(_compile(), tmp_path / "a.json")
        second = dump_table(_compile(), tmp_path / "b.json")
        assert first.read_bytes() == second.read_bytes()

    def test_overwrite_leaves_no_temp_files(self, tmp_path: Path) -> None:
        path = tmp_path / "routes.json"
        dump_table(_compile(), path)
        dump_table(_compile(), path)
        assert [p.name for p in tmp_path.iterdir()] == ["routes.json"]

    def test_failed_write_keeps_old_table(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        path = tmp_path / "routes.json"
        dump_table(_compile(), path)
        before = path.read_bytes()

        def broken_replace(src: str, dst: str) -> None:
            raise OSError("disk full")

        monkeypatch.setattr(os, "replace", broken_replace)
        with pytest.raises(OSError, match="disk full"):
            dump_table(RouteCompiler().compile(), path)

        assert path.read_bytes() == before
        assert [p.name for p in tmp_path.iterdir()] == ["routes.json"]

    def test_load_missing(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="Cannot read"):
            load_table(tmp_path / "missing.json")
