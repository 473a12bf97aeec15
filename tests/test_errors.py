"""Tests for trill.errors — exception hierarchy and error messages."""

import pytest

from trill.errors import (
    ConfigurationError,
    DuplicatePlaceholderError,
    DuplicateRouteError,
    HandlerResolutionError,
    RouteError,
    ShadowedRouteError,
    TrillError,
    URLBuildError,
)
from trill.routing.matcher import MethodNotAllowed, NotFound


class TestHierarchy:
    def test_configuration_error_is_trill_error(self) -> None:
        assert issubclass(ConfigurationError, TrillError)

    @pytest.mark.parametrize("cls", [DuplicateRouteError, DuplicatePlaceholderError, ShadowedRouteError])
    def test_collisions_are_route_errors(self, cls: type[Exception]) -> None:
        assert issubclass(cls, RouteError)
        assert issubclass(cls, ConfigurationError)

    def test_runtime_errors_are_trill_errors(self) -> None:
        assert issubclass(URLBuildError, TrillError)
        assert issubclass(HandlerResolutionError, TrillError)


class TestMessages:
    def test_duplicate_route(self) -> None:
        err = DuplicateRouteError("/users", "GET")
        assert str(err) == "Cannot register two routes matching '/users' for method 'GET'"

    def test_duplicate_placeholder(self) -> None:
        err = DuplicatePlaceholderError("id")
        assert str(err) == "Cannot use the same placeholder 'id' twice"

    def test_shadowed_route(self) -> None:
        err = ShadowedRouteError("/users/me", "/users/([^/]+)", "GET")
        assert "'/users/me'" in str(err)
        assert "'/users/([^/]+)'" in str(err)
        assert "'GET'" in str(err)


class TestMatchResults:
    def test_not_found(self) -> None:
        result = NotFound("GET", "/nope")
        assert result.status == 404
        assert result.detail == "No route matches GET '/nope'"

    def test_method_not_allowed(self) -> None:
        result = MethodNotAllowed(("DELETE", "GET", "POST"))
        assert result.status == 405
        assert dict(result.headers) == {"Allow": "DELETE, GET, POST"}
        assert "Method not allowed" in result.detail

    def test_frozen(self) -> None:
        result = NotFound("GET", "/")
        with pytest.raises(AttributeError):
            result.status = 500  # type: ignore[misc]


class TestErrorExports:
    """Error types are importable from the top-level trill package."""

    def test_import_trill_error(self) -> None:
        import trill

        assert trill.TrillError is TrillError

    def test_import_route_errors(self) -> None:
        import trill

        assert trill.DuplicateRouteError is DuplicateRouteError
        assert trill.ShadowedRouteError is ShadowedRouteError

    def test_import_match_results(self) -> None:
        import trill

        assert trill.NotFound is NotFound
        assert trill.MethodNotAllowed is MethodNotAllowed
