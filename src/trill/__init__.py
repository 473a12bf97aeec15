"""trill — compile HTTP routes into a fast dispatch table.

Declared routes are collected once, checked for collisions, and frozen
into a ``DispatchTable``: an exact-match table for static paths plus a
few combined regexes for the rest.  The table is written to disk and
loaded by the serving process, which matches requests without
re-compiling anything.

Basic usage::

    from trill import HandlerRef, Matcher, RouteCompiler

    compiler = RouteCompiler()
    compiler.add_route("GET", "/", HandlerRef("site.pages:Pages", "home"))
    compiler.add_route("GET", "/posts/{year:int}/{slug}", HandlerRef("site.blog:Blog", "show"), name="post")
    matcher = Matcher(compiler.compile())

    matcher.match("GET", "/posts/2024/hello")   # RouteMatch(..., {"year": "2024", "slug": "hello"})
    matcher.url_for("post", year=2024, slug="hello")   # "/posts/2024/hello"
"""

__version__ = "0.1.0"
__all__ = [
    "CompilerConfig",
    "ConfigurationError",
    "DispatchTable",
    "DuplicatePlaceholderError",
    "DuplicateRouteError",
    "HandlerRef",
    "Matcher",
    "MethodNotAllowed",
    "NotFound",
    "RouteCompiler",
    "RouteMatch",
    "ShadowedRouteError",
    "TrillError",
    "dump_table",
    "load_manifest",
    "load_table",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import trill`` fast while providing a clean top-level API.
    """
    if name == "RouteCompiler":
        from trill.routing.compiler import RouteCompiler

        return RouteCompiler

    if name == "CompilerConfig":
        from trill.config import CompilerConfig

        return CompilerConfig

    if name in ("Matcher", "MethodNotAllowed", "NotFound"):
        from trill.routing import matcher as _matcher

        return getattr(_matcher, name)

    if name in ("HandlerRef", "RouteMatch"):
        from trill.routing import route as _route

        return getattr(_route, name)

    if name == "DispatchTable":
        from trill.routing.table import DispatchTable

        return DispatchTable

    if name in ("dump_table", "load_table"):
        from trill import storage as _storage

        return getattr(_storage, name)

    if name == "load_manifest":
        from trill.declarations import load_manifest

        return load_manifest

    if name in (
        "ConfigurationError",
        "DuplicatePlaceholderError",
        "DuplicateRouteError",
        "ShadowedRouteError",
        "TrillError",
    ):
        from trill import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
