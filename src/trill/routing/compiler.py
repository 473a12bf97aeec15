"""Route compiler — collects route declarations into a dispatch table.

Routes are registered during setup and compiled into an immutable
``DispatchTable`` once.  Declaration order matters: static routes are
checked for shadowing against the variable routes declared before them,
and overlapping variable routes resolve to the earliest one at match
time.
"""

import logging
from collections.abc import Iterable

from trill._internal.types import Callback
from trill.config import CompilerConfig
from trill.declarations import ModuleSpec, RouteDeclaration
from trill.routing.chunker import assemble_chunks
from trill.routing.route import HandlerRef, RouteDefinition, normalize_methods
from trill.routing.static import StaticRouteTable
from trill.routing.table import DispatchTable, NamedRoute
from trill.routing.tokens import Literal, RouteToken, Tokenizer, tokenize
from trill.routing.variable import VariableRouteTable, compile_pattern

logger = logging.getLogger("trill.compiler")


class RouteCompiler:
    """Single-pass route compiler.

    Usage::

        compiler = RouteCompiler()
        compiler.add_route("GET", "/users", HandlerRef("app.users:Users", "index"))
        compiler.add_route("GET", "/users/{id:int}", HandlerRef("app.users:Users", "show"), name="user")
        table = compiler.compile()

    Not thread-safe; use one instance per compilation.
    """

    __slots__ = ("_config", "_named", "_static", "_table", "_tokenizer", "_variable")

    def __init__(
        self,
        config: CompilerConfig | None = None,
        tokenizer: Tokenizer = tokenize,
    ) -> None:
        self._config = config or CompilerConfig()
        self._tokenizer = tokenizer
        self._variable = VariableRouteTable()
        self._static = StaticRouteTable(self._variable)
        self._named: dict[str, NamedRoute] = {}
        self._table: DispatchTable | None = None

    @property
    def config(self) -> CompilerConfig:
        return self._config

    def add(self, route: RouteDefinition) -> None:
        """Add a ``RouteDefinition``. Must be called before compile()."""
        self.add_route(route.methods, route.pattern, route.callback, route.name)

    def add_route(
        self,
        methods: str | Iterable[str],
        pattern: str,
        callback: Callback,
        name: str | None = None,
    ) -> None:
        """Tokenize *pattern* and register it as a static or variable route."""
        if self._table is not None:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)

        verbs = normalize_methods(methods)
        tokens = list(self._tokenizer(pattern))

        if len(tokens) == 1 and isinstance(tokens[0], Literal):
            self.add_static_route(verbs, tokens[0], callback, name)
        else:
            self.add_variable_route(verbs, tokens, callback, name, source=pattern)

    def add_static_route(
        self,
        methods: tuple[str, ...],
        token: Literal,
        callback: Callback,
        name: str | None = None,
    ) -> None:
        self._static.add(methods, token.text, callback)
        self._register_name(name, NamedRoute(token.text, ()))
        logger.debug("static route %s %s -> %s", ",".join(methods), token.text, callback)

    def add_variable_route(
        self,
        methods: tuple[str, ...],
        tokens: Iterable[RouteToken],
        callback: Callback,
        name: str | None = None,
        source: str = "",
    ) -> None:
        pattern = compile_pattern(list(tokens), self._config.default_pattern, source)
        self._variable.add(methods, pattern, callback)
        self._register_name(name, NamedRoute(pattern.template, pattern.variables))
        logger.debug("variable route %s %s -> %s", ",".join(methods), pattern.regex, callback)

    def add_declarations(
        self,
        declarations: Iterable[RouteDeclaration],
        modules: Iterable[ModuleSpec],
    ) -> None:
        """Register scanned route declarations under their modules' URL prefixes.

        A class is registered once for every module whose namespace
        prefixes its key, with ``HandlerRef(class_key, method_key)`` as
        callback.
        """
        modules = tuple(modules)
        for declaration in declarations:
            owners = [module for module in modules if module.owns(declaration.class_key)]
            if not owners:
                logger.warning(
                    "%s is not inside any configured module namespace; its routes are skipped",
                    declaration.class_key,
                )
                continue

            callback = HandlerRef(declaration.class_key, declaration.method_key)
            for route in declaration.routes:
                for module in owners:
                    self.add_route(
                        route.method,
                        f"{module.url_prefix}{route.path}",
                        callback,
                        route.name,
                    )

    def compile(self) -> DispatchTable:
        """Freeze the compiler and return the dispatch table.

        Calling it again returns the same table.
        """
        if self._table is None:
            groups = list(self._variable.groups())
            chunks = assemble_chunks(groups, self._config.approx_chunk_size)
            self._table = DispatchTable(
                static=self._static.as_dict(),
                variable=chunks,
                named=dict(self._named),
            )
            logger.info(
                "compiled %d static and %d variable route(s) into %d chunk(s), %d named",
                self._table.static_count,
                self._table.variable_count,
                len(chunks),
                len(self._named),
            )
        return self._table

    def _register_name(self, name: str | None, route: NamedRoute) -> None:
        if name is None:
            return
        # First registration of a name wins.
        if name in self._named:
            logger.debug("route name %r already registered; keeping the first", name)
            return
        self._named[name] = route
