"""Route declarations and the YAML route manifest.

A manifest mirrors what an annotation scanner produces: handler classes,
their actions, and the routes declared on each action, plus the module
table that maps class namespaces to URL prefixes::

    compiler:
      approx_chunk_size: 10
      output: var/routes.json

    modules:
      front:
        namespace: shop.front
      admin:
        namespace: shop.admin
        url_prefix: /backoffice

    handlers:
      "shop.front.catalog:ProductController":
        show:
          - method: GET
            path: /products/{id:int}
            name: product
        update:
          - method: [PUT, PATCH]
            path: /products/{id:int}

The front module is mounted at the root; every other module defaults to
``/{module_key}``.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from trill.config import CompilerConfig
from trill.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class RouteMetadata:
    """One route declared on a handler action."""

    method: str | tuple[str, ...]
    path: str
    name: str | None = None


@dataclass(frozen=True, slots=True)
class RouteDeclaration:
    """All routes declared on ``class_key``'s ``method_key`` action."""

    class_key: str
    method_key: str
    routes: tuple[RouteMetadata, ...]


@dataclass(frozen=True, slots=True)
class ModuleSpec:
    """Application module: class namespace prefix and URL prefix."""

    key: str
    namespace: str
    url_prefix: str = ""

    def owns(self, class_key: str) -> bool:
        return class_key.startswith(self.namespace)


@dataclass(frozen=True, slots=True)
class Manifest:
    """Everything needed for one compilation pass."""

    config: CompilerConfig
    modules: tuple[ModuleSpec, ...]
    declarations: tuple[RouteDeclaration, ...]


def load_manifest(path: str | Path, **overrides: Any) -> Manifest:
    """Read and validate a YAML route manifest.

    *overrides* are passed to ``CompilerConfig.from_mapping`` and win
    over the file's ``compiler:`` section.
    """
    path = Path(path)
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as exc:
        msg = f"Cannot read route manifest {str(path)!r}: {exc}"
        raise ConfigurationError(msg) from exc
    except yaml.YAMLError as exc:
        msg = f"Route manifest {str(path)!r} is not valid YAML: {exc}"
        raise ConfigurationError(msg) from exc
    return parse_manifest(data or {}, **overrides)


def parse_manifest(data: Any, **overrides: Any) -> Manifest:
    """Validate an already-loaded manifest mapping."""
    data = _mapping(data, "manifest")
    config = CompilerConfig.from_mapping(_mapping(data.get("compiler") or {}, "compiler"), **overrides)
    modules = parse_modules(data.get("modules") or {}, front_module=config.front_module)
    declarations = parse_handlers(data.get("handlers") or {})
    return Manifest(config=config, modules=modules, declarations=declarations)


def parse_modules(data: Any, front_module: str = "front") -> tuple[ModuleSpec, ...]:
    """Turn ``{key: {namespace, url_prefix?}}`` into ``ModuleSpec`` values."""
    modules: list[ModuleSpec] = []
    for key, definition in _mapping(data, "modules").items():
        definition = _mapping(definition, f"modules.{key}")
        namespace = definition.get("namespace")
        if not isinstance(namespace, str):
            msg = f"modules.{key}.namespace must be a string"
            raise ConfigurationError(msg)
        default_prefix = "" if key == front_module else f"/{key}"
        url_prefix = definition.get("url_prefix", default_prefix) or ""
        if url_prefix and not url_prefix.startswith("/"):
            msg = f"modules.{key}.url_prefix must start with '/', got {url_prefix!r}"
            raise ConfigurationError(msg)
        modules.append(ModuleSpec(key=str(key), namespace=namespace, url_prefix=url_prefix.rstrip("/")))
    return tuple(modules)


def parse_handlers(data: Any) -> tuple[RouteDeclaration, ...]:
    """Turn ``{class_key: {action: [route, ...]}}`` into declarations."""
    declarations: list[RouteDeclaration] = []
    for class_key, actions in _mapping(data, "handlers").items():
        for method_key, routes in _mapping(actions, f"handlers.{class_key}").items():
            where = f"handlers.{class_key}.{method_key}"
            if isinstance(routes, Mapping):
                routes = [routes]
            if not isinstance(routes, list):
                msg = f"{where} must be a route mapping or a list of them"
                raise ConfigurationError(msg)
            declarations.append(
                RouteDeclaration(
                    class_key=str(class_key),
                    method_key=str(method_key),
                    routes=tuple(_route_metadata(route, where) for route in routes),
                )
            )
    return tuple(declarations)


def _route_metadata(route: Any, where: str) -> RouteMetadata:
    route = _mapping(route, where)
    path = route.get("path")
    if not isinstance(path, str):
        msg = f"{where}: every route needs a string 'path'"
        raise ConfigurationError(msg)
    method = route.get("method", "GET")
    if isinstance(method, list):
        method = tuple(str(m) for m in method)
    elif not isinstance(method, str):
        msg = f"{where}: 'method' must be a string or a list of strings"
        raise ConfigurationError(msg)
    name = route.get("name")
    if name is not None and not isinstance(name, str):
        msg = f"{where}: 'name' must be a string"
        raise ConfigurationError(msg)
    return RouteMetadata(method=method, path=path, name=name)


def _mapping(value: Any, where: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        msg = f"{where} must be a mapping, got {type(value).__name__}"
        raise ConfigurationError(msg)
    return value
