"""Default source adapters: one upstream constructor call per component.

Each call builds the upstream defaults afresh; nothing is cached because the
whole point is to observe what the vendored code produces right now.
Exceptions raised by an upstream constructor propagate unmodified.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from kubedrift.errors import UnknownComponentError, UpstreamConstructionFailure
from kubedrift.models.snapshot import ComponentKind
from kubedrift.upstream.kubelet import new_kubelet_server
from kubedrift.upstream.proxy import new_proxy_config


@dataclass(frozen=True)
class DefaultSource:
    """Binding of a component kind to its upstream default constructor."""

    kind: str
    factory: Callable[[], object]
    description: str = ""


_SOURCES: dict[str, DefaultSource] = {}


def register_source(source: DefaultSource, replace: bool = False) -> None:
    """Register *source*; re-registering a kind requires ``replace=True``."""
    if source.kind in _SOURCES and not replace:
        raise ValueError(f"Default source for '{source.kind}' is already registered")
    _SOURCES[source.kind] = source


def unregister_source(kind: str) -> None:
    _SOURCES.pop(str(kind), None)


def get_source(kind: str, sources: Mapping[str, DefaultSource] | None = None) -> DefaultSource:
    registry = _SOURCES if sources is None else sources
    try:
        return registry[str(kind)]
    except KeyError:
        raise UnknownComponentError(str(kind)) from None


def registered_kinds() -> list[str]:
    """Registered component kinds in registration order."""
    return list(_SOURCES)


def registered_sources() -> Mapping[str, DefaultSource]:
    """Read-only copy of the registry as it stands now."""
    return MappingProxyType(dict(_SOURCES))


def current_defaults(kind: str, sources: Mapping[str, DefaultSource] | None = None) -> object:
    """Construct the current upstream defaults for *kind*.

    Looks *kind* up in *sources* when given, else in the module registry.
    """
    source = get_source(kind, sources)
    tree = source.factory()
    if tree is None:
        raise UpstreamConstructionFailure(str(kind), "default constructor returned no configuration")
    return tree


register_source(
    DefaultSource(
        kind=ComponentKind.KUBELET,
        factory=new_kubelet_server,
        description="kubelet server options (cmd/kubelet/app/options.NewKubeletServer)",
    )
)
register_source(
    DefaultSource(
        kind=ComponentKind.KUBE_PROXY,
        factory=new_proxy_config,
        description="kube-proxy server options (cmd/kube-proxy/app/options.NewProxyConfig)",
    )
)
