"""Versioned, immutable snapshots of expected upstream defaults."""

from __future__ import annotations

import dataclasses
import functools
import hashlib
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType

from kubedrift.models.policy import OverridePolicy
from kubedrift.models.tree import is_record


class ComponentKind(StrEnum):
    """Upstream components whose defaults are guarded."""

    KUBELET = "kubelet"
    KUBE_PROXY = "kube-proxy"


@functools.cache
def _frozen_twin(cls: type) -> type:
    """A frozen dataclass with the same name and fields as record class *cls*."""
    twin = dataclasses.make_dataclass(
        cls.__name__,
        [(f.name, f.type) for f in dataclasses.fields(cls)],
        frozen=True,
    )
    twin.__module__ = cls.__module__
    twin.__qualname__ = cls.__qualname__
    return twin


def freeze(value: object) -> object:
    """Return a deep copy of *value* that cannot be mutated in place.

    Mappings become read-only proxies, lists become tuples, sets become
    frozensets. Frozen dataclass records are rebuilt around frozen children;
    mutable ones are rebuilt as a frozen twin class with the same name and
    fields, so attribute assignment raises FrozenInstanceError.
    Scalars are returned as-is.
    """
    if is_record(value):
        cls = type(value)
        fields = dataclasses.fields(cls)
        if cls.__dataclass_params__.frozen:  # type: ignore[attr-defined]
            changes = {f.name: freeze(getattr(value, f.name)) for f in fields if f.init}
            return dataclasses.replace(value, **changes)  # type: ignore[type-var]
        return _frozen_twin(cls)(**{f.name: freeze(getattr(value, f.name)) for f in fields})
    if isinstance(value, Mapping):
        return MappingProxyType({k: freeze(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(v) for v in value)
    if isinstance(value, (set, frozenset)):
        return frozenset(freeze(v) for v in value)
    return value


@dataclass(frozen=True)
class Snapshot:
    """The reviewed baseline of one component's upstream defaults.

    Amend only by an explicit, reviewed change after the override policy has
    been reconciled with the new upstream defaults.
    """

    component: ComponentKind
    upstream_version: str
    defaults: object
    policy: OverridePolicy = field(default_factory=OverridePolicy)

    def __post_init__(self) -> None:
        if not self.upstream_version:
            raise ValueError(f"Snapshot for {self.component} needs an upstream version")
        object.__setattr__(self, "defaults", freeze(self.defaults))

    def digest(self) -> str:
        """sha256 of the canonical listing of the snapshot defaults."""
        from kubedrift.render import render_tree

        listing = render_tree(self.defaults, max_value_width=0)
        return hashlib.sha256(listing.encode()).hexdigest()
