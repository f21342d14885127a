"""Committed snapshots of the upstream defaults we build overrides on.

Each snapshot is amended only by a reviewed change, after the corresponding
config builder has been reconciled with the new upstream defaults.
"""

from kubedrift.models.snapshot import ComponentKind, Snapshot
from kubedrift.snapshots.kubelet import KUBELET_POLICY, KUBELET_SNAPSHOT
from kubedrift.snapshots.proxy import KUBE_PROXY_POLICY, KUBE_PROXY_SNAPSHOT

SNAPSHOTS: dict[ComponentKind, Snapshot] = {
    ComponentKind.KUBELET: KUBELET_SNAPSHOT,
    ComponentKind.KUBE_PROXY: KUBE_PROXY_SNAPSHOT,
}

__all__ = [
    "KUBELET_POLICY",
    "KUBELET_SNAPSHOT",
    "KUBE_PROXY_POLICY",
    "KUBE_PROXY_SNAPSHOT",
    "SNAPSHOTS",
]
