"""Reviewed snapshot of the kube-proxy upstream defaults.

Once the kube-proxy config builder has reacted to a change in the vendored
defaults (disable or make use of additions), update this snapshot to match.
"""

from __future__ import annotations

from datetime import timedelta

from kubedrift.models.policy import FieldAnnotation, OverrideIntent, OverridePolicy, annotate
from kubedrift.models.snapshot import ComponentKind, Snapshot
from kubedrift.models.tree import Duration
from kubedrift.upstream.proxy import KubeProxyConfiguration, ProxyServerConfig

_KPC = "kube_proxy_configuration"

KUBE_PROXY_POLICY = OverridePolicy(
    annotations=(
        *annotate(
            OverrideIntent.DISABLED,
            f"{_KPC}.healthz_port",
            f"{_KPC}.healthz_bind_address",
            f"{_KPC}.oom_score_adj",
            f"{_KPC}.resource_container",
        ),
        FieldAnnotation(
            path=f"{_KPC}.conntrack_max",
            intent=OverrideIntent.OVERRIDDEN,
            note="4x upstream default (64k)",
        ),
        FieldAnnotation(
            path=f"{_KPC}.conntrack_tcp_established_timeout",
            intent=OverrideIntent.OVERRIDDEN,
            note="1 day (1/5 upstream default)",
        ),
    )
)

KUBE_PROXY_SNAPSHOT = Snapshot(
    component=ComponentKind.KUBE_PROXY,
    upstream_version="v1.3.0",
    policy=KUBE_PROXY_POLICY,
    defaults=ProxyServerConfig(
        kube_proxy_configuration=KubeProxyConfiguration(
            bind_address="0.0.0.0",
            cluster_cidr="",
            healthz_port=10249,
            healthz_bind_address="127.0.0.1",
            oom_score_adj=-999,
            resource_container="/kube-proxy",
            iptables_sync_period=Duration(timedelta(seconds=30)),
            # upstream options.go defaults this to 14
            iptables_masquerade_bit=14,
            udp_idle_timeout=Duration(timedelta(milliseconds=250)),
            conntrack_max=256 * 1024,
            conntrack_tcp_established_timeout=Duration(timedelta(seconds=86400)),
        ),
        config_sync_period=timedelta(minutes=15),
        kube_api_qps=5.0,
        kube_api_burst=10,
        content_type="application/vnd.kubernetes.protobuf",
    ),
)
