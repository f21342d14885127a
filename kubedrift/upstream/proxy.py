"""Vendored kube-proxy server options and their upstream defaults.

Mirrors ``cmd/kube-proxy/app/options`` and
``componentconfig.KubeProxyConfiguration`` of the vendored Kubernetes release.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta

from kubedrift.models.tree import Duration

UPSTREAM_VERSION = "v1.3.0"


@dataclass
class KubeProxyConfiguration:
    """kube-proxy component configuration.

    ``oom_score_adj`` and ``iptables_masquerade_bit`` are optional: None
    means unset, which is not the same as zero.
    """

    bind_address: str = ""
    cluster_cidr: str = ""
    healthz_port: int = 0
    healthz_bind_address: str = ""
    oom_score_adj: int | None = None
    resource_container: str = ""
    iptables_sync_period: Duration = field(default_factory=Duration)
    iptables_masquerade_bit: int | None = None
    udp_idle_timeout: Duration = field(default_factory=Duration)
    conntrack_max: int = 0
    conntrack_tcp_established_timeout: Duration = field(default_factory=Duration)


@dataclass
class ProxyServerConfig:
    """kube-proxy server options.

    ``config_sync_period`` is a bare timedelta upstream, not a wrapped Duration.
    """

    kube_proxy_configuration: KubeProxyConfiguration = field(default_factory=KubeProxyConfiguration)
    config_sync_period: timedelta = timedelta(0)
    kube_api_qps: float = 0.0
    kube_api_burst: int = 0
    content_type: str = ""


def new_proxy_config() -> ProxyServerConfig:
    """Build kube-proxy server options populated with the upstream defaults."""
    return ProxyServerConfig(
        kube_proxy_configuration=KubeProxyConfiguration(
            bind_address="0.0.0.0",
            cluster_cidr="",
            healthz_port=10249,
            healthz_bind_address="127.0.0.1",
            oom_score_adj=-999,
            resource_container="/kube-proxy",
            iptables_sync_period=Duration(timedelta(seconds=30)),
            iptables_masquerade_bit=14,
            udp_idle_timeout=Duration(timedelta(milliseconds=250)),
            conntrack_max=256 * 1024,
            conntrack_tcp_established_timeout=Duration(timedelta(seconds=86400)),
        ),
        config_sync_period=timedelta(minutes=15),
        kube_api_qps=5.0,
        kube_api_burst=10,
        content_type="application/vnd.kubernetes.protobuf",
    )
