"""Vendored kubelet server options and their upstream defaults.

Mirrors ``cmd/kubelet/app/options`` and ``componentconfig.KubeletConfiguration``
of the vendored Kubernetes release. Replace wholesale when re-vendoring; the
drift guard then reports every default that moved.
"""

from __future__ import annotations

import platform
from dataclasses import dataclass, field
from datetime import timedelta

from kubedrift.models.tree import Duration, StringFlag, new_string_flag

UPSTREAM_VERSION = "v1.3.0"

DEFAULT_ROOT_DIR = "/var/lib/kubelet"
RESOLV_CONF_DEFAULT = "/etc/resolv.conf"
DEFAULT_RKT_API_SERVICE_ENDPOINT = "localhost:15441"

_POD_INFRA_CONTAINER_IMAGE_NAME = "gcr.io/google_containers/pause"
_POD_INFRA_CONTAINER_IMAGE_VERSION = "3.0"

# platform.machine() -> GOARCH
_GOARCH = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "armv7l": "arm",
    "armv6l": "arm",
    "ppc64le": "ppc64le",
    "s390x": "s390x",
}


def get_default_pod_infra_container_image() -> str:
    """Infra ("pause") image for the architecture we are running on."""
    machine = platform.machine().lower()
    arch = _GOARCH.get(machine, machine)
    if arch == "amd64":
        return f"{_POD_INFRA_CONTAINER_IMAGE_NAME}:{_POD_INFRA_CONTAINER_IMAGE_VERSION}"
    return f"{_POD_INFRA_CONTAINER_IMAGE_NAME}-{arch}:{_POD_INFRA_CONTAINER_IMAGE_VERSION}"


@dataclass
class KubeletConfiguration:
    """Kubelet component configuration."""

    address: str = ""
    allow_privileged: bool = False
    cadvisor_port: int = 0
    volume_stats_agg_period: Duration = field(default_factory=Duration)
    cert_directory: str = ""
    cgroup_root: str = ""
    cluster_dns: str = ""
    cluster_domain: str = ""
    configure_cbr0: bool = False
    container_runtime: str = ""
    containerized: bool = False
    cpu_cfs_quota: bool = False
    docker_exec_handler_name: str = ""
    event_burst: int = 0
    event_record_qps: float = 0.0
    enable_custom_metrics: bool = False
    enable_debugging_handlers: bool = False
    enable_server: bool = False
    file_check_frequency: Duration = field(default_factory=Duration)
    healthz_bind_address: str = ""
    healthz_port: int = 0
    host_network_sources: str = ""
    host_pid_sources: str = ""
    host_ipc_sources: str = ""
    http_check_frequency: Duration = field(default_factory=Duration)
    image_minimum_gc_age: Duration = field(default_factory=Duration)
    image_gc_high_threshold_percent: int = 0
    image_gc_low_threshold_percent: int = 0
    low_disk_space_threshold_mb: int = 0
    master_service_namespace: str = ""
    max_container_count: int = 0
    max_per_pod_container_count: int = 0
    max_open_files: int = 0
    max_pods: int = 0
    minimum_gc_age: Duration = field(default_factory=Duration)
    network_plugin_dir: str = ""
    network_plugin_name: str = ""
    non_masquerade_cidr: str = ""
    volume_plugin_dir: str = ""
    node_status_update_frequency: Duration = field(default_factory=Duration)
    node_labels: dict[str, str] = field(default_factory=dict)
    oom_score_adj: int = 0
    lock_file_path: str = ""
    pod_infra_container_image: str = ""
    port: int = 0
    read_only_port: int = 0
    register_node: bool = False
    register_schedulable: bool = False
    registry_burst: int = 0
    registry_pull_qps: float = 0.0
    resolver_config: str = ""
    kubelet_cgroups: str = ""
    rkt_api_endpoint: str = ""
    rkt_path: str = ""
    rkt_stage1_image: str = ""
    root_directory: str = ""
    runtime_cgroups: str = ""
    serialize_image_pulls: bool = False
    streaming_connection_idle_timeout: Duration = field(default_factory=Duration)
    sync_frequency: Duration = field(default_factory=Duration)
    system_cgroups: str = ""
    tls_cert_file: str = ""
    tls_private_key_file: str = ""
    reconcile_cidr: bool = False
    kube_api_qps: float = 0.0
    kube_api_burst: int = 0
    experimental_flannel_overlay: bool = False
    out_of_disk_transition_frequency: Duration = field(default_factory=Duration)
    hairpin_mode: str = ""
    babysit_daemons: bool = False
    seccomp_profile_root: str = ""
    cloud_provider: str = ""
    runtime_request_timeout: Duration = field(default_factory=Duration)
    content_type: str = ""
    enable_controller_attach_detach: bool = False
    eviction_pressure_transition_period: Duration = field(default_factory=Duration)


@dataclass
class KubeletServer:
    """Kubelet server options: component configuration plus flag-only settings."""

    auth_path: StringFlag = field(default_factory=StringFlag)
    kube_config: StringFlag = field(default_factory=StringFlag)
    system_reserved: dict[str, str] = field(default_factory=dict)
    kube_reserved: dict[str, str] = field(default_factory=dict)
    kubelet_configuration: KubeletConfiguration = field(default_factory=KubeletConfiguration)


def new_kubelet_server() -> KubeletServer:
    """Build kubelet server options populated with the upstream defaults."""
    return KubeletServer(
        auth_path=new_string_flag(f"{DEFAULT_ROOT_DIR}/kubernetes_auth"),
        kube_config=new_string_flag(f"{DEFAULT_ROOT_DIR}/kubeconfig"),
        system_reserved={},
        kube_reserved={},
        kubelet_configuration=KubeletConfiguration(
            address="0.0.0.0",
            allow_privileged=False,
            cadvisor_port=4194,
            volume_stats_agg_period=Duration(timedelta(minutes=1)),
            cert_directory="/var/run/kubernetes",
            cgroup_root="",
            cluster_dns="",
            cluster_domain="",
            configure_cbr0=False,
            container_runtime="docker",
            containerized=False,
            cpu_cfs_quota=True,
            docker_exec_handler_name="native",
            event_burst=10,
            event_record_qps=5.0,
            enable_custom_metrics=False,
            enable_debugging_handlers=True,
            enable_server=True,
            file_check_frequency=Duration(timedelta(seconds=20)),
            healthz_bind_address="127.0.0.1",
            healthz_port=10248,
            host_network_sources="*",
            host_pid_sources="*",
            host_ipc_sources="*",
            http_check_frequency=Duration(timedelta(seconds=20)),
            image_minimum_gc_age=Duration(timedelta(minutes=2)),
            image_gc_high_threshold_percent=90,
            image_gc_low_threshold_percent=80,
            low_disk_space_threshold_mb=256,
            master_service_namespace="default",
            max_container_count=240,
            max_per_pod_container_count=2,
            max_open_files=1000000,
            max_pods=110,
            minimum_gc_age=Duration(timedelta(minutes=1)),
            network_plugin_dir="/usr/libexec/kubernetes/kubelet-plugins/net/exec/",
            network_plugin_name="",
            non_masquerade_cidr="10.0.0.0/8",
            volume_plugin_dir="/usr/libexec/kubernetes/kubelet-plugins/volume/exec/",
            node_status_update_frequency=Duration(timedelta(seconds=10)),
            node_labels={},
            oom_score_adj=-999,
            lock_file_path="",
            pod_infra_container_image=get_default_pod_infra_container_image(),
            port=10250,
            read_only_port=10255,
            register_node=True,
            register_schedulable=True,
            registry_burst=10,
            registry_pull_qps=5.0,
            resolver_config=RESOLV_CONF_DEFAULT,
            kubelet_cgroups="",
            rkt_api_endpoint=DEFAULT_RKT_API_SERVICE_ENDPOINT,
            rkt_path="",
            rkt_stage1_image="",
            root_directory=DEFAULT_ROOT_DIR,
            runtime_cgroups="",
            serialize_image_pulls=True,
            streaming_connection_idle_timeout=Duration(timedelta(hours=4)),
            sync_frequency=Duration(timedelta(minutes=1)),
            system_cgroups="",
            tls_cert_file="",
            tls_private_key_file="",
            reconcile_cidr=True,
            kube_api_qps=5.0,
            kube_api_burst=10,
            experimental_flannel_overlay=False,
            out_of_disk_transition_frequency=Duration(timedelta(minutes=5)),
            hairpin_mode="promiscuous-bridge",
            babysit_daemons=False,
            seccomp_profile_root=f"{DEFAULT_ROOT_DIR}/seccomp",
            cloud_provider="auto-detect",
            runtime_request_timeout=Duration(timedelta(minutes=2)),
            content_type="application/vnd.kubernetes.protobuf",
            enable_controller_attach_detach=True,
            eviction_pressure_transition_period=Duration(timedelta(minutes=5)),
        ),
    )
