"""Reviewed snapshot of the kubelet upstream defaults.

If the vendored defaults change (fields added or default values moved), the
drift guard fails. Once the node-config builder has been adjusted for the
change, update this snapshot to match the new upstream defaults.
"""

from __future__ import annotations

from datetime import timedelta

from kubedrift.models.policy import OverrideIntent, OverridePolicy, annotate
from kubedrift.models.snapshot import ComponentKind, Snapshot
from kubedrift.models.tree import Duration, new_string_flag
from kubedrift.upstream.kubelet import (
    DEFAULT_RKT_API_SERVICE_ENDPOINT,
    RESOLV_CONF_DEFAULT,
    KubeletConfiguration,
    KubeletServer,
    get_default_pod_infra_container_image,
)

_KC = "kubelet_configuration"

KUBELET_POLICY = OverridePolicy(
    annotations=(
        *annotate(
            OverrideIntent.OVERRIDDEN,
            f"{_KC}.address",
            f"{_KC}.allow_privileged",
            f"{_KC}.cluster_dns",
            f"{_KC}.cluster_domain",
            f"{_KC}.file_check_frequency",
            f"{_KC}.host_network_sources",
            f"{_KC}.host_pid_sources",
            f"{_KC}.host_ipc_sources",
            f"{_KC}.max_pods",
            f"{_KC}.network_plugin_name",
            f"{_KC}.pod_infra_container_image",
            f"{_KC}.port",
            f"{_KC}.root_directory",
        ),
        *annotate(
            OverrideIntent.OVERRIDDEN,
            f"{_KC}.tls_cert_file",
            f"{_KC}.tls_private_key_file",
            note="set to prevent cert generation",
        ),
        *annotate(
            OverrideIntent.DISABLED,
            f"{_KC}.cadvisor_port",
            f"{_KC}.healthz_bind_address",
            f"{_KC}.healthz_port",
            f"{_KC}.http_check_frequency",
            f"{_KC}.read_only_port",
        ),
        *annotate(OverrideIntent.FORCED, f"{_KC}.cpu_cfs_quota", note="forced to true"),
        *annotate(
            OverrideIntent.CONDITIONAL,
            f"{_KC}.containerized",
            note="set from OPENSHIFT_CONTAINERIZED",
        ),
    )
)

KUBELET_SNAPSHOT = Snapshot(
    component=ComponentKind.KUBELET,
    upstream_version="v1.3.0",
    policy=KUBELET_POLICY,
    defaults=KubeletServer(
        auth_path=new_string_flag("/var/lib/kubelet/kubernetes_auth"),
        kube_config=new_string_flag("/var/lib/kubelet/kubeconfig"),
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
            root_directory="/var/lib/kubelet",
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
            seccomp_profile_root="/var/lib/kubelet/seccomp",
            cloud_provider="auto-detect",
            runtime_request_timeout=Duration(timedelta(minutes=2)),
            content_type="application/vnd.kubernetes.protobuf",
            enable_controller_attach_detach=True,
            eviction_pressure_transition_period=Duration(timedelta(minutes=5)),
        ),
    ),
)
