"""Vendored upstream component configuration types and default constructors.

Submodules:
    kubelet -- KubeletServer options and new_kubelet_server().
    proxy   -- kube-proxy ProxyServerConfig and new_proxy_config().
"""
