# Copyright 2018-present Network Optix, Inc. Licensed under MPL 2.0: www.mozilla.org/MPL/2.0/
"""Run-books for standing up and tearing down Kubernetes clusters.

Every run-book is a sequence of terraform, kubectl, helm, argocd and aws
commands run via runbook.Runbook: the operator confirms each of them.
Run with "python -m clusterctl COMMAND".
"""
from clusterctl._argo import init_argo
from clusterctl._assets import AssetsBucketNotFound
from clusterctl._assets import assets_bucket_name
from clusterctl._assets import fetch_kubeconfig
from clusterctl._config import ClusterConfig
from clusterctl._config import Config
from clusterctl._config import ConfigError
from clusterctl._config import ConfigNotFound
from clusterctl._config import MalformedConfig
from clusterctl._config import MissingSetting
from clusterctl._destroy import destroy_cluster
from clusterctl._destroy import destroy_kubernetes_ingress
from clusterctl._launch import launch_cluster
from clusterctl._namespace import init_namespace
from clusterctl._session import ClusterSession
from clusterctl._session import KubeconfigNotFetched
from clusterctl._session import UnknownCluster
from clusterctl._session import default_namespace
from clusterctl._tool_check import check_tools

__all__ = [
    'AssetsBucketNotFound',
    'ClusterConfig',
    'ClusterSession',
    'Config',
    'ConfigError',
    'ConfigNotFound',
    'KubeconfigNotFetched',
    'MalformedConfig',
    'MissingSetting',
    'UnknownCluster',
    'assets_bucket_name',
    'check_tools',
    'default_namespace',
    'destroy_cluster',
    'destroy_kubernetes_ingress',
    'fetch_kubeconfig',
    'init_argo',
    'init_namespace',
    'launch_cluster',
    ]
