# Copyright 2018-present Network Optix, Inc. Licensed under MPL 2.0: www.mozilla.org/MPL/2.0/
from pathlib import Path
from typing import Mapping
from typing import Optional

from clusterctl._config import ClusterConfig


class UnknownCluster(Exception):
    pass


class KubeconfigNotFetched(Exception):

    def __init__(self, cluster_id):
        super().__init__(f"Kubeconfig of {cluster_id} has not been fetched")


class ClusterSession:
    """What every command of a run against one cluster needs to know.

    Environment variables for child processes come from here
    and never from the environment of this process.
    """

    def __init__(self, cluster_id: str, config: ClusterConfig, kubeconfig: Optional[Path] = None):
        self.cluster_id = cluster_id
        self.config = config
        self.namespace = default_namespace(cluster_id)
        self._kubeconfig = kubeconfig

    def __repr__(self):
        return f'<{ClusterSession.__name__} {self.cluster_id}>'

    def with_kubeconfig(self, path: Path) -> 'ClusterSession':
        return ClusterSession(self.cluster_id, self.config, path)

    def aws_env(self, profile: str) -> Mapping[str, str]:
        return {'AWS_PROFILE': profile}

    def kube_env(self) -> Mapping[str, str]:
        if self._kubeconfig is None:
            raise KubeconfigNotFetched(self.cluster_id)
        return {'KUBECONFIG': str(self._kubeconfig)}

    def tfvars(self) -> str:
        return f'{self.cluster_id}.tfvars'


def default_namespace(cluster_id: str) -> str:
    """Namespace the cluster's own services run in.

    >>> default_namespace('development2')
    'development'
    >>> default_namespace('production0')
    'production'
    >>> default_namespace('staging0')  # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
    ...
    UnknownCluster: Unknown cluster id 'staging0'
    """
    for namespace in ('development', 'production'):
        if cluster_id.startswith(namespace):
            return namespace
    raise UnknownCluster(f"Unknown cluster id {cluster_id!r}")


def cluster_elbs_url(cluster_id: str) -> str:
    return (
        'https://console.aws.amazon.com/ec2/home?region=us-east-1'
        f'#LoadBalancers:tag:kubernetes.io/cluster/{cluster_id}=*')
