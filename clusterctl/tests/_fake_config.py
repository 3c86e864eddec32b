# Copyright 2018-present Network Optix, Inc. Licensed under MPL 2.0: www.mozilla.org/MPL/2.0/
from pathlib import Path

from clusterctl import ClusterSession
from clusterctl import Config


def write_config(temp_dir: Path, extra: str = '') -> Path:
    path = temp_dir / 'config.ini'
    path.write_text(
        '[defaults]\n'
        f'terraforming_path = {temp_dir}/terraforming\n'
        f'kubernetes_deployments_path = {temp_dir}/kubernetes-deployments\n'
        'kubernetes_deployments_repo = git@github.com:example/kubernetes-deployments\n'
        f'kubernetes_deployments_ssh_key = {temp_dir}/id_rsa\n'
        f'keybase_secure_manifests_path = {temp_dir}/secure-manifests\n'
        f'assets_cache_path = {temp_dir}/cache\n'
        f'scratch_dir = {temp_dir}\n'
        'infra_profile = infra\n'
        'v1_profile = v1\n'
        + extra)
    return path


def make_session(temp_dir: Path, cluster_id: str = 'development0') -> ClusterSession:
    config = Config.load(write_config(temp_dir))
    return ClusterSession(cluster_id, config.for_cluster(cluster_id))
