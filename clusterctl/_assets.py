# Copyright 2018-present Network Optix, Inc. Licensed under MPL 2.0: www.mozilla.org/MPL/2.0/
"""Cluster assets kept in S3 by the installer: kubeconfig in the first place."""
import logging

from clusterctl._session import ClusterSession
from runbook import Runbook
from runbook import Step
from runbook import StepRunner
from runbook import query

_logger = logging.getLogger(__name__)


class AssetsBucketNotFound(Exception):

    def __init__(self, cluster_id):
        super().__init__(f"Could not locate assets bucket for {cluster_id}")


def assets_bucket_name(runner: StepRunner, session: ClusterSession) -> str:
    """Installer names the bucket "a<cluster id>" with a random suffix."""
    list_buckets = Step(
        ['aws', 's3api', 'list-buckets', '--query', 'Buckets[].Name', '--output', 'text'],
        env=session.aws_env(session.config.infra_profile),
        )
    prefix = f'a{session.cluster_id}'
    for name in query(runner, list_buckets).split():
        if name.startswith(prefix):
            _logger.info("Assets bucket of %s: %s", session.cluster_id, name)
            return name
    raise AssetsBucketNotFound(session.cluster_id)


def fetch_kubeconfig(runbook: Runbook, session: ClusterSession) -> ClusterSession:
    """Download kubeconfig to the local cache and start using it.

    If download is skipped, previously cached kubeconfig is used.
    """
    bucket = assets_bucket_name(runbook.runner(), session)
    cache_dir = session.config.assets_cache_path / session.cluster_id
    cache_dir.mkdir(parents=True, exist_ok=True)
    kubeconfig = cache_dir / 'kubeconfig'
    download = Step(
        ['aws', 's3api', 'get-object', '--bucket', bucket, '--key', 'kubeconfig', str(kubeconfig)],
        env=session.aws_env(session.config.infra_profile),
        )
    runbook.run(f"Download kubeconfig of {session.cluster_id}?", download)
    return session.with_kubeconfig(kubeconfig)
