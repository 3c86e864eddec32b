# Copyright 2018-present Network Optix, Inc. Licensed under MPL 2.0: www.mozilla.org/MPL/2.0/
from clusterctl._assets import fetch_kubeconfig
from clusterctl._session import ClusterSession
from runbook import Failure
from runbook import Runbook
from runbook import Step


def init_namespace(runbook: Runbook, session: ClusterSession):
    """Create the default namespace with its secrets and config maps."""
    session = fetch_kubeconfig(runbook, session)
    kube_env = session.kube_env()
    namespace = session.namespace
    manifests = session.config.keybase_secure_manifests_path
    runbook.run(
        f"Create namespace {namespace}?",
        Step(['kubectl', 'create', 'ns', namespace], env=kube_env),
        )
    runbook.run(
        "Deploy shared secrets?",
        Step(['kubectl', 'create', '-n', 'kube-system', '-Rf', manifests / 'secrets/shared'], env=kube_env),
        )
    # Some of the secrets are created by the shared manifests already.
    runbook.run(
        "Deploy default namespace secrets? NOTE: An error is expected",
        Step(['kubectl', 'create', '-n', namespace, '-Rf', manifests / 'secrets' / namespace], env=kube_env),
        Failure(),
        )
    runbook.run(
        "Deploy default namespace config maps?",
        Step(['kubectl', 'create', '-n', namespace, '-Rf', manifests / 'configMaps' / namespace], env=kube_env),
        )
    cluster_name = f'--from-literal=cluster-name={session.cluster_id}'
    for target_namespace in ['kube-system', namespace]:
        runbook.run(
            f"Create cluster-info config map in {target_namespace} namespace?",
            Step(
                ['kubectl', 'create', 'configmap', 'cluster-info', cluster_name, '-n', target_namespace],
                env=kube_env,
                ),
            )
