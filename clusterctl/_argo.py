# Copyright 2018-present Network Optix, Inc. Licensed under MPL 2.0: www.mozilla.org/MPL/2.0/
import json
import logging

from clusterctl._assets import fetch_kubeconfig
from clusterctl._manifests import write_heapster_application
from clusterctl._session import ClusterSession
from runbook import Runbook
from runbook import Step
from runbook import StepRunner
from runbook import UserAbort
from runbook import query

_logger = logging.getLogger(__name__)

_chart = 'charts/pp-argo-cd'
_secret_instructions = (
    "# Enter 1P entry 'ArgoCD Beta Github App' (or equivalent) on exactly one line.\n"
    "# Lines starting with # are ignored.\n"
    )


def init_argo(runbook: Runbook, session: ClusterSession):
    """Install Argo CD and let it deploy everything else."""
    session = fetch_kubeconfig(runbook, session)
    kube_env = session.kube_env()
    config = session.config
    deployments = config.kubernetes_deployments_path
    namespace = session.namespace
    runbook.run("Create argocd namespace?", Step(['kubectl', 'create', 'ns', 'argocd'], env=kube_env))
    runbook.run("Update chart dependencies?", Step(['helm', 'dep', 'update', _chart], cwd=deployments))
    template = config.scratch_dir / 'argo_template.yaml'
    runbook.run(
        f"Template pp-argo-cd chart? File will be written to {template}",
        Step(
            ['helm', 'template', '-n', 'argocd', '-f', f'{_chart}/values-{namespace}.yaml', _chart],
            cwd=deployments,
            stdout_file=template,
            ),
        )
    print("Note: the warning \"destination for dexConfig is a table\" can be ignored")
    runbook.run(
        "Deploy argocd?",
        Step(['kubectl', 'apply', '-n', 'argocd', '-f', template], env=kube_env),
        )
    runbook.pause("Wait for a couple of minutes while the ELB comes up")
    server_pod = get_argo_server_pod(runbook.runner(), session)
    print(f"\nDiscovered argocd-server pod: {server_pod}")
    server_elb = get_argo_server_elb(runbook.runner(), session)
    print(f"\nDiscovered argocd-server elb: {server_elb}")
    print("\nSkipping creation of DNS records for argocd or argocd-beta subdomain")
    # Initial admin password is the name of the server pod.
    runbook.run(
        "Log in to argo?",
        Step(['argocd', 'login', server_elb, '--username', 'admin', '--password', server_pod], env=kube_env),
        )
    runbook.run(
        "Add git repo and private key?",
        Step(
            [
                'argocd', 'repo', 'add', config.kubernetes_deployments_repo,
                '--ssh-private-key-path', config.kubernetes_deployments_ssh_key,
                ],
            env=kube_env,
            ),
        )
    _patch_dex_secret(runbook, kube_env)
    runbook.run(
        "Create argocd bootstrap project?",
        Step(['argocd', 'proj', 'create', 'bootstrap', '-d', '*,*', '-s', '*'], env=kube_env),
        )
    runbook.pause("Wait a few seconds and let the bootstrap project initialize")
    runbook.run(
        "Let bootstrap project manage any k8s resource?",
        Step(['argocd', 'proj', 'allow-cluster-resource', 'bootstrap', '*', '*'], env=kube_env),
        )
    runbook.run(
        "Create bootstrap Application CRD for cluster services (this will launch a bunch of pods)?",
        Step(['argocd', 'app', 'create', '-f', f'bootstrap/{namespace}/cluster.yaml'], cwd=deployments, env=kube_env),
        )
    runbook.pause("Wait for a minute for chartmuseum to come online")
    runbook.run(
        "Patch argocd-cm configmap with our cluster's chartmuseum url?",
        Step(
            ['kubectl', 'patch', 'configmap', 'argocd-cm', '-n', 'argocd', '--patch', chartmuseum_patch(namespace)],
            env=kube_env,
            ),
        )
    heapster = write_heapster_application(session)
    print(f"\nAn Application CRD has been written to {heapster}")
    runbook.run("Deploy heapster?", Step(['argocd', 'app', 'create', '-f', heapster], env=kube_env))
    print("\nWe are ready to deploy paperless services")
    runbook.run(
        "Deploy pp services (this will launch all our apps)?",
        Step(
            ['argocd', 'app', 'create', '-f', f'bootstrap/{namespace}/paperless-services.yaml'],
            cwd=deployments,
            env=kube_env,
            ),
        )
    print("\nAll services deployed.")


def get_argo_server_pod(runner: StepRunner, session: ClusterSession) -> str:
    output = query(runner, Step(
        [
            'kubectl', 'get', 'pod', '-n', 'argocd',
            '-l', 'app.kubernetes.io/component=server',
            '-o', 'custom-columns=NAME:.metadata.name', '--no-headers',
            ],
        env=session.kube_env(),
        ))
    return output.strip()


def get_argo_server_elb(runner: StepRunner, session: ClusterSession) -> str:
    output = query(runner, Step(
        [
            'kubectl', 'get', 'svc', '-n', 'argocd', 'argocd-server',
            '-o', 'custom-columns=HOST:.status.loadBalancer.ingress[0].hostname', '--no-headers',
            ],
        env=session.kube_env(),
        ))
    return output.strip()


def chartmuseum_patch(namespace: str) -> str:
    """Patch that registers the cluster's chartmuseum as a helm repository.

    >>> json.loads(chartmuseum_patch('production'))['data']['helm.repositories']
    '- name: paperless\\n  type: helm\\n  url: http://chartmuseum.production\\n'
    """
    repositories = f'- name: paperless\n  type: helm\n  url: http://chartmuseum.{namespace}\n'
    return json.dumps({'data': {'helm.repositories': repositories}})


def dex_secret_patch(secret: str) -> str:
    return json.dumps({'data': {'dex.github.clientSecret': secret}})


def _patch_dex_secret(runbook: Runbook, kube_env):
    print("\nThe argocd-secret must be patched with a value from 1Password")
    print("We will open a buffer in your editor and you will write this secret")
    print("on a single line.")
    if not runbook.ask("Open buffer in your $EDITOR to input the secret?"):
        return
    secret = parse_secret(runbook.edit(_secret_instructions))
    if secret is None:
        raise UserAbort("You must enter a dex secret on exactly one line")
    runbook.run(
        "Patch argocd-secret?",
        Step(
            ['kubectl', 'patch', 'secret', 'argocd-secret', '-n', 'argocd', '--patch', dex_secret_patch(secret)],
            env=kube_env,
            ),
        )


def parse_secret(text):
    """Take the only meaningful line of the edited buffer.

    >>> parse_secret("# Enter secret\\n  s3cr3t \\n\\n")
    's3cr3t'
    >>> parse_secret("# Enter secret\\n") is None
    True
    >>> parse_secret("one\\ntwo\\n") is None
    True
    """
    if text is None:
        return None
    lines = [line.strip() for line in text.splitlines()]
    lines = [line for line in lines if line and not line.startswith('#')]
    if len(lines) != 1:
        return None
    return lines[0]
