# Copyright 2018-present Network Optix, Inc. Licensed under MPL 2.0: www.mozilla.org/MPL/2.0/
"""Interactive wrapper that stands up and tears down Kubernetes clusters."""
import argparse
import logging
import shutil
import sys
from pathlib import Path
from typing import Optional
from typing import Sequence

from clusterctl._argo import init_argo
from clusterctl._assets import AssetsBucketNotFound
from clusterctl._assets import fetch_kubeconfig
from clusterctl._config import Config
from clusterctl._config import ConfigError
from clusterctl._config import default_config_path
from clusterctl._destroy import destroy_cluster
from clusterctl._destroy import destroy_kubernetes_ingress
from clusterctl._launch import launch_cluster
from clusterctl._logging import init_logging
from clusterctl._namespace import init_namespace
from clusterctl._session import ClusterSession
from clusterctl._session import UnknownCluster
from clusterctl._tool_check import check_tools
from runbook import CaptureFailed
from runbook import LocalRunner
from runbook import Operator
from runbook import QueryFailed
from runbook import Runbook
from runbook import SpawnFailed
from runbook import StepRunner
from runbook import TerminalOperator


def cache_assets(runbook: Runbook, session: ClusterSession):
    session = fetch_kubeconfig(runbook, session)
    print(f"\nKUBECONFIG={session.kube_env()['KUBECONFIG']}")


_cluster_commands = {
    'cache-assets': (cache_assets, "cache generated kube configs locally"),
    'destroy-cluster': (destroy_cluster, "destroy a k8s cluster"),
    'destroy-kubernetes-ingress': (destroy_kubernetes_ingress, "destroy the ingress DNS records"),
    'launch-cluster': (launch_cluster, "launch a new k8s cluster with the terraform tectonic installer"),
    'namespace-init': (init_namespace, "create namespaces with secrets and config maps"),
    'argo-init': (init_argo, "install and configure argo on a cluster"),
    }


def main(
        args: Sequence[str],
        operator: Optional[Operator] = None,
        runner: Optional[StepRunner] = None,
        ) -> int:
    return _run(_parse_args(args), operator or TerminalOperator(), runner or LocalRunner())


def cli() -> int:
    parsed_args = _parse_args(sys.argv[1:])
    init_logging(parsed_args.command, parsed_args.verbose)
    return _run(parsed_args, TerminalOperator(), LocalRunner())


def _run(parsed_args, operator: Operator, runner: StepRunner) -> int:
    if parsed_args.command == 'tool-check':
        return 0 if check_tools(shutil.which) else 1
    runbook = Runbook(operator, runner)
    [workflow, _] = _cluster_commands[parsed_args.command]
    try:
        config = _load_config(parsed_args.config)
        session = _start_session(runbook, config, parsed_args.cluster)
        workflow(runbook, session)
    except (ConfigError, UnknownCluster, AssetsBucketNotFound, QueryFailed, SpawnFailed, CaptureFailed, OSError) as e:
        _logger.exception("%s failed", parsed_args.command)
        print(f"Error: {e}", file=sys.stderr)
        return 2
    return 0


def _load_config(path: Path) -> Config:
    if path == default_config_path:
        path.parent.mkdir(parents=True, exist_ok=True)
    return Config.load(path)


def _start_session(runbook: Runbook, config: Config, cluster_id: Optional[str]) -> ClusterSession:
    clusters = config.clusters()
    if cluster_id is None:
        cluster_id = runbook.select("Select a cluster id", clusters)
    elif cluster_id not in clusters:
        raise UnknownCluster(f"Unknown cluster id {cluster_id!r}, known: {', '.join(clusters)}")
    return ClusterSession(cluster_id, config.for_cluster(cluster_id))


def _parse_args(args: Sequence[str]):
    parser = argparse.ArgumentParser(prog='clusterctl', description=__doc__)
    parser.add_argument(
        '-c', '--config',
        type=lambda v: Path(v).expanduser(),
        default=default_config_path,
        help="path to config.ini, default: %(default)s",
        )
    parser.add_argument(
        '--cluster',
        help="cluster id; if not set, it is chosen interactively",
        )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help="print debug log to stderr",
        )
    subparsers = parser.add_subparsers(dest='command', metavar='COMMAND', required=True)
    for name, (_, description) in _cluster_commands.items():
        subparsers.add_parser(name, help=description)
    subparsers.add_parser('tool-check', help="check for required tools on PATH")
    return parser.parse_args(args)


_logger = logging.getLogger(__name__)

if __name__ == '__main__':
    sys.exit(cli())
