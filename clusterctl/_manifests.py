# Copyright 2018-present Network Optix, Inc. Licensed under MPL 2.0: www.mozilla.org/MPL/2.0/
import logging
from pathlib import Path

from jinja2 import Environment
from jinja2 import FileSystemLoader
from jinja2 import StrictUndefined

from clusterctl._session import ClusterSession

_logger = logging.getLogger(__name__)

_templates = Environment(
    loader=FileSystemLoader(Path(__file__).with_name('templates')),
    undefined=StrictUndefined,
    keep_trailing_newline=True,
    )


def render_heapster_application(session: ClusterSession) -> str:
    template = _templates.get_template('heapster_application.yaml.j2')
    return template.render(
        namespace=session.namespace,
        cluster_id=session.cluster_id,
        repo_url=session.config.kubernetes_deployments_repo,
        revision=session.config.kubernetes_deployments_revision,
        )


def write_heapster_application(session: ClusterSession) -> Path:
    path = session.config.scratch_dir / 'pp-heapster.yaml'
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_heapster_application(session))
    _logger.info("Heapster Application written to %s", path)
    return path
