# Copyright 2018-present Network Optix, Inc. Licensed under MPL 2.0: www.mozilla.org/MPL/2.0/
from pathlib import Path
from typing import Mapping

from runbook import Step

_plan_file = 'tfplan.out'


class TerraformProject:
    """Commands for one project dir of the terraforming repo."""

    def __init__(self, project_dir: Path, env: Mapping[str, str]):
        self._dir = project_dir
        self._env = env

    def __repr__(self):
        return f'<{TerraformProject.__name__} {self._dir}>'

    def get_update(self) -> Step:
        return self._step('get', '-update')

    def workspace_select(self, workspace: str) -> Step:
        return self._step('workspace', 'select', workspace)

    def workspace_show(self) -> Step:
        return self._step('workspace', 'show')

    def plan(self, tfvars: str) -> Step:
        return self._step('plan', '-out', _plan_file, '-var-file', tfvars)

    def plan_destroy(self, tfvars: str) -> Step:
        """Destroy plan; exit status is 0 without diff, 2 with diff, 1 on error."""
        return self._step(
            'plan', '-out', _plan_file, '-var-file', tfvars, '-destroy', '-detailed-exitcode')

    def apply(self) -> Step:
        return self._step('apply', _plan_file)

    def state_rm(self, *addresses: str) -> Step:
        return self._step('state', 'rm', *addresses)

    def _step(self, *args: str) -> Step:
        return Step(['terraform', *args], cwd=self._dir, env=self._env)
