# Copyright 2018-present Network Optix, Inc. Licensed under MPL 2.0: www.mozilla.org/MPL/2.0/
from typing import Sequence
from typing import Union

from runbook import ExecutionResult
from runbook import StepRunner


class FakeRunner(StepRunner):
    """Record steps instead of running them; return prepared results.

    A result is an exit code or a (exit code, stdout) pair.
    When results run out, steps exit with 0 and empty stdout.
    """

    def __init__(self, results: Sequence[Union[int, tuple]] = ()):
        self._results = list(results)
        self.steps = []

    def run(self, step):
        self.steps.append(step)
        if self._results:
            result = self._results.pop(0)
        else:
            result = 0
        if isinstance(result, tuple):
            [code, stdout] = result
        else:
            [code, stdout] = result, b''
        return ExecutionResult.from_returncode(
            step.args, code, stdout if step.captures_stdout else None)

    def commands(self):
        return [list(step.args) for step in self.steps]
