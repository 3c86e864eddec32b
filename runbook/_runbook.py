# Copyright 2018-present Network Optix, Inc. Licensed under MPL 2.0: www.mozilla.org/MPL/2.0/
import logging
from typing import Optional
from typing import Sequence
from typing import Union

from runbook._expectations import Expectation
from runbook._expectations import Success
from runbook._expectations import verify
from runbook._gates import Decision
from runbook._gates import acknowledge_mismatch
from runbook._gates import ask_yes_no
from runbook._gates import confirm_step
from runbook._gates import pause
from runbook._operator import Operator
from runbook._operator import UserAbort
from runbook._result import ExecutionResult
from runbook._runner import StepRunner
from runbook._step import InvalidStep
from runbook._step import Step


class PlannedStep:
    """Step with the question asked before it and the result expected after."""

    def __init__(self, prompt: str, step: Step, expectation: Expectation):
        if expectation.needs_output and not step.captures_stdout:
            raise InvalidStep(f"{expectation!r} inspects output but {step!r} does not capture it")
        self.prompt = prompt
        self.step = step
        self.expectation = expectation

    def __repr__(self):
        return f'{PlannedStep.__name__}({self.prompt!r}, {self.step!r}, {self.expectation!r})'


class OutcomeMismatch(Exception):

    def __init__(self, planned: PlannedStep, result: ExecutionResult):
        super().__init__(
            f"{planned.step.command_line()}: {result.describe()}, "
            f"expected {planned.expectation!r}")
        self.planned = planned
        self.result = result


class Executed:

    def __init__(self, result: ExecutionResult, matched: bool):
        self.result = result
        self.matched = matched

    def __repr__(self):
        return f'{Executed.__name__}(matched={self.matched!r}, {self.result.describe()})'


class Skipped:

    def __repr__(self):
        return f'{Skipped.__name__}()'


class Aborted:

    def __init__(self, reason: str, mismatch: Optional[OutcomeMismatch] = None):
        self.reason = reason
        self.mismatch = mismatch

    def __repr__(self):
        return f'{Aborted.__name__}({self.reason!r})'


Outcome = Union[Executed, Skipped, Aborted]


def execute_step(planned: PlannedStep, operator: Operator, runner: StepRunner) -> Outcome:
    """Ask, run, check and, if the result is unexpected, ask again.

    Executed(matched=False) means the operator chose to continue after
    the mismatch. Errors of the runner are not caught.
    """
    decision = confirm_step(operator, planned)
    if decision is Decision.SKIP:
        return Skipped()
    if decision is Decision.ABORT:
        return Aborted(f"Exit before {planned.step.command_line()}")
    result = runner.run(planned.step)
    if verify(planned.expectation, result):
        return Executed(result, matched=True)
    mismatch = OutcomeMismatch(planned, result)
    if acknowledge_mismatch(operator, mismatch) is Decision.ABORT:
        return Aborted(f"Exit after {planned.step.command_line()}", mismatch)
    return Executed(result, matched=False)


class Runbook:
    """Sequence of commands run by hand, one by one, with confirmation."""

    def __init__(self, operator: Operator, runner: StepRunner):
        self._operator = operator
        self._runner = runner

    def __repr__(self):
        return f'<{Runbook.__name__} {self._operator!r} {self._runner!r}>'

    def run(
            self,
            prompt: str,
            step: Step,
            expectation: Expectation = Success(),
            ) -> Union[Executed, Skipped]:
        planned = PlannedStep(prompt, step, expectation)
        outcome = execute_step(planned, self._operator, self._runner)
        if isinstance(outcome, Aborted):
            _logger.warning("Abort: %s", outcome.reason)
            raise UserAbort(outcome.reason) from outcome.mismatch
        return outcome

    def ask(self, prompt: str) -> bool:
        return ask_yes_no(self._operator, prompt)

    def pause(self, message: str):
        pause(self._operator, message)

    def select(self, prompt: str, options: Sequence[str]) -> str:
        choice = options[self._operator.choose(prompt, options)]
        _logger.info("%s: %s", prompt, choice)
        return choice

    def edit(self, text: str) -> Optional[str]:
        return self._operator.edit(text)

    def runner(self) -> StepRunner:
        return self._runner


_logger = logging.getLogger(__name__)
