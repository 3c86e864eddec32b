# Copyright 2018-present Network Optix, Inc. Licensed under MPL 2.0: www.mozilla.org/MPL/2.0/
"""Points where the operator decides whether the run goes on."""
import logging
from enum import Enum
from typing import TYPE_CHECKING

from runbook._operator import Operator

if TYPE_CHECKING:
    from runbook._runbook import OutcomeMismatch
    from runbook._runbook import PlannedStep

_logger = logging.getLogger(__name__)

MISMATCH_WARNING = "Previous command behaved unexpectedly. Proceed with caution."


class Decision(Enum):
    EXECUTE = 'execute'
    SKIP = 'skip'
    ABORT = 'exit'
    CONTINUE = 'continue'


_before_step = [Decision.EXECUTE, Decision.ABORT, Decision.SKIP]
_after_mismatch = [Decision.CONTINUE, Decision.ABORT]


def confirm_step(operator: Operator, planned: 'PlannedStep') -> Decision:
    step = planned.step
    print(f"PATH: {step.resolved_cwd()}")
    print(f"COMMAND: {list(step.args)}")
    if step.env:
        print(f"ENV: {', '.join(sorted(step.env))}")
    if step.stdout_file is not None:
        print(f"STDOUT TO: {step.stdout_file}")
    index = operator.choose(planned.prompt, [d.value for d in _before_step])
    decision = _before_step[index]
    _logger.info("%r: %s", step, decision.name)
    return decision


def acknowledge_mismatch(operator: Operator, mismatch: 'OutcomeMismatch') -> Decision:
    _logger.warning("%s", mismatch)
    # Captured output is not seen on the terminal otherwise.
    if mismatch.result.stdout is not None:
        print(f"OUTPUT:\n{mismatch.result.output_text().rstrip()}")
    print(f"RESULT: {mismatch.result.describe()}")
    index = operator.choose(MISMATCH_WARNING, [d.value for d in _after_mismatch])
    decision = _after_mismatch[index]
    _logger.info("After mismatch: %s", decision.name)
    return decision


def ask_yes_no(operator: Operator, prompt: str) -> bool:
    answer = operator.choose(prompt, ['yes', 'no']) == 0
    _logger.info("%s: %s", prompt, 'yes' if answer else 'no')
    return answer


def pause(operator: Operator, message: str):
    operator.choose(message, ["I'm done waiting"])
