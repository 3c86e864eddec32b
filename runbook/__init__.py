# Copyright 2018-present Network Optix, Inc. Licensed under MPL 2.0: www.mozilla.org/MPL/2.0/
"""Run external commands one by one, with a human deciding at every step.

Every action is a Step: the exact command line, the directory it runs in
and the environment variables it needs on top of the inherited ones.
Steps are written in the most raw form, so that it is clear what is being
run and it is easy to copy and run manually.

Before a step runs, the operator sees its directory and command and
chooses to execute it, skip it or exit. After it runs, its result is
compared with what was expected. Tools often exit with non-zero status
for informational reasons, so an unexpected result does not stop the run:
the operator is warned and chooses to continue or exit.

Exit stops everything at once. Nothing that was already done is undone.
The human who runs the script must investigate the state left behind.

There are no retries and no timeouts. A command that hangs blocks the run
until the operator interrupts it.
"""
from runbook._expectations import Anything
from runbook._expectations import ExitCode
from runbook._expectations import ExitCodeIn
from runbook._expectations import ExitCodeWithOutput
from runbook._expectations import Expectation
from runbook._expectations import Failure
from runbook._expectations import FailureWithOutput
from runbook._expectations import Output
from runbook._expectations import Success
from runbook._expectations import SuccessWithOutput
from runbook._expectations import verify
from runbook._gates import Decision
from runbook._gates import MISMATCH_WARNING
from runbook._gates import acknowledge_mismatch
from runbook._gates import ask_yes_no
from runbook._gates import confirm_step
from runbook._gates import pause
from runbook._operator import Operator
from runbook._operator import TerminalOperator
from runbook._operator import UserAbort
from runbook._result import ExecutionResult
from runbook._runbook import Aborted
from runbook._runbook import Executed
from runbook._runbook import Outcome
from runbook._runbook import OutcomeMismatch
from runbook._runbook import PlannedStep
from runbook._runbook import Runbook
from runbook._runbook import Skipped
from runbook._runbook import execute_step
from runbook._runner import CaptureFailed
from runbook._runner import LocalRunner
from runbook._runner import QueryFailed
from runbook._runner import SpawnFailed
from runbook._runner import StepRunner
from runbook._runner import query
from runbook._step import InvalidStep
from runbook._step import Step

__all__ = [
    'Aborted',
    'Anything',
    'CaptureFailed',
    'Decision',
    'Executed',
    'ExecutionResult',
    'ExitCode',
    'ExitCodeIn',
    'ExitCodeWithOutput',
    'Expectation',
    'Failure',
    'FailureWithOutput',
    'InvalidStep',
    'LocalRunner',
    'MISMATCH_WARNING',
    'Operator',
    'Outcome',
    'OutcomeMismatch',
    'Output',
    'PlannedStep',
    'QueryFailed',
    'Runbook',
    'Skipped',
    'SpawnFailed',
    'Step',
    'StepRunner',
    'Success',
    'SuccessWithOutput',
    'TerminalOperator',
    'UserAbort',
    'acknowledge_mismatch',
    'ask_yes_no',
    'confirm_step',
    'execute_step',
    'pause',
    'query',
    'verify',
    ]
