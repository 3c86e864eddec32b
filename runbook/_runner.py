# Copyright 2018-present Network Optix, Inc. Licensed under MPL 2.0: www.mozilla.org/MPL/2.0/
import logging
import os
import shutil
import subprocess
from abc import ABCMeta
from abc import abstractmethod

from runbook._result import ExecutionResult
from runbook._step import Step

_logger = logging.getLogger(__name__)


class SpawnFailed(Exception):

    def __init__(self, step: Step, reason: str):
        super().__init__(f"Cannot start {step.command_line()}: {reason}")
        self.step = step


class QueryFailed(Exception):

    def __init__(self, result: ExecutionResult):
        super().__init__(f"Command {list(result.args)} finished with {result.describe()}")
        self.result = result


class CaptureFailed(Exception):

    def __init__(self, step: Step, result: ExecutionResult, reason: str):
        super().__init__(
            f"{step.command_line()} finished with {result.describe()}, "
            f"but its stdout could not be written to {step.stdout_file}: {reason}")
        self.step = step
        self.result = result


class StepRunner(metaclass=ABCMeta):

    @abstractmethod
    def run(self, step: Step) -> ExecutionResult:
        """Start the process and block until it exits; no timeout."""
        pass


class LocalRunner(StepRunner):
    """Run steps as child processes of this one.

    Stdin and stderr are inherited, so the operator sees the tool talking
    as if the command was typed manually. Stdout is inherited too,
    unless the step captures it.
    """

    def __repr__(self):
        return '<LocalRunner>'

    def run(self, step):
        env = {**os.environ, **step.env}
        executable = _resolve_executable(step.args[0], env.get('PATH'))
        if executable is None:
            raise SpawnFailed(step, f"{step.args[0]!r} is not found in PATH")
        _log_command(step)
        try:
            process = subprocess.Popen(
                list(step.args),
                executable=executable,
                cwd=str(step.cwd) if step.cwd is not None else None,
                env=env,
                stdout=subprocess.PIPE if step.captures_stdout else None,
                )
        except OSError as e:
            raise SpawnFailed(step, str(e))
        with process:
            stdout, _ = process.communicate()
        result = ExecutionResult.from_returncode(step.args, process.returncode, stdout)
        _logger.info("%s: %s", step.args[0], result.describe())
        if step.stdout_file is not None:
            _write_stdout(step, result)
        return result


def _write_stdout(step: Step, result: ExecutionResult):
    _logger.debug("Write %d bytes of stdout to %s", len(result.stdout), step.stdout_file)
    try:
        step.stdout_file.parent.mkdir(parents=True, exist_ok=True)
        step.stdout_file.write_bytes(result.stdout)
    except OSError as e:
        raise CaptureFailed(step, result, str(e))


def query(runner: StepRunner, step: Step) -> str:
    """Run a read-only command without asking and return its stdout."""
    result = runner.run(step.capturing_stdout())
    if not result.succeeded():
        raise QueryFailed(result)
    return result.output_text()


def _resolve_executable(name: str, search_path):
    # Paths with a separator are not looked up; they are relative to the step's cwd.
    if os.sep in name or (os.altsep is not None and os.altsep in name):
        return name
    found = shutil.which(name, path=search_path)
    # Relative PATH entries are relative to this process, not to the step's cwd.
    return os.path.abspath(found) if found is not None else None


def _log_command(step: Step):
    if step.env:
        _logger.info("Run in %s with %s: %s", step.resolved_cwd(), ' '.join(step.env), step.command_line())
    else:
        _logger.info("Run in %s: %s", step.resolved_cwd(), step.command_line())
