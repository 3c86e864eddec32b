# Copyright 2018-present Network Optix, Inc. Licensed under MPL 2.0: www.mozilla.org/MPL/2.0/
import re
from abc import ABCMeta
from abc import abstractmethod
from typing import Optional

from runbook._result import ExecutionResult


class Expectation(metaclass=ABCMeta):
    """What result of a step is fine."""

    needs_output = False

    @abstractmethod
    def is_met_by(self, result: ExecutionResult) -> bool:
        pass


class Success(Expectation):

    def __repr__(self):
        return f'{Success.__name__}()'

    def is_met_by(self, result):
        return result.exit_code == 0


class Failure(Expectation):
    """Non-zero exit status. Being killed by a signal is a failure too."""

    def __repr__(self):
        return f'{Failure.__name__}()'

    def is_met_by(self, result):
        return result.exit_code != 0


class ExitCode(Expectation):

    def __init__(self, code: int):
        self._code = code

    def __repr__(self):
        return f'{ExitCode.__name__}({self._code!r})'

    def is_met_by(self, result):
        if result.signal is not None:
            return False
        return result.exit_code == self._code


class ExitCodeIn(Expectation):
    """One of several exit codes.

    E.g. terraform plan with -detailed-exitcode: 0 is no diff, 2 is diff.

    >>> ExitCodeIn(0, 2).is_met_by(ExecutionResult(['terraform'], 2))
    True
    >>> ExitCodeIn(0, 2).is_met_by(ExecutionResult(['terraform'], 1))
    False
    """

    def __init__(self, *codes: int):
        if not codes:
            raise ValueError("At least one exit code is required")
        self._codes = frozenset(codes)

    def __repr__(self):
        codes = ', '.join(str(code) for code in sorted(self._codes))
        return f'{ExitCodeIn.__name__}({codes})'

    def is_met_by(self, result):
        if result.signal is not None:
            return False
        return result.exit_code in self._codes


class Anything(Expectation):

    def __repr__(self):
        return f'{Anything.__name__}()'

    def is_met_by(self, result):
        return True


class _OutputExpectation(Expectation):
    needs_output = True

    def __init__(self, pattern: str, status: Optional[Expectation]):
        self._pattern = re.compile(pattern, re.MULTILINE)
        self._status = status

    def __repr__(self):
        return f'{self.__class__.__name__}({self._pattern.pattern!r})'

    def is_met_by(self, result):
        if result.stdout is None:
            return False
        if self._status is not None and not self._status.is_met_by(result):
            return False
        return self._pattern.search(result.output_text()) is not None


class Output(_OutputExpectation):
    """Captured stdout contains a match of the regular expression.

    >>> Output('^Switched to workspace').is_met_by(
    ...     ExecutionResult(['terraform'], 1, stdout=b'...\\nSwitched to workspace "x".\\n'))
    True
    """

    def __init__(self, pattern: str):
        super().__init__(pattern, None)


class SuccessWithOutput(_OutputExpectation):

    def __init__(self, pattern: str):
        super().__init__(pattern, Success())


class FailureWithOutput(_OutputExpectation):

    def __init__(self, pattern: str):
        super().__init__(pattern, Failure())


class ExitCodeWithOutput(_OutputExpectation):

    def __init__(self, code: int, pattern: str):
        super().__init__(pattern, ExitCode(code))
        self._code = code

    def __repr__(self):
        return f'{ExitCodeWithOutput.__name__}({self._code!r}, {self._pattern.pattern!r})'


def verify(expectation: Expectation, result: ExecutionResult) -> bool:
    return expectation.is_met_by(result)
