# Copyright 2018-present Network Optix, Inc. Licensed under MPL 2.0: www.mozilla.org/MPL/2.0/
import unittest

from runbook import Anything
from runbook import ExecutionResult
from runbook import ExitCode
from runbook import ExitCodeIn
from runbook import ExitCodeWithOutput
from runbook import Failure
from runbook import FailureWithOutput
from runbook import Output
from runbook import Success
from runbook import SuccessWithOutput
from runbook import verify

_codes = [0, 1, 2, 3, 127, 255]


def _exited(code, stdout=None):
    return ExecutionResult(['tool'], code, None, stdout)


def _killed(signal):
    return ExecutionResult(['tool'], None, signal, None)


class TestExitStatusExpectations(unittest.TestCase):

    def test_success(self):
        for code in _codes:
            with self.subTest(code=code):
                self.assertEqual(verify(Success(), _exited(code)), code == 0)
        self.assertFalse(verify(Success(), _killed(9)))

    def test_failure(self):
        for code in _codes:
            with self.subTest(code=code):
                self.assertEqual(verify(Failure(), _exited(code)), code != 0)
        self.assertTrue(verify(Failure(), _killed(15)))

    def test_exit_code(self):
        for expected in _codes:
            for code in _codes:
                with self.subTest(expected=expected, code=code):
                    self.assertEqual(verify(ExitCode(expected), _exited(code)), code == expected)

    def test_exit_code_never_matches_signal(self):
        # Killed by signal 9 is reported by shells as 137; it is not an exit code.
        self.assertFalse(verify(ExitCode(9), _killed(9)))
        self.assertFalse(verify(ExitCode(137), _killed(9)))
        self.assertFalse(verify(ExitCodeIn(0, 2, 9), _killed(9)))

    def test_exit_code_in(self):
        expectation = ExitCodeIn(0, 2)
        for code in _codes:
            with self.subTest(code=code):
                self.assertEqual(verify(expectation, _exited(code)), code in (0, 2))

    def test_exit_code_in_requires_codes(self):
        with self.assertRaises(ValueError):
            ExitCodeIn()

    def test_anything(self):
        for code in _codes:
            with self.subTest(code=code):
                self.assertTrue(verify(Anything(), _exited(code)))
        self.assertTrue(verify(Anything(), _killed(9)))


class TestOutputExpectations(unittest.TestCase):

    def test_output_only(self):
        self.assertTrue(Output.needs_output)
        self.assertTrue(verify(Output('No changes'), _exited(2, b'No changes. Infra is up-to-date.\n')))
        self.assertFalse(verify(Output('No changes'), _exited(0, b'Plan: 3 to add\n')))

    def test_pattern_is_searched_per_line(self):
        stdout = b'Refreshing state...\nPlan: 0 to add, 0 to change, 120 to destroy.\n'
        self.assertTrue(verify(Output(r'^Plan: .* 120 to destroy'), _exited(0, stdout)))

    def test_without_captured_output(self):
        self.assertFalse(verify(Output('.*'), _exited(0, None)))

    def test_success_with_output(self):
        self.assertTrue(verify(SuccessWithOutput('created'), _exited(0, b'namespace/x created\n')))
        self.assertFalse(verify(SuccessWithOutput('created'), _exited(1, b'namespace/x created\n')))
        self.assertFalse(verify(SuccessWithOutput('created'), _exited(0, b'unchanged\n')))

    def test_failure_with_output(self):
        expectation = FailureWithOutput('AlreadyExists')
        self.assertTrue(verify(expectation, _exited(1, b'Error: AlreadyExists\n')))
        self.assertFalse(verify(expectation, _exited(0, b'Error: AlreadyExists\n')))
        self.assertFalse(verify(expectation, _exited(1, b'Error: Forbidden\n')))

    def test_exit_code_with_output(self):
        expectation = ExitCodeWithOutput(2, 'to destroy')
        self.assertTrue(verify(expectation, _exited(2, b'Plan: 0 to add, 120 to destroy.\n')))
        self.assertFalse(verify(expectation, _exited(0, b'Plan: 0 to add, 120 to destroy.\n')))

    def test_undecodable_output(self):
        self.assertTrue(verify(Output('workspace'), _exited(0, b'\xff\xfe workspace\n')))


if __name__ == '__main__':
    unittest.main()
