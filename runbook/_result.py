# Copyright 2018-present Network Optix, Inc. Licensed under MPL 2.0: www.mozilla.org/MPL/2.0/
from typing import NamedTuple
from typing import Optional
from typing import Sequence


class ExecutionResult(NamedTuple):
    """How a spawned process finished.

    Exactly one of exit_code and signal is set.
    """

    args: Sequence[str]
    exit_code: Optional[int]
    signal: Optional[int] = None
    stdout: Optional[bytes] = None

    @classmethod
    def from_returncode(cls, args, returncode: int, stdout: Optional[bytes] = None):
        """Interpret subprocess return code: negative means killed by signal.

        >>> ExecutionResult.from_returncode(['sleep', '100'], -9)
        ExecutionResult(args=['sleep', '100'], exit_code=None, signal=9, stdout=None)
        >>> ExecutionResult.from_returncode(['true'], 0).succeeded()
        True
        """
        if returncode < 0:
            return cls(args, None, -returncode, stdout)
        return cls(args, returncode, None, stdout)

    def succeeded(self) -> bool:
        return self.exit_code == 0

    def describe(self) -> str:
        if self.signal is not None:
            return f"terminated by signal {self.signal}"
        return f"exit status {self.exit_code}"

    def output_text(self) -> str:
        if self.stdout is None:
            return ''
        return self.stdout.decode(errors='backslashreplace')
