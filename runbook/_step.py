# Copyright 2018-present Network Optix, Inc. Licensed under MPL 2.0: www.mozilla.org/MPL/2.0/
import os
import shlex
from pathlib import Path
from types import MappingProxyType
from typing import Mapping
from typing import Optional
from typing import Sequence


class InvalidStep(ValueError):
    pass


class Step:
    """External command: arguments, working dir, env overlay, stdout target.

    Steps are immutable. Modifiers return a new step.

    >>> step = Step(['terraform', 'plan'])
    >>> step.with_env(AWS_PROFILE='infra').env['AWS_PROFILE']
    'infra'
    >>> dict(step.env)
    {}
    >>> Step([])  # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
    ...
    InvalidStep: Command must have at least an executable name
    """

    def __init__(
            self,
            args: Sequence[str],
            *,
            cwd: Optional[os.PathLike] = None,
            env: Optional[Mapping[str, str]] = None,
            stdout_file: Optional[os.PathLike] = None,
            capture_stdout: bool = False,
            ):
        if isinstance(args, str):
            raise InvalidStep(f"Command must be a sequence of arguments, got {args!r}")
        args = tuple(str(arg) if isinstance(arg, os.PathLike) else arg for arg in args)
        if len(args) < 1:
            raise InvalidStep("Command must have at least an executable name")
        for arg in args:
            if not isinstance(arg, str):
                raise InvalidStep(f"Argument {arg!r} of {args!r} is not a string")
        self._args = args
        self._cwd = Path(cwd) if cwd is not None else None
        self._env = MappingProxyType({str(k): str(v) for k, v in (env or {}).items()})
        self._stdout_file = Path(stdout_file) if stdout_file is not None else None
        self._capture_stdout = capture_stdout

    def __repr__(self):
        return f'{Step.__name__}({self.command_line()!r})'

    @property
    def args(self) -> Sequence[str]:
        return self._args

    @property
    def cwd(self) -> Optional[Path]:
        return self._cwd

    @property
    def env(self) -> Mapping[str, str]:
        return self._env

    @property
    def stdout_file(self) -> Optional[Path]:
        return self._stdout_file

    @property
    def captures_stdout(self) -> bool:
        return self._capture_stdout or self._stdout_file is not None

    def resolved_cwd(self) -> Path:
        return self._cwd if self._cwd is not None else Path.cwd()

    def command_line(self) -> str:
        return shlex.join(self._args)

    def with_env(self, **overlay: str) -> 'Step':
        return self._replace(env={**self._env, **overlay})

    def in_dir(self, cwd: os.PathLike) -> 'Step':
        return self._replace(cwd=cwd)

    def writing_stdout_to(self, path: os.PathLike) -> 'Step':
        return self._replace(stdout_file=path)

    def capturing_stdout(self) -> 'Step':
        return self._replace(capture_stdout=True)

    def _replace(self, **changes) -> 'Step':
        kwargs = {
            'cwd': self._cwd,
            'env': self._env,
            'stdout_file': self._stdout_file,
            'capture_stdout': self._capture_stdout,
            **changes,
            }
        return Step(self._args, **kwargs)
