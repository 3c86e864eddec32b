# Copyright 2018-present Network Optix, Inc. Licensed under MPL 2.0: www.mozilla.org/MPL/2.0/
import logging
import os
import shlex
import string
import subprocess
import tempfile
from abc import ABCMeta
from abc import abstractmethod
from pathlib import Path
from typing import Optional
from typing import Sequence


class UserAbort(SystemExit):
    """Operator stopped the run. Nothing done so far is rolled back.

    Uncaught, it terminates the interpreter with exit status 1.
    """

    def __init__(self, reason: str):
        super().__init__(1)
        self.reason = reason

    def __str__(self):
        return self.reason


class Operator(metaclass=ABCMeta):
    """Human in front of the terminal; replaced by a script in tests."""

    @abstractmethod
    def choose(self, prompt: str, options: Sequence[str]) -> int:
        """Offer labeled options and return the index of the chosen one."""
        pass

    @abstractmethod
    def edit(self, text: str) -> Optional[str]:
        """Let the operator write text; None if nothing was written or the editor failed."""
        pass


class TerminalOperator(Operator):

    def __repr__(self):
        return '<TerminalOperator>'

    def choose(self, prompt, options):
        shortcuts = _make_shortcuts(options)
        labels = ', '.join(_highlight(option, key) for key, option in shortcuts.items())
        while True:
            print(f"{prompt} ({labels} or Ctrl+D to exit): ", end='', flush=True)
            try:
                answer = input()
            except EOFError:
                print()
                raise UserAbort("No choice, exiting")
            answer = answer.strip()
            answer = shortcuts.get(answer.casefold(), answer)
            if answer in options:
                index = list(options).index(answer)
                _logger.info("%s: chose %r", prompt, answer)
                return index
            print("Invalid input, please enter one of the options")

    def edit(self, text):
        editor = os.getenv('VISUAL') or os.getenv('EDITOR') or 'vi'
        with tempfile.TemporaryDirectory() as temp_dir:
            buffer = Path(temp_dir, 'buffer.txt')
            buffer.write_text(text)
            _logger.info("Open %s in %s", buffer, editor)
            try:
                subprocess.run([*shlex.split(editor), str(buffer)], check=True)
            except (OSError, subprocess.CalledProcessError) as e:
                _logger.warning("Editor %s failed: %s", editor, e)
                print(f"Editor {editor} failed: {e}")
                return None
            edited = buffer.read_text()
        if edited == text:
            return None
        return edited


def _make_shortcuts(options: Sequence[str]):
    """Pick a distinct letter of every option to type instead of the option.

    >>> _make_shortcuts(['execute', 'exit', 'skip'])
    {'e': 'execute', 'x': 'exit', 's': 'skip'}
    >>> _make_shortcuts(['yes', 'no'])
    {'y': 'yes', 'n': 'no'}
    >>> _make_shortcuts(["I'm done waiting"])
    {'i': "I'm done waiting"}
    """
    shortcuts = {}
    for option in options:
        for c in option:
            if c not in string.ascii_letters:
                continue
            if c.casefold() in shortcuts:
                continue
            shortcuts[c.casefold()] = option
            break
        else:
            shortcuts[option] = option
    return shortcuts


def _highlight(option: str, key: str) -> str:
    """Show the shortcut letter inside the option.

    >>> _highlight('exit', 'x')
    'e[x]it'
    >>> _highlight("I'm done waiting", 'i')
    "[I]'m done waiting"
    """
    if len(key) != 1:
        return option
    position = option.casefold().index(key)
    return option[:position] + '[' + option[position] + ']' + option[position + 1:]


_logger = logging.getLogger(__name__)
