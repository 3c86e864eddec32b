# Copyright 2018-present Network Optix, Inc. Licensed under MPL 2.0: www.mozilla.org/MPL/2.0/
import doctest
import fnmatch
import importlib
import logging
import sys
import unittest
from argparse import ArgumentParser
from pathlib import Path
from pathlib import PurePath


def main(args):
    parser = ArgumentParser(description="Run unit tests and doctests of all packages.")
    parser.add_argument(
        '--no-doctest',
        action='store_true',
        help="run only test_*.py modules",
        )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help="log test discovery",
        )
    parsed_args = parser.parse_args(args)
    if parsed_args.verbose:
        logging.basicConfig(level=logging.DEBUG)
    suite = unittest.TestSuite()
    for python_file in _walk(_packages):
        module_name = _build_module_name(python_file)
        _logger.debug("Import: %s", module_name)
        module = importlib.import_module(module_name)
        if fnmatch.fnmatch(python_file.name, 'test_*.py'):
            scope = unittest.defaultTestLoader.loadTestsFromModule(module)
        elif not parsed_args.no_doctest:
            scope = doctest.DocTestSuite(module)
        else:
            continue
        if scope.countTestCases() > 0:
            _logger.debug("Will run: %r", module)
            suite.addTests(scope)
        else:
            _logger.debug("Skip empty: %r", module)
    runner = unittest.TextTestRunner(stream=sys.stdout, verbosity=2)
    result = runner.run(suite)
    if result.wasSuccessful():
        return 0
    else:
        return 10


def _walk(packages):
    """Collect Python files recursively, skipping hidden and cache dirs."""
    stack = [_root / p for p in packages]
    result = []
    while stack:
        f = stack.pop()
        if f.name.startswith('.') or f.name == '__pycache__':
            _logger.debug("Skip: %s", f)
        elif f.is_dir():
            stack.extend(f.iterdir())
        elif f.suffix == '.py':
            result.append(f)
    return sorted(result)


def _build_module_name(path: PurePath):
    """Build module name from path.

    >>> _build_module_name(_root / 'runbook/tests/test_step.py')
    'runbook.tests.test_step'
    """
    path = path.relative_to(_root)
    path = path.with_suffix('')
    return '.'.join(path.parts)


_logger = logging.getLogger(__name__)
_root = Path(__file__).parent
_packages = ['runbook', 'clusterctl']

if __name__ == '__main__':
    sys.exit(main(sys.argv[1:]))
