#!/usr/bin/env python3

# Copyright 2026 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     https://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Builds this project.

Mimics a trivial version of Make."""

import argparse
from collections.abc import Callable, Iterable, Sequence
import functools
import io
import pathlib
import shlex
import subprocess
import sys
from typing import Optional

_Target = Callable[['Builder'], None]
_targets: dict[str, _Target] = {}


def target(func: _Target) -> _Target:
    """Decorator to mark a function as a build target."""
    name = func.__name__
    @functools.wraps(func)
    def wrapper(self: 'Builder') -> None:
        print(f'building target {name}')
        func(self)
    _targets[name] = wrapper
    return wrapper


def _run(args: Sequence[str | pathlib.Path], *,
         cwd: Optional[pathlib.Path] = None) -> None:
    if cwd:
        print('cd', shlex.quote(str(cwd)), '&&', end=' ')
    print(_quote(args))
    subprocess.run(args, check=True, cwd=cwd)


class Builder:
    """Builds the project."""

    def __init__(self) -> None:
        self._workspace = pathlib.Path(__file__).parent.absolute()

    def build(self, goals: Sequence[str]) -> None:
        """Builds the specified goals."""
        if not goals:
            raise ValueError('no goals provided')
        funcs = []
        for goal in goals:
            func = _targets.get(goal)
            if not func:
                raise KeyError(f'unknown goal {goal}')
            funcs.append(func)
        for func in funcs:
            func(self)

    @target
    def check(self) -> None:
        """Tests and lints the project."""
        self.test()
        self.lint()

    @target
    def test(self) -> None:
        """Runs the unit tests."""
        _run([sys.executable, '-m', 'pytest', _PACKAGE],
             cwd=self._workspace)

    @target
    def lint(self) -> None:
        """Runs Pylint on the package."""
        _run([sys.executable, '-m', 'pylint', '--persistent=no',
              # Test modules access protected members and skip docstrings.
              '--disable=missing-function-docstring,protected-access',
              _PACKAGE],
             cwd=self._workspace)


_PACKAGE = 'runfiles_tree'


def main() -> None:
    """Builds the project."""
    if isinstance(sys.stdout, io.TextIOWrapper):
        sys.stdout.reconfigure(encoding='utf-8', line_buffering=True)
    parser = argparse.ArgumentParser(allow_abbrev=False)
    parser.add_argument('goals', nargs='*', default=['check'])
    args = parser.parse_args()
    builder = Builder()
    try:
        builder.build(args.goals)
    except subprocess.CalledProcessError as ex:
        print(_quote(ex.cmd), 'failed with exit code', ex.returncode)
        sys.exit(ex.returncode)


def _quote(args: Iterable[str | pathlib.Path]) -> str:
    return shlex.join(map(str, args))


if __name__ == '__main__':
    main()
