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

"""Flattening of path/artifact contributions into a single mapping.

A runfiles tree is described by many, possibly overlapping, contributions.
The functions here turn them into one deterministic mapping from relative
paths to artifacts.  Conflicting contributions for the same path are
resolved in declaration order: the last writer wins unless the conflict
policy says otherwise."""

from collections.abc import Callable, Iterable, Iterator, Mapping
import dataclasses
import enum
import logging
import pathlib
from typing import Optional, Union

from runfiles_tree import artifact as _artifact

Artifact = _artifact.Artifact
PathLike = Union[str, pathlib.PurePosixPath]


class ConflictError(ValueError):
    """Raised when two contributions claim the same path under ERROR."""


class UnresolvableConflictError(ConflictError):
    """Raised when a reserved path collides with a real dependency."""


class ConflictPolicy(enum.Enum):
    """What to do when a path is claimed twice with different artifacts."""

    IGNORE = 'ignore'
    WARN = 'warn'
    ERROR = 'error'


@dataclasses.dataclass(frozen=True)
class Conflict:
    """Diagnostic describing an overwritten or dropped mapping entry.

    For a dropped entry, current is None and obscured_by names the parent
    path whose artifact hides it."""

    path: pathlib.PurePosixPath
    previous: Artifact
    current: Optional[Artifact]
    obscured_by: Optional[pathlib.PurePosixPath] = None

    def message(self) -> str:
        """Returns a human-readable description of the conflict."""
        if self.current is None:
            return (f'runfile {self.path} -> {self.previous} is obscured by '
                    f'{self.obscured_by} and was dropped')
        return (f'multiple artifacts for runfile {self.path}: '
                f'{self.previous} replaced by {self.current}')


ConflictCallback = Callable[[Conflict], None]


def check_path(path: PathLike) -> pathlib.PurePosixPath:
    """Converts path to a relative POSIX path.

    Raises:
      ValueError if the path is empty, absolute, or escapes upwards
    """
    if not isinstance(path, (str, pathlib.PurePath)):
        raise ValueError(f'Invalid path {path!r}')
    result = pathlib.PurePosixPath(path)
    if result.is_absolute():
        raise ValueError(f'Path “{result}” is absolute')
    if not result.parts:
        raise ValueError('Missing path')
    if '..' in result.parts:
        raise ValueError(f'Path “{result}” contains an up-level reference')
    return result


class PathMapping(Mapping[pathlib.PurePosixPath, Artifact]):
    """Immutable, ordered mapping from relative paths to artifacts.

    Iteration follows insertion order; equality only looks at the
    associations, so two mappings built in a different order compare equal."""

    def __init__(
            self,
            entries: Iterable[tuple[pathlib.PurePosixPath, Artifact]] = ()):
        self._entries: dict[pathlib.PurePosixPath, Artifact] = dict(entries)

    def __getitem__(self, key: PathLike) -> Artifact:
        return self._entries[pathlib.PurePosixPath(key)]

    def __contains__(self, key: object) -> bool:
        if isinstance(key, str):
            key = pathlib.PurePosixPath(key)
        return key in self._entries

    def __iter__(self) -> Iterator[pathlib.PurePosixPath]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, PathMapping):
            return self._entries == other._entries
        if isinstance(other, Mapping):
            return self._entries == dict(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(frozenset(self._entries.items()))

    def __repr__(self) -> str:
        items = ', '.join(f'{str(k)!r}: {v!r}'
                          for k, v in self._entries.items())
        return f'PathMapping({{{items}}})'


class Checker:
    """Inserts entries into a dictionary, applying a conflict policy.

    This is the mutable builder behind flatten; it never outlives a single
    mapping computation."""

    def __init__(self, policy: ConflictPolicy = ConflictPolicy.WARN,
                 on_conflict: Optional[ConflictCallback] = None):
        self._policy = policy
        self._on_conflict = on_conflict

    def put(self, entries: dict[pathlib.PurePosixPath, Artifact],
            path: pathlib.PurePosixPath, artifact: Artifact) -> None:
        """Maps path to artifact, replacing any previous different entry."""
        previous = entries.get(path)
        if previous is not None and previous != artifact:
            self.report(Conflict(path, previous, artifact))
        entries[path] = artifact

    def report(self, conflict: Conflict) -> None:
        """Reports a conflict according to the policy.

        Raises:
          ConflictError if the policy is ERROR
        """
        if self._policy is ConflictPolicy.ERROR:
            raise ConflictError(conflict.message())
        self.warn(conflict)

    def warn(self, conflict: Conflict) -> None:
        """Passes a non-fatal diagnostic to the callback, if any."""
        _logger.debug('%s', conflict.message())
        if self._policy is not ConflictPolicy.IGNORE and self._on_conflict:
            self._on_conflict(conflict)


def flatten(pairs: Iterable[tuple[PathLike, Artifact]], *,
            policy: ConflictPolicy = ConflictPolicy.WARN,
            on_conflict: Optional[ConflictCallback] = None) -> PathMapping:
    """Flattens (path, artifact) pairs in declaration order.

    Equal duplicates are no-ops; for different artifacts the last one wins.

    Raises:
      ValueError if a path is invalid
      ConflictError if policy is ERROR and two pairs conflict
    """
    checker = Checker(policy, on_conflict)
    entries: dict[pathlib.PurePosixPath, Artifact] = {}
    for path, artifact in pairs:
        checker.put(entries, check_path(path), artifact)
    return PathMapping(entries.items())


_logger = logging.getLogger('runfiles_tree.mapping')
