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

"""Contains a class describing the contents of a runfiles tree."""

from collections.abc import Iterable, Mapping
import itertools
import pathlib
from typing import Optional, TypeVar, Union

from runfiles_tree import artifact as _artifact
from runfiles_tree import mapping

Artifact = _artifact.Artifact

# Reserved location of the repository mapping manifest, relative to the root
# of the runfiles tree.
REPO_MAPPING_PATH = pathlib.PurePosixPath('_repo_mapping')

_Symlinks = Union[Mapping[mapping.PathLike, Artifact],
                  Iterable[tuple[mapping.PathLike, Artifact]]]
_T = TypeVar('_T')


class Runfiles:
    """Represents the declared contents of one runfiles tree.

    Artifacts appear at their runfiles path below the workspace suffix.
    Symlinks place an artifact at an explicit path below the suffix, and root
    symlinks at an explicit path below the tree root.  All three are kept in
    declaration order; that order decides which contribution wins when two of
    them claim the same path."""

    def __init__(self, suffix: mapping.PathLike,
                 artifacts: Iterable[Artifact] = (),
                 symlinks: _Symlinks = (),
                 root_symlinks: _Symlinks = ()):
        self._suffix = mapping.check_path(suffix)
        self._artifacts = _unique(artifacts)
        self._symlinks = _unique(
            (mapping.check_path(path), artifact)
            for path, artifact in _pairs(symlinks))
        self._root_symlinks = _unique(
            (mapping.check_path(path), artifact)
            for path, artifact in _pairs(root_symlinks))

    @property
    def suffix(self) -> pathlib.PurePosixPath:
        """The workspace directory name inside the tree."""
        return self._suffix

    @property
    def artifacts(self) -> tuple[Artifact, ...]:
        return self._artifacts

    @property
    def symlinks(self) -> tuple[tuple[pathlib.PurePosixPath, Artifact], ...]:
        return self._symlinks

    @property
    def root_symlinks(
            self) -> tuple[tuple[pathlib.PurePosixPath, Artifact], ...]:
        return self._root_symlinks

    def is_empty(self) -> bool:
        """Returns whether nothing at all would be placed in the tree."""
        return not (self._artifacts or self._symlinks or self._root_symlinks)

    def merge(self, *others: 'Runfiles') -> 'Runfiles':
        """Returns the union of these and other runfiles.

        The suffix of this object is kept.  Contributions of later objects
        come after the ones of earlier objects."""
        everything = (self,) + others
        return Runfiles(
            self._suffix,
            itertools.chain.from_iterable(r.artifacts for r in everything),
            itertools.chain.from_iterable(r.symlinks for r in everything),
            itertools.chain.from_iterable(r.root_symlinks for r in everything))

    def all_artifacts(self) -> tuple[Artifact, ...]:
        """Returns all referenced artifacts in a stable order."""
        return _unique(itertools.chain(
            self._artifacts,
            (artifact for _, artifact in self._symlinks),
            (artifact for _, artifact in self._root_symlinks)))

    def inputs(self, repo_mapping_manifest: Optional[Artifact] = None, *,
               policy: mapping.ConflictPolicy = mapping.ConflictPolicy.WARN,
               legacy_external_runfiles: bool = False,
               on_conflict: Optional[mapping.ConflictCallback] = None,
               ) -> mapping.PathMapping:
        """Computes the mapping from tree-relative paths to artifacts.

        Raises:
          ConflictError if policy is ERROR and two contributions conflict
          UnresolvableConflictError if something other than the repository
            mapping manifest occupies its reserved path
        """
        checker = mapping.Checker(policy, on_conflict)
        local: dict[pathlib.PurePosixPath, Artifact] = {}
        for path, artifact in self._symlinks:
            checker.put(local, path, artifact)
        for artifact in self._artifacts:
            checker.put(local, artifact.runfiles_path, artifact)
        entries: dict[pathlib.PurePosixPath, Artifact] = {}
        for path, artifact in _unobscured(local, checker):
            if path.parts[0] == '..':
                # Files from external repositories live next to the
                # workspace directory.
                repo_path = pathlib.PurePosixPath(*path.parts[1:])
                checker.put(entries, repo_path, artifact)
                if legacy_external_runfiles:
                    checker.put(entries,
                                self._suffix / 'external' / repo_path,
                                artifact)
            else:
                checker.put(entries, self._suffix / path, artifact)
        for path, artifact in self._root_symlinks:
            checker.put(entries, path, artifact)
        if repo_mapping_manifest is not None:
            for path in entries:
                if (path == REPO_MAPPING_PATH
                        or REPO_MAPPING_PATH in path.parents):
                    raise mapping.UnresolvableConflictError(
                        f'runfile {path} -> {entries[path]} collides with the '
                        f'repository mapping manifest {repo_mapping_manifest}')
            entries[REPO_MAPPING_PATH] = repo_mapping_manifest
        return mapping.PathMapping(entries.items())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Runfiles):
            return NotImplemented
        return (self._suffix == other._suffix
                and self._artifacts == other._artifacts
                and self._symlinks == other._symlinks
                and self._root_symlinks == other._root_symlinks)

    def __hash__(self) -> int:
        return hash((self._suffix, self._artifacts, self._symlinks,
                     self._root_symlinks))

    def __repr__(self) -> str:
        return (f'Runfiles({str(self._suffix)!r}, '
                f'{len(self._artifacts)} artifacts, '
                f'{len(self._symlinks)} symlinks, '
                f'{len(self._root_symlinks)} root symlinks)')


def _unobscured(entries: Mapping[pathlib.PurePosixPath, Artifact],
                checker: mapping.Checker,
                ) -> Iterable[tuple[pathlib.PurePosixPath, Artifact]]:
    """Yields the entries that no entry at a parent path hides."""
    for path, artifact in entries.items():
        for prefix in path.parents[:-1]:
            ancestor = entries.get(prefix)
            if ancestor is None:
                continue
            # Dropping is silent if the ancestor already provides the file.
            via_ancestor = ancestor.exec_path / path.relative_to(prefix)
            if via_ancestor != artifact.exec_path:
                checker.warn(mapping.Conflict(path, artifact, None,
                                              obscured_by=prefix))
            break
        else:
            yield path, artifact


def _pairs(symlinks: _Symlinks) -> Iterable[tuple[mapping.PathLike, Artifact]]:
    if isinstance(symlinks, Mapping):
        return symlinks.items()
    return symlinks


def _unique(items: Iterable[_T]) -> tuple[_T, ...]:
    return tuple(dict.fromkeys(items))
