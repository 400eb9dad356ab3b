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

"""Contains the value type for a single runfiles tree."""

import pathlib
import threading
from typing import Optional

from runfiles_tree import artifact as _artifact
from runfiles_tree import mapping as _mapping
from runfiles_tree import runfiles as _runfiles
from runfiles_tree import symlinks


class RunfilesTree:
    """One runfiles directory of an executable.

    Instances are immutable.  The mapping is computed on first use and then
    cached; concurrent first calls compute it once."""

    def __init__(self, root_path: _mapping.PathLike,
                 runfiles: _runfiles.Runfiles,
                 repo_mapping_manifest: Optional[_artifact.Artifact] = None,
                 symlinks_mode: symlinks.SymlinksMode = (
                     symlinks.SymlinksMode.CREATE),
                 build_runfile_links: bool = True, *,
                 conflict_policy: _mapping.ConflictPolicy = (
                     _mapping.ConflictPolicy.WARN),
                 legacy_external_runfiles: bool = False):
        if root_path is None:
            raise ValueError('Missing runfiles directory')
        if not isinstance(root_path, (str, pathlib.PurePath)):
            raise ValueError(f'Invalid runfiles directory {root_path!r}')
        root_path = pathlib.PurePosixPath(root_path)
        if root_path.is_absolute():
            raise ValueError(f'Runfiles directory “{root_path}” is absolute')
        if '..' in root_path.parts:
            raise ValueError(
                f'Runfiles directory “{root_path}” contains an up-level '
                'reference')
        if not isinstance(runfiles, _runfiles.Runfiles):
            raise ValueError(f'Invalid runfiles {runfiles!r}')
        if not isinstance(symlinks_mode, symlinks.SymlinksMode):
            raise ValueError(f'Invalid symlinks mode {symlinks_mode!r}')
        if not isinstance(conflict_policy, _mapping.ConflictPolicy):
            raise ValueError(f'Invalid conflict policy {conflict_policy!r}')
        if (repo_mapping_manifest is not None
                and not isinstance(repo_mapping_manifest, _artifact.Artifact)):
            raise ValueError(
                'Invalid repository mapping manifest '
                f'{repo_mapping_manifest!r}')
        self._root_path = root_path
        self._runfiles = runfiles
        self._repo_mapping_manifest = repo_mapping_manifest
        self._symlinks_mode = symlinks_mode
        self._build_runfile_links = bool(build_runfile_links)
        self._conflict_policy = conflict_policy
        self._legacy_external_runfiles = legacy_external_runfiles
        self._lock = threading.Lock()
        self._mapping: Optional[_mapping.PathMapping] = None

    @property
    def root_path(self) -> pathlib.PurePosixPath:
        """The execution-root-relative runfiles directory.

        This is only advisory until it has been checked against the other
        trees of the same action and resolved against an execution root."""
        return self._root_path

    possibly_incorrect_exec_path = root_path

    @property
    def runfiles(self) -> _runfiles.Runfiles:
        return self._runfiles

    @property
    def repo_mapping_manifest(self) -> Optional[_artifact.Artifact]:
        return self._repo_mapping_manifest

    @property
    def symlinks_mode(self) -> symlinks.SymlinksMode:
        return self._symlinks_mode

    @property
    def build_runfile_links(self) -> bool:
        return self._build_runfile_links

    @property
    def workspace_name(self) -> str:
        """The name of the workspace directory, for display only."""
        return str(self._runfiles.suffix)

    def effective_symlinks_mode(self) -> symlinks.SymlinksMode:
        """Returns the mode to use when materializing this tree."""
        return symlinks.effective_mode(self._symlinks_mode,
                                       self._build_runfile_links)

    def artifacts(self) -> tuple[_artifact.Artifact, ...]:
        """Returns every artifact needed to materialize this tree."""
        result = self._runfiles.all_artifacts()
        manifest = self._repo_mapping_manifest
        if manifest is not None and manifest not in result:
            result += (manifest,)
        return result

    def mapping(self, on_conflict: Optional[_mapping.ConflictCallback] = None,
                ) -> _mapping.PathMapping:
        """Returns the mapping from tree-relative paths to artifacts.

        Passing on_conflict recomputes the mapping so that the callback sees
        every diagnostic; the result is the same either way.

        Raises:
          ConflictError if the conflict policy is ERROR and two contributions
            conflict
          UnresolvableConflictError if the repository mapping manifest
            collides with another runfile
        """
        if on_conflict is not None:
            return self._compute(on_conflict)
        with self._lock:
            if self._mapping is None:
                self._mapping = self._compute(None)
            return self._mapping

    def _compute(self, on_conflict: Optional[_mapping.ConflictCallback],
                 ) -> _mapping.PathMapping:
        return self._runfiles.inputs(
            self._repo_mapping_manifest, policy=self._conflict_policy,
            legacy_external_runfiles=self._legacy_external_runfiles,
            on_conflict=on_conflict)

    def __repr__(self) -> str:
        return (f'RunfilesTree({str(self._root_path)!r}, '
                f'{self._runfiles!r}, {self._symlinks_mode.name})')
