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

"""Handles for build outputs and source files referenced by runfiles."""

from collections.abc import Mapping
import dataclasses
import pathlib
from typing import Any, Optional


@dataclasses.dataclass(frozen=True)
class Artifact:
    """Opaque reference to a file produced or consumed by the build.

    Identity is the execution-root-relative path together with the path the
    file gets inside runfiles trees; the digest is informational only.  The
    runfiles path of a file in an external repository starts with
    ``../<repository>/``."""

    exec_path: pathlib.PurePosixPath
    runfiles_path: pathlib.PurePosixPath = None  # type: ignore[assignment]
    digest: Optional[str] = dataclasses.field(default=None, compare=False)
    directory: bool = dataclasses.field(default=False, compare=False)

    def __post_init__(self) -> None:
        exec_path = pathlib.PurePosixPath(self.exec_path)
        if exec_path.is_absolute():
            raise ValueError(f'Execution path “{exec_path}” is absolute')
        if not exec_path.parts or '..' in exec_path.parts:
            raise ValueError(f'Invalid execution path “{exec_path}”')
        runfiles_path = pathlib.PurePosixPath(
            exec_path if self.runfiles_path is None else self.runfiles_path)
        if runfiles_path.is_absolute():
            raise ValueError(f'Runfiles path “{runfiles_path}” is absolute')
        parts = runfiles_path.parts
        if parts[:1] == ('..',):
            parts = parts[2:]
        if not parts or '..' in parts:
            raise ValueError(f'Invalid runfiles path “{runfiles_path}”')
        object.__setattr__(self, 'exec_path', exec_path)
        object.__setattr__(self, 'runfiles_path', runfiles_path)

    def external_repository(self) -> Optional[str]:
        """Returns the external repository name, or None for the main one."""
        parts = self.runfiles_path.parts
        return parts[1] if parts[0] == '..' else None

    def __str__(self) -> str:
        return str(self.exec_path)

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> 'Artifact':
        """Creates an artifact from its JSON description.

        Raises:
          ValueError if data isn’t a valid artifact description
        """
        if not isinstance(data, Mapping):
            raise ValueError(f'Artifact {data!r} is not an object')
        exec_path = data.get('execPath')
        if not isinstance(exec_path, str):
            raise ValueError(f'Artifact {data} has no valid execPath')
        runfiles_path = data.get('runfilesPath')
        if runfiles_path is not None and not isinstance(runfiles_path, str):
            raise ValueError(f'Artifact {data} has an invalid runfilesPath')
        return cls(pathlib.PurePosixPath(exec_path),
                   runfiles_path,
                   digest=data.get('digest'),
                   directory=bool(data.get('directory', False)))

    def to_json(self) -> dict[str, Any]:
        """Returns a JSON-serializable description."""
        result: dict[str, Any] = {'execPath': str(self.exec_path)}
        if self.runfiles_path != self.exec_path:
            result['runfilesPath'] = str(self.runfiles_path)
        if self.digest is not None:
            result['digest'] = self.digest
        if self.directory:
            result['directory'] = True
        return result
