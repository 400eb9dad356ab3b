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

"""Functions to render runfiles trees as manifests.

A runfiles manifest has one line per runfile, sorted by runfile path:
the path relative to the tree root, a space, and the target file.  Lines
whose path contains a space, newline, or backslash start with a space, and
such characters are escaped as \\s, \\n, and \\b."""

from collections.abc import Generator
import os
import pathlib
from typing import Any, IO, Optional

from runfiles_tree import supplier


def lines(tree: supplier.TreeView,
          exec_root: Optional[pathlib.PurePath] = None,
          ) -> Generator[str, None, None]:
    """Yields the manifest lines for a tree, including line terminators.

    Targets are relative to the execution root unless exec_root is given."""
    entries = tree.mapping()
    for path in sorted(entries, key=str):
        artifact = entries[path]
        target = os.fspath(artifact.exec_path)
        if exec_root is not None:
            target = os.fspath(exec_root / artifact.exec_path)
        name = str(path)
        if any(c in name for c in ' \n\\'):
            name = _escape(name, space=True)
            target = _escape(target, space=False)
            yield f' {name} {target}\n'
        else:
            yield f'{name} {target}\n'


def write(tree: supplier.TreeView, file: IO[str],
          exec_root: Optional[pathlib.PurePath] = None) -> None:
    """Write manifest contents for the given tree to the file object."""
    file.writelines(lines(tree, exec_root))
    file.flush()


def to_json(tree: supplier.TreeView) -> dict[str, Any]:
    """Returns a JSON-serializable description of the tree."""
    entries = tree.mapping()
    return {
        'root': str(tree.root_path),
        'workspace': tree.workspace_name,
        'symlinksMode': tree.symlinks_mode.value,
        'buildRunfileLinks': tree.build_runfile_links,
        'mapping': {str(path): str(artifact.exec_path)
                    for path, artifact in sorted(entries.items(),
                                                 key=lambda i: str(i[0]))},
    }


def _escape(string: str, *, space: bool) -> str:
    string = string.replace('\\', r'\b').replace('\n', r'\n')
    if space:
        string = string.replace(' ', r'\s')
    return string
