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

"""Prints the runfiles trees described by a JSON file.

The input file contains an object with a “trees” list.  Each tree has a
“root” directory, a “workspace” name, and optionally “artifacts”,
“symlinks”, “rootSymlinks”, “repoMappingManifest”, “symlinksMode”, and
“buildRunfileLinks”.  Artifacts are objects with an “execPath” and optionally
a “runfilesPath”, “digest”, and “directory” flag."""

import argparse
from collections.abc import Mapping
import io
import json
import logging
import pathlib
import sys
from typing import Any, IO, Optional

from runfiles_tree import artifact
from runfiles_tree import config
from runfiles_tree import manifest
from runfiles_tree import mapping
from runfiles_tree import runfiles
from runfiles_tree import supplier
from runfiles_tree import symlinks
from runfiles_tree import tree


def main() -> None:
    """Main function."""
    if isinstance(sys.stdout, io.TextIOWrapper):  # typical case
        sys.stdout.reconfigure(encoding='utf-8', errors='backslashreplace',
                               line_buffering=True)
    parser = argparse.ArgumentParser(allow_abbrev=False)
    parser.add_argument('--input', type=pathlib.Path, required=True)
    parser.add_argument('--format', choices=('manifest', 'json'),
                        default='manifest')
    parser.add_argument('--tree', type=pathlib.PurePosixPath)
    parser.add_argument('--exec-root', type=pathlib.PurePath)
    parser.add_argument('--verbose', action='store_true', default=False)
    config.add_arguments(parser)
    opts = parser.parse_args()
    logging.basicConfig(level=logging.DEBUG if opts.verbose else logging.INFO,
                        format='%(levelname)s %(name)s %(message)s')
    try:
        data = json.loads(opts.input.read_text(encoding='utf-8'))
        trees = load(data, config.Options.from_args(opts))
        run(trees, opts.format, opts.tree, opts.exec_root, sys.stdout)
    except ValueError as ex:
        _logger.error('%s', ex)
        sys.exit(1)


def load(data: Mapping[str, Any],
         options: config.Options) -> supplier.TreeCollectionView:
    """Builds the supplier for a parsed JSON description.

    Raises:
      ValueError if the description is invalid or two trees share a root
    """
    trees = data.get('trees') if isinstance(data, Mapping) else None
    if not isinstance(trees, list):
        raise ValueError('Input must contain a list of trees')
    return supplier.CompositeRunfilesSupplier.of(
        *(supplier.SingleRunfilesSupplier(_tree(t, options)) for t in trees))


def run(trees: supplier.TreeCollectionView, output_format: str,
        root: Optional[pathlib.PurePosixPath],
        exec_root: Optional[pathlib.PurePath], file: IO[str]) -> None:
    """Writes the selected trees to file in the given format."""
    selected = [t for t in trees.runfiles_trees()
                if root is None or t.root_path == root]
    if not selected:
        raise ValueError(f'No runfiles tree with root {root}')
    if output_format == 'json':
        json.dump([manifest.to_json(t) for t in selected], file, indent=2)
        file.write('\n')
        return
    if len(selected) > 1:
        raise ValueError('Multiple runfiles trees; select one with --tree')
    (selected_tree,) = selected
    selected_tree.mapping(on_conflict=_warn)
    _logger.info('writing manifest for %s (symlinks: %s)',
                 selected_tree.root_path,
                 symlinks.effective_mode(selected_tree.symlinks_mode,
                                         selected_tree.build_runfile_links
                                         ).value)
    manifest.write(selected_tree, file, exec_root)


def _tree(data: Mapping[str, Any],
          options: config.Options) -> tree.RunfilesTree:
    if not isinstance(data, Mapping):
        raise ValueError(f'Tree {data!r} is not an object')
    artifacts = data.get('artifacts', [])
    if not isinstance(artifacts, list):
        raise ValueError(f'Artifacts {artifacts!r} are not a list')
    files = runfiles.Runfiles(
        data.get('workspace', '_main'),
        map(artifact.Artifact.from_json, artifacts),
        _symlinks(data, 'symlinks'),
        _symlinks(data, 'rootSymlinks'))
    repo_mapping = data.get('repoMappingManifest')
    mode = symlinks.SymlinksMode(data.get('symlinksMode', 'create'))
    return tree.RunfilesTree(
        data.get('root'), files,
        artifact.Artifact.from_json(repo_mapping) if repo_mapping else None,
        options.symlinks_mode(mode),
        options.build_runfile_links and data.get('buildRunfileLinks', True),
        conflict_policy=options.conflict_policy,
        legacy_external_runfiles=options.legacy_external_runfiles)


def _symlinks(data: Mapping[str, Any],
              key: str) -> dict[str, artifact.Artifact]:
    value = data.get(key, {})
    if not isinstance(value, Mapping):
        raise ValueError(f'{key} {value!r} is not an object')
    return {path: artifact.Artifact.from_json(a) for path, a in value.items()}


def _warn(conflict: mapping.Conflict) -> None:
    _logger.warning('%s', conflict.message())


_logger = logging.getLogger('runfiles_tree.dump')

if __name__ == '__main__':
    main()
