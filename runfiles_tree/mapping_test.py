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

"""Unit tests for runfiles_tree.mapping."""

import pathlib

from absl.testing import absltest
from absl.testing import parameterized

from runfiles_tree import artifact
from runfiles_tree import mapping

_X = artifact.Artifact(pathlib.PurePosixPath('bin/x'))
_Y = artifact.Artifact(pathlib.PurePosixPath('bin/y'))


class FlattenTest(absltest.TestCase):
    """Unit tests for mapping.flatten."""

    def test_empty(self) -> None:
        """An empty input yields an empty mapping."""
        self.assertEmpty(mapping.flatten([]))

    def test_last_writer_wins(self) -> None:
        """Different artifacts for the same path keep the last one."""
        conflicts = []
        result = mapping.flatten([('a/b', _X), ('a/b', _Y)],
                                 on_conflict=conflicts.append)
        self.assertEqual(result, {pathlib.PurePosixPath('a/b'): _Y})
        self.assertLen(conflicts, 1)
        self.assertEqual(conflicts[0].previous, _X)
        self.assertEqual(conflicts[0].current, _Y)
        self.assertIn('a/b', conflicts[0].message())

    def test_equal_duplicate(self) -> None:
        """Adding the same artifact twice is no conflict."""
        conflicts = []
        result = mapping.flatten([('a/b', _X), ('a/b', _X)],
                                 policy=mapping.ConflictPolicy.ERROR,
                                 on_conflict=conflicts.append)
        self.assertEqual(result, {pathlib.PurePosixPath('a/b'): _X})
        self.assertEmpty(conflicts)

    def test_ignore(self) -> None:
        """The IGNORE policy doesn’t report anything."""
        conflicts = []
        result = mapping.flatten([('a', _X), ('a', _Y)],
                                 policy=mapping.ConflictPolicy.IGNORE,
                                 on_conflict=conflicts.append)
        self.assertEqual(result['a'], _Y)
        self.assertEmpty(conflicts)

    def test_error(self) -> None:
        """The ERROR policy turns conflicts into exceptions."""
        with self.assertRaisesRegex(mapping.ConflictError, 'a/b'):
            mapping.flatten([('a/b', _X), ('a/b', _Y)],
                            policy=mapping.ConflictPolicy.ERROR)

    def test_no_callback(self) -> None:
        """Conflicts resolve the same way without a callback."""
        pairs = [('a', _X), ('b', _Y), ('a', _Y)]
        self.assertEqual(mapping.flatten(pairs),
                         mapping.flatten(pairs, on_conflict=lambda c: None))

    def test_declaration_order(self) -> None:
        """The result follows declaration order, not sort order."""
        result = mapping.flatten([('z', _X), ('a', _Y), ('m', _X)])
        self.assertListEqual([str(p) for p in result], ['z', 'a', 'm'])


class CheckPathTest(parameterized.TestCase):
    """Unit tests for mapping.check_path."""

    @parameterized.parameters('a', 'a/b', 'a/./b', 'dir/ä α.txt')
    def test_valid(self, path: str) -> None:
        """Relative paths are accepted."""
        self.assertEqual(mapping.check_path(path), pathlib.PurePosixPath(path))

    @parameterized.parameters('/a', '', '.', '../a', 'a/../b')
    def test_invalid(self, path: str) -> None:
        """Absolute, empty, and escaping paths are rejected."""
        with self.assertRaises(ValueError):
            mapping.check_path(path)


class PathMappingTest(absltest.TestCase):
    """Unit tests for mapping.PathMapping."""

    def test_equality_ignores_order(self) -> None:
        """Mappings with the same associations compare equal."""
        a = mapping.PathMapping([(pathlib.PurePosixPath('a'), _X),
                                 (pathlib.PurePosixPath('b'), _Y)])
        b = mapping.PathMapping([(pathlib.PurePosixPath('b'), _Y),
                                 (pathlib.PurePosixPath('a'), _X)])
        self.assertEqual(a, b)
        self.assertEqual(hash(a), hash(b))

    def test_string_keys(self) -> None:
        """Lookup accepts strings."""
        result = mapping.PathMapping([(pathlib.PurePosixPath('a/b'), _X)])
        self.assertIn('a/b', result)
        self.assertEqual(result['a/b'], _X)
        self.assertNotIn('a', result)


if __name__ == '__main__':
    absltest.main()
