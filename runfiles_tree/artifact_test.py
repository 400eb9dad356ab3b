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

"""Unit tests for runfiles_tree.artifact."""

import pathlib

from absl.testing import absltest
from absl.testing import parameterized

from runfiles_tree import artifact


class ArtifactTest(parameterized.TestCase):
    """Unit tests for artifact.Artifact."""

    def test_default_runfiles_path(self) -> None:
        """The runfiles path defaults to the execution path."""
        file = artifact.Artifact('pkg/data.txt')
        self.assertEqual(file.exec_path, pathlib.PurePosixPath('pkg/data.txt'))
        self.assertEqual(file.runfiles_path, file.exec_path)
        self.assertIsNone(file.external_repository())

    def test_external(self) -> None:
        """External files name their repository."""
        file = artifact.Artifact('external/repo/lib.el', '../repo/lib.el')
        self.assertEqual(file.external_repository(), 'repo')

    def test_digest_is_not_identity(self) -> None:
        """Artifacts only differ by their paths."""
        self.assertEqual(artifact.Artifact('a', digest='1'),
                         artifact.Artifact('a', digest='2'))
        self.assertNotEqual(artifact.Artifact('a'),
                            artifact.Artifact('a', 'b'))

    @parameterized.parameters(('/abs', None), ('a/../b', None), ('', None),
                              ('a', '/abs'), ('a', '../repo'),
                              ('a', 'b/../c'))
    def test_invalid(self, exec_path: str, runfiles_path: str) -> None:
        """Invalid paths are rejected."""
        with self.assertRaises(ValueError):
            artifact.Artifact(exec_path, runfiles_path)

    def test_json(self) -> None:
        """Artifacts can be described as JSON objects."""
        data = {'execPath': 'bazel-out/bin/a', 'runfilesPath': 'a',
                'digest': 'abc', 'directory': True}
        file = artifact.Artifact.from_json(data)
        self.assertEqual(file.runfiles_path, pathlib.PurePosixPath('a'))
        self.assertTrue(file.directory)
        self.assertDictEqual(file.to_json(), data)
        with self.assertRaisesRegex(ValueError, 'execPath'):
            artifact.Artifact.from_json({'runfilesPath': 'a'})
        with self.assertRaisesRegex(ValueError, 'object'):
            artifact.Artifact.from_json('x.txt')
        with self.assertRaisesRegex(ValueError, 'runfilesPath'):
            artifact.Artifact.from_json({'execPath': 'a', 'runfilesPath': 1})


if __name__ == '__main__':
    absltest.main()
