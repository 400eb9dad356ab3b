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

"""Command-line options that influence how runfiles trees are built."""

import argparse
import dataclasses

from runfiles_tree import mapping
from runfiles_tree import symlinks


@dataclasses.dataclass(frozen=True)
class Options:
    """Build options relevant to runfiles trees."""

    build_runfile_links: bool = True
    enable_runfiles: bool = True
    legacy_external_runfiles: bool = False
    conflict_policy: mapping.ConflictPolicy = mapping.ConflictPolicy.WARN

    def symlinks_mode(self, requested: symlinks.SymlinksMode,
                      ) -> symlinks.SymlinksMode:
        """Returns the mode for a tree that asks for requested."""
        if not self.enable_runfiles:
            return symlinks.SymlinksMode.SKIP
        return requested

    @classmethod
    def from_args(cls, opts: argparse.Namespace) -> 'Options':
        """Creates options from arguments parsed by add_arguments."""
        return cls(build_runfile_links=opts.build_runfile_links,
                   enable_runfiles=opts.enable_runfiles,
                   legacy_external_runfiles=opts.legacy_external_runfiles,
                   conflict_policy=mapping.ConflictPolicy(opts.conflict_policy))


def add_arguments(parser: argparse.ArgumentParser) -> None:
    """Adds the options to a command-line parser."""
    parser.add_argument('--build-runfile-links', action='store_true',
                        default=True)
    parser.add_argument('--nobuild-runfile-links', action='store_false',
                        dest='build_runfile_links')
    parser.add_argument('--enable-runfiles', action='store_true',
                        default=True)
    parser.add_argument('--noenable-runfiles', action='store_false',
                        dest='enable_runfiles')
    parser.add_argument('--legacy-external-runfiles', action='store_true',
                        default=False)
    parser.add_argument('--conflict-policy', default='warn',
                        choices=[p.value for p in mapping.ConflictPolicy])
