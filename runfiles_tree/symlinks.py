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

"""Symlink policy for runfiles trees."""

import enum


class SymlinksMode(enum.Enum):
    """How the symlinks of a runfiles tree are created on disk."""

    # Never create symlinks.
    SKIP = 'skip'
    # Create symlinks that don’t exist yet.
    CREATE = 'create'
    # Recreate all symlinks unconditionally.
    FORCE = 'force'


def effective_mode(mode: SymlinksMode,
                   build_runfile_links: bool) -> SymlinksMode:
    """Returns the mode to apply when materializing a tree.

    Nothing gets created during the build if runfile links are disabled,
    whatever the mode of the tree says."""
    if not build_runfile_links:
        return SymlinksMode.SKIP
    return mode
