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

"""Runfiles suppliers: the runfiles trees of one action.

Consumers see two capabilities.  A TreeView is a single runfiles tree; a
TreeCollectionView lists the trees of an action.  SingleRunfilesSupplier
offers both, so code that only knows one of them works unmodified against
an action with exactly one tree."""

from collections.abc import Iterable, Sequence
import pathlib
from typing import Optional, Protocol, Union

from runfiles_tree import artifact as _artifact
from runfiles_tree import mapping as _mapping
from runfiles_tree import symlinks
from runfiles_tree import tree as _tree


class TreeView(Protocol):
    """Read access to a single runfiles tree."""

    @property
    def root_path(self) -> pathlib.PurePosixPath: ...

    @property
    def symlinks_mode(self) -> symlinks.SymlinksMode: ...

    @property
    def build_runfile_links(self) -> bool: ...

    @property
    def workspace_name(self) -> str: ...

    def artifacts(self) -> tuple[_artifact.Artifact, ...]: ...

    def mapping(self, on_conflict: Optional[_mapping.ConflictCallback] = None,
                ) -> _mapping.PathMapping: ...


class TreeCollectionView(Protocol):
    """Read access to all runfiles trees of an action."""

    def runfiles_trees(self) -> Sequence[TreeView]: ...


class SingleRunfilesSupplier:
    """Supplier for an action with exactly one runfiles tree.

    It is a tree itself: all tree accessors delegate to the wrapped tree, and
    runfiles_trees returns a one-element list containing this object."""

    def __init__(self, tree: _tree.RunfilesTree):
        if not isinstance(tree, _tree.RunfilesTree):
            raise ValueError(f'Invalid runfiles tree {tree!r}')
        self._tree = tree

    @classmethod
    def create(cls, root_path: _mapping.PathLike, runfiles, *args,
               **kwargs) -> 'SingleRunfilesSupplier':
        """Creates a supplier for a new tree; see RunfilesTree."""
        return cls(_tree.RunfilesTree(root_path, runfiles, *args, **kwargs))

    @property
    def tree(self) -> _tree.RunfilesTree:
        return self._tree

    def runfiles_trees(self) -> Sequence[TreeView]:
        return [self]

    @property
    def root_path(self) -> pathlib.PurePosixPath:
        return self._tree.root_path

    possibly_incorrect_exec_path = root_path

    @property
    def symlinks_mode(self) -> symlinks.SymlinksMode:
        return self._tree.symlinks_mode

    @property
    def build_runfile_links(self) -> bool:
        return self._tree.build_runfile_links

    @property
    def workspace_name(self) -> str:
        return self._tree.workspace_name

    def effective_symlinks_mode(self) -> symlinks.SymlinksMode:
        return self._tree.effective_symlinks_mode()

    def artifacts(self) -> tuple[_artifact.Artifact, ...]:
        return self._tree.artifacts()

    def mapping(self, on_conflict: Optional[_mapping.ConflictCallback] = None,
                ) -> _mapping.PathMapping:
        return self._tree.mapping(on_conflict)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SingleRunfilesSupplier):
            return NotImplemented
        return self._tree is other._tree

    def __hash__(self) -> int:
        return id(self._tree)

    def __repr__(self) -> str:
        return f'SingleRunfilesSupplier({self._tree!r})'


class CompositeRunfilesSupplier:
    """Supplier for an action with any number of runfiles trees.

    The trees must have pairwise different root paths."""

    def __init__(self, trees: Iterable[TreeView] = ()):
        trees = tuple(trees)
        roots: dict[pathlib.PurePosixPath, TreeView] = {}
        for tree in trees:
            other = roots.get(tree.root_path)
            if other is not None:
                raise ValueError(
                    f'Runfiles directory “{tree.root_path}” is used by '
                    f'multiple trees: {other!r} and {tree!r}')
            roots[tree.root_path] = tree
        self._trees = trees

    @classmethod
    def of(cls, *suppliers: TreeCollectionView,
           ) -> Union['CompositeRunfilesSupplier', SingleRunfilesSupplier]:
        """Combines the trees of several suppliers.

        A tree contributed more than once is only kept the first time.  The
        result is a SingleRunfilesSupplier if exactly one tree remains."""
        trees: list[TreeView] = []
        for supplier in suppliers:
            for tree in supplier.runfiles_trees():
                if not any(_same_tree(tree, t) for t in trees):
                    trees.append(tree)
        if len(trees) == 1:
            (tree,) = trees
            if isinstance(tree, SingleRunfilesSupplier):
                return tree
            if isinstance(tree, _tree.RunfilesTree):
                return SingleRunfilesSupplier(tree)
        return cls(trees)

    def runfiles_trees(self) -> Sequence[TreeView]:
        return list(self._trees)

    def artifacts(self) -> tuple[_artifact.Artifact, ...]:
        """Returns the artifacts of all trees in a stable order."""
        return tuple(dict.fromkeys(
            artifact for tree in self._trees for artifact in tree.artifacts()))

    def __len__(self) -> int:
        return len(self._trees)

    def __repr__(self) -> str:
        return f'CompositeRunfilesSupplier({list(self._trees)!r})'


# The supplier of actions without runfiles.
EMPTY = CompositeRunfilesSupplier()


def _same_tree(a: TreeView, b: TreeView) -> bool:
    return _unwrap(a) is _unwrap(b)


def _unwrap(tree: TreeView) -> TreeView:
    if isinstance(tree, SingleRunfilesSupplier):
        return tree.tree
    return tree
