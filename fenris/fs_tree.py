"""An in-memory tree of files and directories with access counting."""

from __future__ import annotations

import threading
import weakref
from dataclasses import dataclass, field
from typing import Optional

__all__ = ["Node", "FileSystemTree"]


@dataclass(eq=False)
class Node:
    """A file or directory in the tree; the parent is held weakly."""

    name: str
    is_directory: bool = False
    access_count: int = 0
    children: list[Node] = field(default_factory=list)
    _parent_ref: Optional[weakref.ReferenceType] = field(default=None, repr=False)

    @property
    def parent(self) -> Optional[Node]:
        return self._parent_ref() if self._parent_ref is not None else None

    @parent.setter
    def parent(self, node: Optional[Node]) -> None:
        self._parent_ref = weakref.ref(node) if node is not None else None


class FileSystemTree:
    """A thread-safe tree rooted at "/"."""

    def __init__(self) -> None:
        self.root = Node(name="/", is_directory=True)
        self._lock = threading.Lock()

    def _traverse(self, path: str) -> Optional[Node]:
        if path == "/":
            return self.root
        current = self.root
        for segment in path.split("/"):
            if not segment:
                continue
            current = next((child for child in current.children if child.name == segment), None)
            if current is None:
                return None
        return current

    def add_node(self, path: str, is_directory: bool = False) -> bool:
        """Add a node under an existing directory; False if there is none."""
        slash = path.rfind("/")
        if slash == -1:
            parent_path, name = path, path
        else:
            parent_path, name = path[:slash], path[slash + 1 :]
        with self._lock:
            parent = self._traverse(parent_path)
            if parent is None or not parent.is_directory:
                return False
            node = Node(name=name, is_directory=is_directory)
            node.parent = parent
            parent.children.append(node)
        return True

    def remove_node(self, path: str) -> bool:
        """Detach a node; False if it is missing or being accessed."""
        with self._lock:
            node = self._traverse(path)
            if node is None or node.access_count > 0:
                return False
            parent = node.parent
            if parent is not None:
                parent.children = [child for child in parent.children if child is not node]
        return True

    def find_node(self, path: str) -> Optional[Node]:
        """Return the node at ``path``, or None."""
        with self._lock:
            return self._traverse(path)

    def find_file(self, current_node: Node, name: str) -> Optional[Node]:
        """Return the file child of ``current_node`` called ``name``, or None."""
        with self._lock:
            return next(
                (c for c in current_node.children if c.name == name and not c.is_directory),
                None,
            )

    def find_directory(self, current_node: Node, name: str) -> Optional[Node]:
        """Return the directory child of ``current_node`` called ``name``, or None."""
        with self._lock:
            return next(
                (c for c in current_node.children if c.name == name and c.is_directory),
                None,
            )