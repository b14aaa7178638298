"""A red-black tree with set and map views."""

from __future__ import annotations

import enum
from operator import itemgetter
from typing import Any, Callable, Iterable, Iterator


class Color(enum.Enum):
    RED = "red"
    BLACK = "black"


class _Node:
    __slots__ = ("value", "color", "parent", "left", "right")

    def __init__(self, value: Any, color: Color, parent: _Node | None) -> None:
        self.value = value
        self.color = color
        self.parent = parent
        self.left: _Node | None = None
        self.right: _Node | None = None


def _is_red(node: _Node | None) -> bool:
    return node is not None and node.color is Color.RED


class RBTree:
    """Ordered tree of values; ``key`` extracts the ordering key. Equal keys are kept."""

    def __init__(self, key: Callable[[Any], Any] | None = None) -> None:
        self._extract = key
        self._root: _Node | None = None
        self._size = 0

    def _key(self, value: Any) -> Any:
        return value if self._extract is None else self._extract(value)

    def insert(self, value: Any) -> tuple[Any, bool]:
        """Insert ``value``; equal keys go after existing ones."""
        k = self._key(value)
        parent = None
        cur = self._root
        while cur is not None:
            parent = cur
            cur = cur.left if self._key(cur.value) > k else cur.right
        node = _Node(value, Color.RED, parent)
        if parent is None:
            self._root = node
        elif self._key(parent.value) > k:
            parent.left = node
        else:
            parent.right = node
        self._size += 1
        self._fix_insert(node)
        return value, True

    def _fix_insert(self, node: _Node) -> None:
        while _is_red(node.parent):
            parent = node.parent
            grand = parent.parent
            if parent is grand.left:
                uncle = grand.right
                if _is_red(uncle):
                    parent.color = uncle.color = Color.BLACK
                    grand.color = Color.RED
                    node = grand
                    continue
                if node is parent.right:
                    self._rotate_left(parent)
                    node, parent = parent, node
                self._rotate_right(grand)
            else:
                uncle = grand.left
                if _is_red(uncle):
                    parent.color = uncle.color = Color.BLACK
                    grand.color = Color.RED
                    node = grand
                    continue
                if node is parent.left:
                    self._rotate_right(parent)
                    node, parent = parent, node
                self._rotate_left(grand)
            parent.color = Color.BLACK
            grand.color = Color.RED
            break
        self._root.color = Color.BLACK

    def _replace_child(self, old: _Node, new: _Node) -> None:
        parent = old.parent
        new.parent = parent
        if parent is None:
            self._root = new
        elif old is parent.left:
            parent.left = new
        else:
            parent.right = new

    def _rotate_left(self, node: _Node) -> None:
        pivot = node.right
        node.right = pivot.left
        if pivot.left is not None:
            pivot.left.parent = node
        self._replace_child(node, pivot)
        pivot.left = node
        node.parent = pivot

    def _rotate_right(self, node: _Node) -> None:
        pivot = node.left
        node.left = pivot.right
        if pivot.right is not None:
            pivot.right.parent = node
        self._replace_child(node, pivot)
        pivot.right = node
        node.parent = pivot

    def _locate(self, key: Any) -> _Node | None:
        cur = self._root
        while cur is not None:
            current = self._key(cur.value)
            if current > key:
                cur = cur.left
            elif current < key:
                cur = cur.right
            else:
                return cur
        return None

    def find(self, key: Any) -> Any:
        """Return a stored value with this key, or None."""
        node = self._locate(key)
        return node.value if node is not None else None

    def __contains__(self, key: Any) -> bool:
        return self._locate(key) is not None

    def _walk(self, first: str, second: str) -> Iterator[Any]:
        stack: list[_Node] = []
        node = self._root
        while stack or node is not None:
            while node is not None:
                stack.append(node)
                node = getattr(node, first)
            node = stack.pop()
            yield node.value
            node = getattr(node, second)

    def __iter__(self) -> Iterator[Any]:
        return self._walk("left", "right")

    def __reversed__(self) -> Iterator[Any]:
        return self._walk("right", "left")

    def __len__(self) -> int:
        return self._size

    def is_valid(self) -> bool:
        """Check ordering, a black root, no red-red edges and equal black heights."""
        if self._root is None:
            return True
        if self._root.color is not Color.BLACK:
            return False
        keys = [self._key(v) for v in self]
        if any(b < a for a, b in zip(keys, keys[1:])):
            return False
        return self._black_height(self._root) >= 0

    def _black_height(self, node: _Node | None) -> int:
        if node is None:
            return 1
        if node.color is Color.RED and (_is_red(node.left) or _is_red(node.right)):
            return -1
        left = self._black_height(node.left)
        right = self._black_height(node.right)
        if left < 0 or right < 0 or left != right:
            return -1
        return left + (1 if node.color is Color.BLACK else 0)

    def height(self) -> int:
        """Number of nodes on the longest root-to-leaf path."""
        return self._height(self._root)

    def _height(self, node: _Node | None) -> int:
        if node is None:
            return 0
        return 1 + max(self._height(node.left), self._height(node.right))


class RBSet:
    """An ordered set of unique values."""

    def __init__(self) -> None:
        self._tree = RBTree()

    def add(self, value: Any) -> bool:
        """Add ``value``; return False if it was already present."""
        if value in self._tree:
            return False
        self._tree.insert(value)
        return True

    def __contains__(self, value: Any) -> bool:
        return value in self._tree

    def __iter__(self) -> Iterator[Any]:
        return iter(self._tree)

    def __len__(self) -> int:
        return len(self._tree)


class RBMap:
    """An ordered mapping with unique keys."""

    def __init__(self) -> None:
        self._tree = RBTree(key=itemgetter(0))

    def insert(self, key: Any, value: Any) -> bool:
        """Insert a pair; return False (and keep the old value) if the key exists."""
        if key in self._tree:
            return False
        self._tree.insert((key, value))
        return True

    def __getitem__(self, key: Any) -> Any:
        pair = self._tree.find(key)
        if pair is None:
            raise KeyError(key)
        return pair[1]

    def __iter__(self) -> Iterator[Any]:
        return (k for k, _ in self._tree)

    def items(self) -> Iterable[tuple[Any, Any]]:
        return iter(self._tree)

    def __len__(self) -> int:
        return len(self._tree)