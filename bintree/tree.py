from __future__ import annotations
import logging
from typing import Optional

logger = logging.getLogger(__name__)


class BorrowError(RuntimeError):
    """Raised when a tree is mutated while a MutRef has it checked out."""


class ValueRef:
    """
    Read-only view of the value stored in a node.
    The view is bound to the node, so later overwrites are visible through it.
    """
    __slots__ = ("_node",)

    def __init__(self, node: "Node") -> None:
        self._node = node

    @property
    def value(self) -> int:
        return self._node.value

    def copy(self) -> int:
        return self._node.value

    def __int__(self) -> int:
        return self._node.value

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ValueRef):
            return self._node.value == other._node.value
        if isinstance(other, int):
            return self._node.value == other
        return NotImplemented

    __hash__ = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._node.value!r})"


class MutRef(ValueRef):
    """
    Mutable handle on a stored value.

    Usage:
        ref = tree.get_mut(42)
        ref.value = 16

        with tree.get_mut(42) as ref:   # exclusive checkout of the tree
            ref.value = 16

    Only one handle may be in use at a time. Inside a ``with`` block the owning
    tree enforces this; outside of it, it is the caller's responsibility.
    """
    __slots__ = ("_owner",)

    def __init__(self, node: "Node", owner: Optional["BinTree"] = None) -> None:
        super().__init__(node)
        self._owner = owner

    @property
    def value(self) -> int:
        return self._node.value

    @value.setter
    def value(self, value: int) -> None:
        self._node.value = value

    def set(self, value: int) -> None:
        self._node.value = value

    def __enter__(self) -> "MutRef":
        if self._owner is not None:
            self._owner._checkout()
        return self

    def __exit__(self, exc_type, exc, tb):
        if self._owner is not None:
            self._owner._release()
        return False


class Node:
    __slots__ = ("key", "value", "left", "right")

    def __init__(self, key: int, value: int) -> None:
        self.key = key
        self.value = value
        self.left: Optional[Node] = None
        self.right: Optional[Node] = None

    def _find(self, key: int) -> Optional[Node]:
        cur: Optional[Node] = self
        while cur is not None:
            if key == cur.key:
                return cur
            cur = cur.left if key < cur.key else cur.right
        return None

    def get(self, key: int) -> Optional[int]:
        """Return a copy of the value under key, or None."""
        node = self._find(key)
        return None if node is None else node.value

    def get_ref(self, key: int) -> Optional[ValueRef]:
        node = self._find(key)
        return None if node is None else ValueRef(node)

    def get_mut(self, key: int, owner: Optional["BinTree"] = None) -> Optional[MutRef]:
        node = self._find(key)
        return None if node is None else MutRef(node, owner=owner)

    def insert(self, key: int, value: int, legacy: bool = False) -> None:
        """
        Insert or overwrite.

        With legacy=True the greater-key branch looks at the left child to
        decide between creating a right leaf and descending, and descends
        into the left child. This replaces an existing right subtree when the
        left slot is empty.
        """
        cur = self
        while True:
            if key == cur.key:
                cur.value = value
                logger.debug("overwrote key %d", key)
                return
            if key < cur.key:
                if cur.left is None:
                    cur.left = Node(key, value)
                    logger.debug("new left leaf %d under %d", key, cur.key)
                    return
                cur = cur.left
            elif legacy:
                if cur.left is None:
                    if cur.right is not None:
                        logger.debug("legacy insert drops right subtree of %d", cur.key)
                    cur.right = Node(key, value)
                    logger.debug("new right leaf %d under %d", key, cur.key)
                    return
                cur = cur.left
            else:
                if cur.right is None:
                    cur.right = Node(key, value)
                    logger.debug("new right leaf %d under %d", key, cur.key)
                    return
                cur = cur.right

    def __repr__(self) -> str:
        return f"Node(key={self.key!r}, value={self.value!r})"


class BinTree:
    """
    Unbalanced BST mapping int keys to int values. Not thread-safe.

    API:
        t = BinTree.new()
        t.insert(key, value)       -> None, overwrites an existing key
        t.get(key)                 -> value or None
        t.get_ref(key)             -> ValueRef or None
        t.get_mut(key)             -> MutRef or None
        len(t)                     -> number of distinct keys held
        key in t, t.is_empty

    Configuration:
        legacy_insert=True reproduces the reference insert, whose greater-key
        branch checks the left child instead of the right one. Lookups may
        then miss keys that were inserted.
    """

    def __init__(self, legacy_insert: bool = False) -> None:
        self._root: Optional[Node] = None
        self._checked_out = False
        self.legacy_insert = legacy_insert

    @staticmethod
    def new() -> "BinTree":
        return BinTree()

    @property
    def root(self) -> Optional[Node]:
        return self._root

    @property
    def is_empty(self) -> bool:
        return self._root is None

    # ---------------------------- public ops ---------------------------------

    def get(self, key: int) -> Optional[int]:
        if self._root is None:
            return None
        return self._root.get(key)

    def get_ref(self, key: int) -> Optional[ValueRef]:
        if self._root is None:
            return None
        return self._root.get_ref(key)

    def get_mut(self, key: int) -> Optional[MutRef]:
        if self._root is None:
            return None
        return self._root.get_mut(key, owner=self)

    def insert(self, key: int, value: int) -> None:
        if self._checked_out:
            raise BorrowError(f"insert({key}) while a mutable reference is checked out")
        if self._root is None:
            self._root = Node(key, value)
            logger.debug("created root %d", key)
            return
        self._root.insert(key, value, legacy=self.legacy_insert)

    def __len__(self) -> int:
        keys = set()
        stack = [self._root] if self._root is not None else []
        while stack:
            node = stack.pop()
            keys.add(node.key)
            if node.left is not None:
                stack.append(node.left)
            if node.right is not None:
                stack.append(node.right)
        return len(keys)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, int) or self._root is None:
            return False
        return self._root._find(key) is not None

    def __repr__(self) -> str:
        return f"BinTree(size={len(self)}, legacy_insert={self.legacy_insert})"

    # ---------------------------- helpers ------------------------------------

    def _checkout(self) -> None:
        if self._checked_out:
            raise BorrowError("tree already has a mutable reference checked out")
        self._checked_out = True
        logger.debug("mutable reference checked out")

    def _release(self) -> None:
        self._checked_out = False
        logger.debug("mutable reference released")
