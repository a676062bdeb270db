from bintree.tree import BinTree, BorrowError, MutRef, Node, ValueRef

__all__ = ["BinTree", "BorrowError", "MutRef", "Node", "ValueRef"]
