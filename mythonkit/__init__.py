"""Runtime objects and executable syntax-tree nodes for Mython, plus a singly linked list."""

__version__ = "0.1.0"
__all__ = ["runtime", "statements", "linked_list"]