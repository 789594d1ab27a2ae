"""Data models for dirdoc.

This module exports the core data structures used throughout the application.
"""

from dirdoc.models.node import NodeType, TreeNode

__all__ = [
    "NodeType",
    "TreeNode",
]
