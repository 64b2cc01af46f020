"""
CLI command modules.
"""

from allowtree_cli.commands import tree, verify

__all__ = ["tree", "verify"]
