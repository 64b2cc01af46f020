"""
allowtree CLI

Command-line interface for allowtree.

Usage:
    python -m allowtree_cli root leaves.txt
    python -m allowtree_cli proof leaves.txt --index 3
    python -m allowtree_cli verify --root 0x... --leaf 0x... --proof 0x... 0x...
"""

__version__ = "0.1.0"
