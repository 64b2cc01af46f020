"""
Test fixtures package for allowtree tests.

Usage:
    from fixtures.common import make_text_leaves, ABCDEF_ROOT_HEX

    def test_something():
        tree = MerkleTree(make_text_leaves("abcdef"))
"""

from .common import (
    ABCDEF_ROOT_HEX,
    GOLDEN_ADDRESSES,
    GOLDEN_ADDRESSES_ROOT_HEX,
    make_address_leaves,
    make_numbered_leaves,
    make_text_leaves,
)

__all__ = [
    "ABCDEF_ROOT_HEX",
    "GOLDEN_ADDRESSES",
    "GOLDEN_ADDRESSES_ROOT_HEX",
    "make_address_leaves",
    "make_numbered_leaves",
    "make_text_leaves",
]
