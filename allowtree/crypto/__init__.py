"""
Core cryptographic utilities.

Keccak-256 hashing and the pair-merge rule for allow-list Merkle trees.
"""
from .hashing import (
    DIGEST_SIZE,
    keccak256,
    hash_leaf,
    compare_digests,
    hash_pair,
    to_hex,
    from_hex,
)

__all__ = [
    "DIGEST_SIZE",
    "keccak256",
    "hash_leaf",
    "compare_digests",
    "hash_pair",
    "to_hex",
    "from_hex",
]
