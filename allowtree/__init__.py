"""
allowtree - Merkle trees for allow lists.

Build a Merkle tree over an ordered list of raw leaves (addresses or
other byte strings), derive its root, produce inclusion proofs and
verify them.
"""

from allowtree.merkle import NOT_FOUND, MerkleTree, verify_proof
from allowtree.schemas.errors import (
    AllowTreeException,
    InvalidInputException,
    LeafIndexException,
    LeafNotFoundException,
)

__version__ = "0.1.0"

__all__ = [
    "NOT_FOUND",
    "MerkleTree",
    "verify_proof",
    "AllowTreeException",
    "InvalidInputException",
    "LeafIndexException",
    "LeafNotFoundException",
]
