"""
Merkle Tree and Inclusion Proofs
Allow-list Merkle tree construction + proof generation/verification.

This module provides:
- MerkleTree: immutable tree over ordered raw leaves
- verify_proof: check a raw leaf against a root and sibling list
- NOT_FOUND: index sentinel for absent leaves
- MerkleProof / MerkleProver / MerkleVerifier: bundled-proof helpers

Canonical Commitment Rules:
1. Leaf hashing: keccak256(raw_leaf)
2. Parent hashing: keccak256(min(a, b) + max(a, b))
3. Odd levels: carry the last node up unchanged
4. Empty tree: rejected
5. Single leaf: root = keccak256(leaf), empty proof

Usage:
    from allowtree.merkle import MerkleTree, verify_proof

    tree = MerkleTree([b"a", b"b", b"c"])
    proof = tree.proof(tree.index(b"b"))
    assert verify_proof(tree.root, proof, b"b")
"""
from .merkle_tree import (
    NOT_FOUND,
    Level,
    MerkleTree,
    merge_level,
    compute_tree_height,
    verify_proof,
)

from .merkle_proofs import (
    MerkleProof,
    MerkleProver,
    MerkleVerifier,
)


__all__ = [
    # Core types
    "NOT_FOUND",
    "Level",
    "MerkleTree",
    # Core functions
    "merge_level",
    "compute_tree_height",
    "verify_proof",
    # Convenience classes
    "MerkleProof",
    "MerkleProver",
    "MerkleVerifier",
]
