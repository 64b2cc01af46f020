"""
Merkle Proofs Convenience Wrappers
Thin wrappers around MerkleTree and verify_proof for a self-contained API.

This module provides:
- MerkleProof: a proof bundled with its leaf, position and root
- MerkleProver: build proofs straight from a leaf list
- MerkleVerifier: verify bundled or loose proofs
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from allowtree.merkle.merkle_tree import MerkleTree, verify_proof


@dataclass(frozen=True)
class MerkleProof:
    """
    A Merkle inclusion proof for a single raw leaf.

    Attributes:
        leaf: The raw leaf bytes being proven (not the leaf hash)
        index: The 0-based position of the leaf in the original leaf list
        siblings: Sibling digests from bottom to top of the tree
        root: The Merkle root this proof is against
    """
    leaf: bytes
    index: int
    siblings: tuple[bytes, ...] = field(default_factory=tuple)
    root: bytes = b""

    def __post_init__(self) -> None:
        """Validate proof structure."""
        if self.index < 0:
            raise ValueError(f"Leaf index must be non-negative, got {self.index}")
        object.__setattr__(self, "siblings", tuple(self.siblings))


class MerkleProver:
    """
    Convenience class for generating Merkle proofs from raw leaves.

    Example:
        >>> proof = MerkleProver.prove([b"a", b"b", b"c"], index=1)
        >>> proof.leaf
        b'b'
    """

    @staticmethod
    def prove(leaves: Sequence[bytes], index: int) -> MerkleProof:
        """
        Generate a bundled proof for the leaf at the given position.

        Raises:
            InvalidInputException: If leaves is empty
            LeafIndexException: If index is out of range
        """
        tree = MerkleTree(leaves)
        siblings = tree.proof(index)
        return MerkleProof(
            leaf=bytes(leaves[index]),
            index=index,
            siblings=tuple(siblings),
            root=tree.root,
        )

    @staticmethod
    def prove_leaf(leaves: Sequence[bytes], leaf: bytes) -> MerkleProof:
        """
        Generate a bundled proof for a raw leaf (first occurrence).

        Raises:
            LeafNotFoundException: If the leaf is not in the list
        """
        tree = MerkleTree(leaves)
        siblings = tree.proof_for_leaf(leaf)
        return MerkleProof(
            leaf=bytes(leaf),
            index=tree.index(leaf),
            siblings=tuple(siblings),
            root=tree.root,
        )

    @staticmethod
    def prove_all(leaves: Sequence[bytes], max_workers: int | None = None) -> list[MerkleProof]:
        """Generate bundled proofs for every leaf, in leaf order."""
        tree = MerkleTree(leaves)
        all_siblings = tree.leaf_proofs(max_workers=max_workers)
        return [
            MerkleProof(leaf=bytes(leaf), index=i, siblings=tuple(siblings), root=tree.root)
            for i, (leaf, siblings) in enumerate(zip(leaves, all_siblings))
        ]

    @staticmethod
    def compute_root(leaves: Sequence[bytes]) -> bytes:
        """Compute the 32-byte root for a sequence of raw leaves."""
        return MerkleTree(leaves).root


class MerkleVerifier:
    """
    Convenience class for verifying Merkle proofs.

    Example:
        >>> proof = MerkleProver.prove(leaves, index=1)
        >>> MerkleVerifier.verify(proof)
        True
    """

    @staticmethod
    def verify(proof: MerkleProof) -> bool:
        """Verify a bundled proof against the root it carries."""
        return verify_proof(proof.root, proof.siblings, proof.leaf)

    @staticmethod
    def verify_leaf_in_root(leaf: bytes, siblings: Sequence[bytes], root: bytes) -> bool:
        """
        Verify a raw leaf is included in a Merkle root using loose components.

        No position is needed: pair hashing is order-independent.
        """
        return verify_proof(root, siblings, leaf)


__all__ = [
    "MerkleProof",
    "MerkleProver",
    "MerkleVerifier",
]
