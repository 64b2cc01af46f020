"""
Schemas
File: tree.py

Purpose: Hex-encoded export models for a built Merkle tree.
These are what the API and storage layers serialize; the engine itself
only deals in raw bytes.
"""

from __future__ import annotations

from typing import Sequence

from pydantic import BaseModel, ConfigDict, Field, field_validator

from allowtree.crypto.hashing import DIGEST_SIZE, from_hex, hash_leaf, to_hex
from allowtree.merkle.merkle_tree import MerkleTree
from allowtree.schemas.errors import HexDecodingException, RootMismatchException


def _normalize_hex(value: str, digest: bool = False) -> str:
    raw = from_hex(value)
    if digest and len(raw) != DIGEST_SIZE:
        raise ValueError(f"expected a {DIGEST_SIZE}-byte digest, got {len(raw)} bytes")
    return to_hex(raw)


class LeafProof(BaseModel):
    """Proof for one unhashed leaf, as published alongside a root."""

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    unhashed_leaf: str = Field(
        ...,
        alias="unhashedLeaf",
        description="0x-prefixed raw leaf bytes",
    )
    proof: list[str] = Field(
        default_factory=list,
        description="0x-prefixed sibling digests, bottom to top",
    )

    @field_validator("unhashed_leaf")
    @classmethod
    def _check_leaf(cls, v: str) -> str:
        return _normalize_hex(v)

    @field_validator("proof")
    @classmethod
    def _check_proof(cls, v: list[str]) -> list[str]:
        return [_normalize_hex(item, digest=True) for item in v]

    def leaf_bytes(self) -> bytes:
        return from_hex(self.unhashed_leaf)

    def proof_bytes(self) -> list[bytes]:
        return [from_hex(item) for item in self.proof]


class TreeProofs(BaseModel):
    """
    A root together with the proof of every leaf, in leaf order.

    This is the record a storage layer keeps per tree. Looking up which
    stored roots contain a given proof is a query across many records;
    contains_proof() answers it for a single record.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    merkle_root: str = Field(..., alias="merkleRoot", description="0x-prefixed root digest")
    leaf_count: int = Field(..., alias="leafCount", ge=1)
    proofs: list[LeafProof] = Field(default_factory=list)

    @field_validator("merkle_root")
    @classmethod
    def _check_root(cls, v: str) -> str:
        return _normalize_hex(v, digest=True)

    @classmethod
    def from_tree(
        cls,
        tree: MerkleTree,
        leaves: Sequence[bytes],
        max_workers: int | None = None,
    ) -> "TreeProofs":
        """
        Export a built tree with the proof of every leaf.

        Args:
            tree: Tree built from exactly these leaves
            leaves: The raw leaves, in the order the tree was built from
            max_workers: Passed through to MerkleTree.leaf_proofs()

        Raises:
            ValueError: If the leaf count does not match the tree
            RootMismatchException: If the leaves hash to a different tree
        """
        if len(leaves) != tree.leaf_count:
            raise ValueError(
                f"tree has {tree.leaf_count} leaves but {len(leaves)} were given"
            )
        for position, (leaf, leaf_hash) in enumerate(zip(leaves, tree.leaf_hashes)):
            if hash_leaf(bytes(leaf)) != leaf_hash:
                raise RootMismatchException(
                    f"Leaf at position {position} does not match tree {tree.root_hex}",
                    expected_root=tree.root_hex,
                    details={"position": position},
                )
        all_proofs = tree.leaf_proofs(max_workers=max_workers)
        return cls(
            merkle_root=tree.root_hex,
            leaf_count=tree.leaf_count,
            proofs=[
                LeafProof(
                    unhashed_leaf=to_hex(bytes(leaf)),
                    proof=[to_hex(sibling) for sibling in siblings],
                )
                for leaf, siblings in zip(leaves, all_proofs)
            ],
        )

    def root_bytes(self) -> bytes:
        return from_hex(self.merkle_root)

    def proof_for_leaf(self, leaf: bytes) -> LeafProof | None:
        """First published proof for a raw leaf, or None."""
        wanted = to_hex(bytes(leaf))
        for entry in self.proofs:
            if entry.unhashed_leaf == wanted:
                return entry
        return None

    def contains_proof(self, proof: Sequence[str | bytes]) -> bool:
        """
        Whether every digest of the given proof appears in this record's proofs.

        Order and position are ignored, so a partial proof (a few of a
        leaf's siblings) still matches the tree it came from. String
        digests may omit the 0x prefix; anything that is not a 32-byte
        digest never matches.
        """
        wanted = set()
        for item in proof:
            if isinstance(item, str):
                try:
                    digest = from_hex(item, require_prefix=False)
                except HexDecodingException:
                    return False
            elif isinstance(item, (bytes, bytearray, memoryview)):
                digest = bytes(item)
            else:
                return False
            if len(digest) != DIGEST_SIZE:
                return False
            wanted.add(to_hex(digest))

        stored = {sibling for entry in self.proofs for sibling in entry.proof}
        return wanted <= stored
