"""
Merkle Tree Implementation
Deterministic allow-list Merkle tree construction, proof generation,
leaf indexing and proof verification.

This module provides:
- MerkleTree: immutable tree built once from an ordered list of raw leaves
- verify_proof: stateless inclusion check against a known root
- Batch proof generation fanned out over a thread pool

Canonical Commitment Rules (Hard Contracts):
1. Leaf hashing: leaf = keccak256(raw_leaf_bytes)
   - Implemented via allowtree.crypto.hashing.hash_leaf()
2. Parent hashing: parent = keccak256(min(a, b) + max(a, b))
   - Implemented via allowtree.crypto.hashing.hash_pair()
3. Odd rule: the last node of an odd level is carried up unchanged
   (never duplicated, never re-hashed)
4. Empty leaves: rejected with InvalidInputException
5. Single leaf: root = keccak256(leaf), proof is empty

Determinism Notes:
- Leaf order is defined by the caller and is the addressing scheme
  for index() and proof(); this module never sorts leaves
- Proofs carry no position bits; verification sorts each pair instead
- Duplicate leaves resolve to their first occurrence
"""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, wait
from typing import Iterable, Sequence

from allowtree.config.runtime import get_default_config
from allowtree.crypto.hashing import DIGEST_SIZE, hash_leaf, hash_pair, to_hex
from allowtree.schemas.errors import (
    InvalidInputException,
    LeafIndexException,
    LeafNotFoundException,
)


logger = logging.getLogger(__name__)

# Index sentinel for leaves that are not in the tree
NOT_FOUND: int = -1

_BYTES_TYPES = (bytes, bytearray, memoryview)

Level = tuple[bytes, ...]


def _coerce_leaf(leaf: object, position: int | None = None) -> bytes:
    if not isinstance(leaf, _BYTES_TYPES):
        where = f" at position {position}" if position is not None else ""
        raise InvalidInputException(
            f"Leaf{where} must be bytes, got {type(leaf).__name__}",
            details={"position": position} if position is not None else None,
        )
    return bytes(leaf)


def merge_level(level: Sequence[bytes]) -> Level:
    """
    Derive the next level up by pairwise merging.

    Pairs (0, 1), (2, 3), ... are merged with hash_pair(). If the level
    has an odd count, the last node is carried up unchanged.

    Example: [a, b, c] -> [hash_pair(a, b), c]
    """
    merged: list[bytes] = []
    for i in range(0, len(level), 2):
        if i + 1 == len(level):
            merged.append(level[i])
        else:
            merged.append(hash_pair(level[i], level[i + 1]))
    return tuple(merged)


def compute_tree_height(num_leaves: int) -> int:
    """
    Number of levels (leaf level and root level inclusive) for a leaf count.

    A single leaf has height 1, two leaves height 2, five leaves height 4.
    Returns 0 for an empty tree.
    """
    if num_leaves <= 0:
        return 0
    height = 1
    n = num_leaves
    while n > 1:
        n = (n + 1) // 2
        height += 1
    return height


class MerkleTree:
    """
    An immutable Merkle tree over an ordered list of raw leaves.

    Levels are stored bottom (leaf hashes) to top (root). The tree is
    built once in the constructor and exposes read-only queries, so a
    single instance can be shared freely between threads.

    Example:
        >>> tree = MerkleTree([b"a", b"b", b"c"])
        >>> proof = tree.proof(2)
        >>> verify_proof(tree.root, proof, b"c")
        True
    """

    __slots__ = ("_levels",)

    def __init__(self, leaves: Iterable[bytes]) -> None:
        if isinstance(leaves, _BYTES_TYPES) or isinstance(leaves, str):
            raise InvalidInputException(
                "Leaves must be a sequence of byte strings, not a single value"
            )
        hashed = tuple(
            hash_leaf(_coerce_leaf(leaf, i)) for i, leaf in enumerate(leaves)
        )
        if not hashed:
            raise InvalidInputException("Cannot build a Merkle tree from an empty leaf list")

        levels: list[Level] = [hashed]
        while len(levels[-1]) > 1:
            levels.append(merge_level(levels[-1]))
        self._levels: tuple[Level, ...] = tuple(levels)

        logger.debug(
            "Built Merkle tree: %d leaves, height %d, root %s",
            len(hashed), len(levels), to_hex(self.root),
        )

    @classmethod
    def from_leaves(cls, leaves: Iterable[bytes]) -> "MerkleTree":
        """Build a tree from raw leaves (alias for the constructor)."""
        return cls(leaves)

    # ------------------------------------------------------------------
    # Structure
    # ------------------------------------------------------------------

    @property
    def levels(self) -> tuple[Level, ...]:
        """All levels, bottom (leaf hashes) to top (root)."""
        return self._levels

    @property
    def leaf_hashes(self) -> Level:
        """Level 0: one digest per input leaf, in input order."""
        return self._levels[0]

    @property
    def leaf_count(self) -> int:
        return len(self._levels[0])

    @property
    def height(self) -> int:
        """Number of levels, leaf level and root level inclusive."""
        return len(self._levels)

    @property
    def root(self) -> bytes:
        """The single digest at the top level."""
        return self._levels[-1][0]

    @property
    def root_hex(self) -> str:
        return to_hex(self.root)

    def __len__(self) -> int:
        return self.leaf_count

    def __contains__(self, leaf: object) -> bool:
        if not isinstance(leaf, _BYTES_TYPES):
            return False
        return self.index(bytes(leaf)) != NOT_FOUND

    def __repr__(self) -> str:
        return f"MerkleTree(leaves={self.leaf_count}, root={self.root_hex})"

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def index(self, leaf: bytes) -> int:
        """
        Position of a raw leaf in level 0.

        Linear scan; the first matching position wins when a leaf occurs
        more than once. Callers needing O(1) lookups can keep their own
        {leaf_hash: position} map built from leaf_hashes.

        Returns:
            The 0-based position, or NOT_FOUND if the leaf is absent
        """
        target = hash_leaf(_coerce_leaf(leaf))
        for position, digest in enumerate(self._levels[0]):
            if digest == target:
                return position
        return NOT_FOUND

    # ------------------------------------------------------------------
    # Proofs
    # ------------------------------------------------------------------

    def proof(self, index: int) -> list[bytes]:
        """
        Generate the inclusion proof for the leaf at the given position.

        Algorithm:
        1. Start at the leaf position in level 0
        2. At each level below the root:
           - Sibling position is index XOR 1
           - Record the sibling only if it exists; a carried node has
             no sibling and contributes nothing at that level
           - Move up: index = index // 2
        3. Stop at the root level

        Args:
            index: 0-based position of the leaf

        Returns:
            Sibling digests, bottom to top

        Raises:
            LeafIndexException: If index is out of range
        """
        if index < 0 or index >= self.leaf_count:
            raise LeafIndexException(
                f"Leaf index {index} out of range for {self.leaf_count} leaves",
                leaf_index=index,
                leaf_count=self.leaf_count,
            )

        siblings: list[bytes] = []
        current = index
        for level in self._levels[:-1]:
            sibling = current ^ 1
            if sibling < len(level):
                siblings.append(level[sibling])
            current //= 2
        return siblings

    def proof_for_leaf(self, leaf: bytes) -> list[bytes]:
        """
        Generate the inclusion proof for a raw leaf.

        The leaf is located with index(), so duplicates resolve to
        their first occurrence.

        Raises:
            LeafNotFoundException: If the leaf is not in the tree
        """
        position = self.index(leaf)
        if position == NOT_FOUND:
            raise LeafNotFoundException(
                "Leaf is not part of this tree",
                leaf_hash=to_hex(hash_leaf(bytes(leaf))),
            )
        return self.proof(position)

    def leaf_proofs(
        self,
        max_workers: int | None = None,
        chunk_size: int | None = None,
    ) -> list[list[bytes]]:
        """
        Generate the proof of every leaf, aligned with level 0.

        Work is split into contiguous index ranges and dispatched to a
        thread pool. Each task writes only the output slots of its own
        range; the call returns after every task has finished. The result
        satisfies leaf_proofs()[i] == proof(i) for every i.

        Args:
            max_workers: Pool size (defaults to the configured proof workers)
            chunk_size: Leaves per task (defaults to the configured chunk size)

        Returns:
            One proof per leaf, in leaf order

        Raises:
            InvalidInputException: If max_workers or chunk_size is < 1
        """
        config = get_default_config().proof
        if max_workers is None:
            max_workers = config.workers
        if chunk_size is None:
            chunk_size = config.chunk_size
        if max_workers is not None and max_workers < 1:
            raise InvalidInputException(f"max_workers must be >= 1, got {max_workers}")
        if chunk_size < 1:
            raise InvalidInputException(f"chunk_size must be >= 1, got {chunk_size}")

        count = self.leaf_count
        results: list[list[bytes]] = [[] for _ in range(count)]

        def fill(start: int, stop: int) -> None:
            for i in range(start, stop):
                results[i] = self.proof(i)

        ranges = [(start, min(start + chunk_size, count)) for start in range(0, count, chunk_size)]

        if max_workers == 1 or len(ranges) == 1:
            for start, stop in ranges:
                fill(start, stop)
            return results

        logger.debug(
            "Computing %d leaf proofs in %d tasks (max_workers=%s)",
            count, len(ranges), max_workers,
        )
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            futures = [pool.submit(fill, start, stop) for start, stop in ranges]
            wait(futures)

        for future in futures:
            error = future.exception()
            if error is not None:
                raise error
        return results

    # ------------------------------------------------------------------
    # Verification
    # ------------------------------------------------------------------

    def verify(self, proof: Sequence[bytes], target: bytes) -> bool:
        """Verify a proof for a raw leaf against this tree's root."""
        return verify_proof(self.root, proof, target)


def verify_proof(root: bytes, proof: Iterable[bytes], target: bytes) -> bool:
    """
    Verify that a raw leaf is included under a root.

    Algorithm:
    1. Start with keccak256(target)
    2. Fold in each sibling, bottom to top, with hash_pair()
    3. Compare the result to root byte-for-byte

    Malformed input (non-bytes values, digests that are not 32 bytes)
    yields False rather than an exception.

    Args:
        root: Expected 32-byte root
        proof: Sibling digests, bottom to top
        target: Raw leaf bytes (not the leaf hash)

    Returns:
        True if the proof is valid, False otherwise
    """
    if not isinstance(root, _BYTES_TYPES) or not isinstance(target, _BYTES_TYPES):
        return False
    if len(root) != DIGEST_SIZE:
        return False
    if isinstance(proof, _BYTES_TYPES) or isinstance(proof, str):
        return False
    try:
        siblings = list(proof)
    except TypeError:
        return False

    current = hash_leaf(bytes(target))
    for sibling in siblings:
        if not isinstance(sibling, _BYTES_TYPES) or len(sibling) != DIGEST_SIZE:
            return False
        current = hash_pair(current, bytes(sibling))

    return current == bytes(root)


__all__ = [
    "NOT_FOUND",
    "Level",
    "MerkleTree",
    "merge_level",
    "compute_tree_height",
    "verify_proof",
]
