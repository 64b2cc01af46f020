"""
Hashing Utilities
Keccak-256 hashing and the pair-merge rule used by allow-list Merkle trees.

This module provides:
- Keccak-256 hashing for raw bytes (leaf hashing)
- Order-independent pair hashing (internal node hashing)
- Hex encoding/decoding with 0x prefix

Hashing Rules (Hard Contracts):
1. Leaf hashing: leaf = keccak256(raw_leaf_bytes)
2. Pair merge: parent = keccak256(min(a, b) + max(a, b))
   where min/max compare the 32-byte digests byte-lexicographically
3. Keccak-256 is the original Keccak submission (Ethereum), NOT NIST SHA3-256

Security/Determinism Notes:
- Always hash raw bytes exactly as given
- Pair merge never depends on physical left/right placement
- All operations are deterministic
"""
from __future__ import annotations

from Crypto.Hash import keccak

from allowtree.schemas.errors import HexDecodingException


# Size in bytes of every digest produced by this module
DIGEST_SIZE: int = 32


def keccak256(data: bytes) -> bytes:
    """
    Compute the Keccak-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte Keccak-256 digest

    Example:
        >>> keccak256(b"").hex()
        'c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470'
    """
    return keccak.new(digest_bits=256, data=data).digest()


def hash_leaf(leaf: bytes) -> bytes:
    """
    Hash a raw leaf into its level-0 digest.

    Alias for keccak256(); kept separate so call sites read as tree logic.
    """
    return keccak256(leaf)


def compare_digests(a: bytes, b: bytes) -> int:
    """
    Compare two digests byte-lexicographically.

    Returns:
        -1 if a < b, 0 if a == b, 1 if a > b
    """
    if a < b:
        return -1
    if a > b:
        return 1
    return 0


def hash_pair(a: bytes, b: bytes) -> bytes:
    """
    Merge two sibling digests into their parent.

    The smaller digest (byte-lexicographic) always goes first, so the
    result is the same regardless of which sibling sits on the left.
    A verifier therefore never needs position bits.

    Args:
        a: One sibling digest
        b: The other sibling digest

    Returns:
        32-byte parent digest
    """
    if compare_digests(a, b) < 0:
        return keccak256(a + b)
    return keccak256(b + a)


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str, require_prefix: bool = True) -> bytes:
    """
    Convert a hexadecimal string to bytes.

    Args:
        hex_string: Hex string, 0x-prefixed unless require_prefix is False
        require_prefix: Reject strings without the 0x prefix

    Returns:
        Decoded bytes

    Raises:
        HexDecodingException: If the prefix is missing (when required),
            the length is odd, or the string contains whitespace
            or invalid characters

    Example:
        >>> from_hex("0xdeadbeef").hex()
        'deadbeef'
    """
    if hex_string[:2] in ("0x", "0X"):
        hex_content = hex_string[2:]
    elif require_prefix:
        raise HexDecodingException(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}...",
            value=hex_string,
        )
    else:
        hex_content = hex_string

    if any(c.isspace() for c in hex_content):
        raise HexDecodingException(
            "Hex string must not contain whitespace",
            value=hex_string,
        )

    if len(hex_content) % 2 != 0:
        raise HexDecodingException(
            f"Hex string must have even length, got length {len(hex_content)}",
            value=hex_string,
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise HexDecodingException(
            f"Invalid hex characters in string: {e}",
            value=hex_string,
        ) from e


__all__ = [
    "DIGEST_SIZE",
    "keccak256",
    "hash_leaf",
    "compare_digests",
    "hash_pair",
    "to_hex",
    "from_hex",
]
