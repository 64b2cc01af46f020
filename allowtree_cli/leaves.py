"""
Leaf file loading for the CLI.

A leaf file holds one leaf per line. By default each line is hex
(0x prefix optional), and blank lines and lines starting with '#'
are skipped. In text mode every line is a leaf, taken verbatim as UTF-8.
"""

from __future__ import annotations

import logging
from pathlib import Path

from allowtree.crypto.hashing import from_hex
from allowtree.schemas.errors import HexDecodingException


logger = logging.getLogger(__name__)


def parse_leaf(value: str, text: bool = False) -> bytes:
    """Parse a single leaf given on the command line."""
    if text:
        return value.encode("utf-8")
    return from_hex(value.strip(), require_prefix=False)


def load_leaves(path: Path, text: bool = False) -> list[bytes]:
    """
    Read leaves from a file, preserving file order.

    Raises:
        FileNotFoundError: If the file does not exist
        HexDecodingException: If a line is not valid hex (message names the line)
    """
    if not path.exists():
        raise FileNotFoundError(f"Leaf file not found: {path}")

    leaves: list[bytes] = []
    with open(path, "r", encoding="utf-8") as f:
        for lineno, line in enumerate(f, start=1):
            line = line.rstrip("\r\n")
            if not text and (not line.strip() or line.lstrip().startswith("#")):
                continue
            try:
                leaves.append(parse_leaf(line, text=text))
            except HexDecodingException as e:
                raise HexDecodingException(
                    f"{path}:{lineno}: {e.message}",
                    details={"line": lineno},
                ) from e

    logger.info(f"Loaded {len(leaves)} leaves from {path}")
    return leaves
