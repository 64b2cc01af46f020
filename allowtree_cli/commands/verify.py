"""
CLI Verify Command

Verify an inclusion proof offline, without the leaf list:
- Hash the leaf
- Fold in each sibling with the sorted pair rule
- Compare against the expected root

Usage:
    allowtree verify --root HEX --leaf HEX [--proof HEX ...] [--text] [--json]
"""

from __future__ import annotations

import json
import logging
from argparse import Namespace
from dataclasses import asdict, dataclass, field

from allowtree.crypto.hashing import from_hex, to_hex
from allowtree.merkle import verify_proof
from allowtree_cli.leaves import parse_leaf


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


@dataclass
class VerifySummary:
    """Summary of proof verification for CLI output."""
    root: str = ""
    leaf: str = ""
    proof: list[str] = field(default_factory=list)
    valid: bool = False

    def to_dict(self) -> dict:
        return asdict(self)


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 when the proof is valid, 2 when it is not)
    """
    root = from_hex(args.root, require_prefix=False)
    leaf = parse_leaf(args.leaf, text=args.text)
    proof = [from_hex(item, require_prefix=False) for item in (args.proof or [])]

    valid = verify_proof(root, proof, leaf)
    summary = VerifySummary(
        root=to_hex(root),
        leaf=to_hex(leaf),
        proof=[to_hex(item) for item in proof],
        valid=valid,
    )

    if args.json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print(f"root: {summary.root}")
        print(f"leaf: {summary.leaf}")
        print(f"proof_length: {len(summary.proof)}")
        print(f"valid: {str(summary.valid).lower()}")

    if valid:
        logger.info("Verification passed")
        return EXIT_SUCCESS
    logger.warning("Verification failed")
    return EXIT_VERIFICATION_FAILED
