"""
CLI Tree Commands

Build a tree from a leaf file and query it:
- root:   print the Merkle root
- proof:  print the proof of one leaf (by position or by value)
- index:  print the position of a leaf
- proofs: print the proof of every leaf

Usage:
    allowtree root leaves.txt [--text] [--json]
    allowtree proof leaves.txt (--index N | --leaf HEX) [--text] [--json]
    allowtree index leaves.txt --leaf HEX [--text] [--json]
    allowtree proofs leaves.txt [--workers N] [--text] [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from pathlib import Path

from allowtree.crypto.hashing import to_hex
from allowtree.merkle import NOT_FOUND, MerkleTree
from allowtree.schemas.tree import TreeProofs
from allowtree_cli.leaves import load_leaves, parse_leaf


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_NOT_FOUND = 2


def _build_tree(args: Namespace) -> tuple[list[bytes], MerkleTree]:
    leaves = load_leaves(Path(args.leaves), text=args.text)
    tree = MerkleTree(leaves)
    logger.info(f"Built tree with {tree.leaf_count} leaves, height {tree.height}")
    return leaves, tree


def root_cmd(args: Namespace) -> int:
    """Execute the root command."""
    _, tree = _build_tree(args)

    if args.json:
        print(json.dumps({"merkleRoot": tree.root_hex, "leafCount": tree.leaf_count}, indent=2))
    else:
        print(tree.root_hex)
    return EXIT_SUCCESS


def proof_cmd(args: Namespace) -> int:
    """Execute the proof command."""
    leaves, tree = _build_tree(args)

    if args.leaf is not None:
        leaf = parse_leaf(args.leaf, text=args.text)
        index = tree.index(leaf)
        if index == NOT_FOUND:
            logger.warning("Leaf not found in tree")
            print("Error: leaf not found in tree", file=sys.stderr)
            return EXIT_NOT_FOUND
    else:
        index = args.index

    proof = [to_hex(sibling) for sibling in tree.proof(index)]
    if args.leaf is None:
        leaf = leaves[index]

    if args.json:
        print(json.dumps({
            "merkleRoot": tree.root_hex,
            "index": index,
            "unhashedLeaf": to_hex(leaf),
            "proof": proof,
        }, indent=2))
    else:
        print(f"root: {tree.root_hex}")
        print(f"index: {index}")
        print(f"leaf: {to_hex(leaf)}")
        print(f"proof ({len(proof)}):")
        for sibling in proof:
            print(f"  {sibling}")
    return EXIT_SUCCESS


def index_cmd(args: Namespace) -> int:
    """Execute the index command."""
    _, tree = _build_tree(args)
    index = tree.index(parse_leaf(args.leaf, text=args.text))

    if args.json:
        print(json.dumps({"index": index, "found": index != NOT_FOUND}, indent=2))
    else:
        print(index)
    return EXIT_SUCCESS if index != NOT_FOUND else EXIT_NOT_FOUND


def proofs_cmd(args: Namespace) -> int:
    """Execute the proofs command."""
    leaves, tree = _build_tree(args)
    export = TreeProofs.from_tree(tree, leaves, max_workers=args.workers)

    if args.json:
        print(export.model_dump_json(by_alias=True, indent=2))
    else:
        print(f"root: {export.merkle_root}")
        print(f"leaves: {export.leaf_count}")
        for i, entry in enumerate(export.proofs):
            print(f"[{i}] {entry.unhashed_leaf}")
            for sibling in entry.proof:
                print(f"    {sibling}")
    return EXIT_SUCCESS
