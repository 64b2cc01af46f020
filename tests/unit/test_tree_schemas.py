"""
Tree Export Schema Unit Tests
Tests for allowtree/schemas/tree.py
"""
import json

import pytest
from pydantic import ValidationError

from allowtree.crypto.hashing import keccak256, to_hex
from allowtree.merkle import MerkleTree, verify_proof
from allowtree.schemas.errors import ErrorCodes, RootMismatchException
from allowtree.schemas.tree import LeafProof, TreeProofs
from fixtures.common import GOLDEN_ADDRESSES, GOLDEN_ADDRESSES_ROOT_HEX


class TestLeafProof:
    """Tests for LeafProof."""

    def test_normalizes_hex_case(self):
        entry = LeafProof(unhashedLeaf="0xABCD", proof=["0x" + "AA" * 32])

        assert entry.unhashed_leaf == "0xabcd"
        assert entry.proof == ["0x" + "aa" * 32]

    def test_populate_by_field_name(self):
        entry = LeafProof(unhashed_leaf="0x01")

        assert entry.leaf_bytes() == b"\x01"
        assert entry.proof == []

    def test_rejects_bad_hex(self):
        with pytest.raises(ValidationError):
            LeafProof(unhashedLeaf="0xzz")

    def test_rejects_short_sibling(self):
        with pytest.raises(ValidationError, match="32-byte"):
            LeafProof(unhashedLeaf="0x01", proof=["0x0102"])

    def test_rejects_extra_fields(self):
        with pytest.raises(ValidationError):
            LeafProof(unhashedLeaf="0x01", position=3)


class TestTreeProofs:
    """Tests for TreeProofs."""

    def test_from_tree_golden_addresses(self, address_leaves):
        tree = MerkleTree(address_leaves)
        export = TreeProofs.from_tree(tree, address_leaves)

        assert export.merkle_root == "0x" + GOLDEN_ADDRESSES_ROOT_HEX
        assert export.leaf_count == 10
        assert [p.unhashed_leaf for p in export.proofs] == [a.lower() for a in GOLDEN_ADDRESSES]

    def test_exported_proofs_verify(self, abcde_leaves, abcde_tree):
        export = TreeProofs.from_tree(abcde_tree, abcde_leaves, max_workers=2)

        for entry in export.proofs:
            assert verify_proof(export.root_bytes(), entry.proof_bytes(), entry.leaf_bytes())

    def test_json_uses_camel_case_aliases(self, abcde_leaves, abcde_tree):
        export = TreeProofs.from_tree(abcde_tree, abcde_leaves)
        data = json.loads(export.model_dump_json(by_alias=True))

        assert set(data) == {"merkleRoot", "leafCount", "proofs"}
        assert set(data["proofs"][0]) == {"unhashedLeaf", "proof"}

    def test_json_round_trip(self, abcde_leaves, abcde_tree):
        export = TreeProofs.from_tree(abcde_tree, abcde_leaves)
        restored = TreeProofs.model_validate_json(export.model_dump_json(by_alias=True))

        assert restored == export

    def test_leaf_count_mismatch(self, abcde_leaves, abcde_tree):
        with pytest.raises(ValueError, match="5 leaves"):
            TreeProofs.from_tree(abcde_tree, abcde_leaves[:4])

    def test_leaves_from_another_tree(self, abcde_tree):
        with pytest.raises(RootMismatchException) as exc_info:
            TreeProofs.from_tree(abcde_tree, [b"a", b"b", b"x", b"d", b"e"])

        assert exc_info.value.code == ErrorCodes.ROOT_MISMATCH
        assert exc_info.value.details["position"] == 2
        assert exc_info.value.details["expected_root"] == abcde_tree.root_hex

    def test_reordered_leaves_rejected(self, abcde_leaves, abcde_tree):
        with pytest.raises(RootMismatchException):
            TreeProofs.from_tree(abcde_tree, list(reversed(abcde_leaves)))

    def test_proof_for_leaf(self, abcde_leaves, abcde_tree):
        export = TreeProofs.from_tree(abcde_tree, abcde_leaves)

        assert export.proof_for_leaf(b"c").proof == [to_hex(s) for s in abcde_tree.proof(2)]
        assert export.proof_for_leaf(b"z") is None

    def test_contains_proof(self, abcde_leaves, abcde_tree):
        export = TreeProofs.from_tree(abcde_tree, abcde_leaves)

        assert export.contains_proof(abcde_tree.proof(1))
        assert export.contains_proof([to_hex(s).upper().replace("0X", "0x") for s in abcde_tree.proof(1)])
        assert not export.contains_proof([keccak256(b"nope")])

    def test_contains_partial_proof(self, abcde_leaves, abcde_tree):
        export = TreeProofs.from_tree(abcde_tree, abcde_leaves)

        assert export.contains_proof(abcde_tree.proof(1)[:1])
        assert export.contains_proof(abcde_tree.proof(1)[1:])

    def test_contains_reordered_proof(self, abcde_leaves, abcde_tree):
        export = TreeProofs.from_tree(abcde_tree, abcde_leaves)

        assert export.contains_proof(list(reversed(abcde_tree.proof(1))))

    def test_contains_siblings_across_leaves(self, abcde_leaves, abcde_tree):
        """Digests drawn from different leaves' proofs still match the record."""
        export = TreeProofs.from_tree(abcde_tree, abcde_leaves)

        assert export.contains_proof([abcde_tree.proof(0)[0], abcde_tree.proof(4)[0]])

    def test_contains_proof_unprefixed_hex(self, abcde_leaves, abcde_tree):
        export = TreeProofs.from_tree(abcde_tree, abcde_leaves)

        assert export.contains_proof([s.hex() for s in abcde_tree.proof(3)])

    @pytest.mark.parametrize("bad", [["0xzz"], ["0x0102"], [b"\x01" * 31], [42], ["0xab cd"]])
    def test_contains_proof_malformed_is_false(self, abcde_leaves, abcde_tree, bad):
        export = TreeProofs.from_tree(abcde_tree, abcde_leaves)

        assert export.contains_proof(bad) is False

    def test_contains_proof_distinguishes_trees(self, abcde_leaves, abcde_tree):
        other_leaves = [b"v", b"w", b"x", b"y", b"z"]
        other = TreeProofs.from_tree(MerkleTree(other_leaves), other_leaves)

        assert not other.contains_proof(abcde_tree.proof(0))

    def test_rejects_zero_leaf_count(self):
        with pytest.raises(ValidationError):
            TreeProofs(merkleRoot="0x" + "00" * 32, leafCount=0)
