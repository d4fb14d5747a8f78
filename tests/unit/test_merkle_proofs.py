"""
Merkle Proof Unit Tests
Tests for core/merkle/merkle_proofs.py

Required tests:
1. Proof round-trip for every item of trees of many sizes
2. Tampering - changed root, sibling, or item fails verification
3. Malformed sibling hex raises instead of returning False
4. Proof element ordering and sides for a concrete four-item tree
"""
import pytest

from core.crypto.hashing import (
    BITCOIN_TRANSACTION_SCHEME,
    PROOF_OF_RESERVE_SCHEME,
    HashScheme,
    tagged_hash,
    to_hex,
)
from core.merkle.merkle_proofs import (
    MerkleProof,
    MerkleProver,
    MerkleVerifier,
    ProofElement,
    Side,
    compute_root_from_proof,
    generate_proof,
    verify_proof,
)
from core.merkle.merkle_tree import MerkleTree, compute_tree_depth
from core.schemas.errors import ErrorCodes, InvalidEncodingException, ItemNotFoundException


TX = "Bitcoin_Transaction"


def leaf(item: str) -> bytes:
    return tagged_hash(TX, item.encode("utf-8"))


def parent(left: bytes, right: bytes) -> bytes:
    return tagged_hash(TX, left + right)


def flip_hex_char(value: str) -> str:
    """Change the first hex character to a different one."""
    replacement = "1" if value[0] == "0" else "0"
    return replacement + value[1:]


class TestSide:
    """Tests for Side direction encoding."""

    def test_directions(self):
        assert Side.LEFT.direction == 0
        assert Side.RIGHT.direction == 1

    def test_from_direction(self):
        assert Side.from_direction(0) is Side.LEFT
        assert Side.from_direction(1) is Side.RIGHT

    def test_from_direction_invalid(self):
        with pytest.raises(ValueError):
            Side.from_direction(2)


class TestProofElement:
    """Tests for ProofElement."""

    def test_hash_normalized_to_lowercase(self):
        element = ProofElement(hash="ABCDEF", side=Side.LEFT)
        assert element.hash == "abcdef"

    def test_side_coerced_from_value(self):
        element = ProofElement(hash="00", side="right")  # type: ignore[arg-type]
        assert element.side is Side.RIGHT
        assert not element.is_left

    def test_dict_form(self):
        element = ProofElement(hash="ab" * 32, side=Side.LEFT)

        assert element.to_dict() == {"hash": "ab" * 32, "direction": 0}
        assert ProofElement.from_dict({"hash": "ab" * 32, "direction": 0}) == element


class TestConcreteScenario:
    """Proof for "bbb" in ["aaa", "bbb", "ccc", "ddd"]."""

    ITEMS = ["aaa", "bbb", "ccc", "ddd"]

    def test_elements_and_sides(self):
        proof = MerkleTree(self.ITEMS).generate_proof("bbb")

        assert len(proof) == 2
        first, second = proof.elements
        assert first == ProofElement(hash=to_hex(leaf("aaa")), side=Side.LEFT)
        assert second == ProofElement(
            hash=to_hex(parent(leaf("ccc"), leaf("ddd"))),
            side=Side.RIGHT,
        )

    def test_verifies_against_tree_root(self):
        tree = MerkleTree(self.ITEMS)
        proof = tree.generate_proof("bbb")

        assert verify_proof(proof, tree.root_hex())

    def test_tampered_root_fails(self):
        tree = MerkleTree(self.ITEMS)
        proof = tree.generate_proof("bbb")

        assert not verify_proof(proof, flip_hex_char(tree.root_hex()))

    def test_last_item_pairs_left(self):
        proof = MerkleTree(self.ITEMS).generate_proof("ddd")

        assert [e.side for e in proof.elements] == [Side.LEFT, Side.LEFT]
        assert proof.elements[0].hash == to_hex(leaf("ccc"))


class TestProofRoundTrip:
    """Every item of every tree size verifies against its own root."""

    @pytest.mark.parametrize("size", list(range(1, 10)) + [16, 17])
    def test_all_items_verify(self, size):
        items = [f"item{i}" for i in range(size)]
        tree = MerkleTree(items)
        root = tree.root_hex()

        for item in items:
            proof = tree.generate_proof(item)
            assert verify_proof(proof, root), f"item {item} of {size} failed"

    @pytest.mark.parametrize("size", [1, 2, 3, 5, 8, 9])
    def test_proof_length_is_depth_minus_one(self, size):
        tree = MerkleTree([f"item{i}" for i in range(size)])

        for item in [f"item{i}" for i in range(size)]:
            assert len(tree.generate_proof(item)) == compute_tree_depth(size) - 1

    def test_single_leaf_proof_is_empty(self):
        tree = MerkleTree(["only"])
        proof = tree.generate_proof("only")

        assert proof.elements == ()
        assert verify_proof(proof, tree.root_hex())

    def test_odd_last_item_sibling_is_itself(self):
        tree = MerkleTree(["aaa", "bbb", "ccc"])
        proof = tree.generate_proof("ccc")

        assert proof.elements[0] == ProofElement(hash=to_hex(leaf("ccc")), side=Side.RIGHT)
        assert verify_proof(proof, tree.root_hex())

    def test_reserve_scheme_round_trip(self):
        items = ["(1,1111)", "(2,2222)", "(3,3333)"]
        tree = MerkleTree(items, scheme=PROOF_OF_RESERVE_SCHEME)
        proof = tree.generate_proof("(2,2222)")

        assert verify_proof(proof, tree.root_hex(), scheme=PROOF_OF_RESERVE_SCHEME)
        assert verify_proof(proof, tree.root_hex(), "ProofOfReserve_Leaf", "ProofOfReserve_Branch")

    def test_wrong_scheme_fails(self):
        items = ["(1,1111)", "(2,2222)"]
        tree = MerkleTree(items, scheme=PROOF_OF_RESERVE_SCHEME)
        proof = tree.generate_proof("(1,1111)")

        assert not verify_proof(proof, tree.root_hex())

    def test_duplicate_item_proves_first_occurrence(self):
        tree = MerkleTree(["aaa", "bbb", "aaa", "ccc"])
        proof = tree.generate_proof("aaa")

        assert proof.elements[0] == ProofElement(hash=to_hex(leaf("bbb")), side=Side.RIGHT)
        assert verify_proof(proof, tree.root_hex())

    def test_generate_proof_function_matches_method(self, example_items):
        tree = MerkleTree(example_items)
        assert generate_proof(tree, "ccc") == tree.generate_proof("ccc")


class TestVerification:
    """Tests for verify_proof edge cases."""

    def test_uppercase_root_matches(self, example_items):
        tree = MerkleTree(example_items)
        proof = tree.generate_proof("aaa")

        assert verify_proof(proof, tree.root_hex().upper())

    def test_none_root_fails(self, example_items):
        proof = MerkleTree(example_items).generate_proof("aaa")
        assert not verify_proof(proof, None)

    def test_malformed_root_is_mismatch(self, example_items):
        proof = MerkleTree(example_items).generate_proof("aaa")
        assert not verify_proof(proof, "invalid_root")

    def test_tampered_item_fails(self, example_items):
        tree = MerkleTree(example_items)
        proof = tree.generate_proof("bbb")
        forged = MerkleProof(item=b"bbx", elements=proof.elements)

        assert not verify_proof(forged, tree.root_hex())

    def test_tampered_sibling_fails(self, example_items):
        tree = MerkleTree(example_items)
        proof = tree.generate_proof("bbb")
        first = proof.elements[0]
        forged = MerkleProof(
            item=proof.item,
            elements=(ProofElement(flip_hex_char(first.hash), first.side),) + proof.elements[1:],
        )

        assert not verify_proof(forged, tree.root_hex())

    def test_swapped_side_fails(self, example_items):
        tree = MerkleTree(example_items)
        proof = tree.generate_proof("bbb")
        first = proof.elements[0]
        forged = MerkleProof(
            item=proof.item,
            elements=(ProofElement(first.hash, Side.RIGHT),) + proof.elements[1:],
        )

        assert not verify_proof(forged, tree.root_hex())

    def test_malformed_sibling_raises(self, example_items):
        tree = MerkleTree(example_items)
        proof = tree.generate_proof("bbb")
        forged = MerkleProof(
            item=proof.item,
            elements=proof.elements[:1] + (ProofElement("zz" * 32, Side.RIGHT),),
        )

        with pytest.raises(InvalidEncodingException) as exc_info:
            verify_proof(forged, tree.root_hex())
        assert exc_info.value.code == ErrorCodes.INVALID_ENCODING
        assert exc_info.value.details["element_index"] == 1

    def test_compute_root_from_proof(self, example_items):
        tree = MerkleTree(example_items)
        proof = tree.generate_proof("eee")

        assert compute_root_from_proof(proof, BITCOIN_TRANSACTION_SCHEME) == tree.root_hash


class TestMerkleProofSerialization:
    """Tests for MerkleProof.to_dict / from_dict."""

    def test_text_item(self, example_items):
        proof = MerkleTree(example_items).generate_proof("ccc")
        data = proof.to_dict()

        assert data["item"] == "ccc"
        assert all(set(e) == {"hash", "direction"} for e in data["elements"])
        assert MerkleProof.from_dict(data) == proof

    def test_binary_item_uses_hex(self):
        items = [b"\xff\xfe", b"ok"]
        tree = MerkleTree(items)
        proof = tree.generate_proof(b"\xff\xfe")
        data = proof.to_dict()

        assert data["item_hex"] == "fffe"
        assert "item" not in data
        restored = MerkleProof.from_dict(data)
        assert restored == proof
        assert verify_proof(restored, tree.root_hex())


class TestMerkleProver:
    """Tests for MerkleProver."""

    def test_prove(self):
        proof = MerkleProver.prove(["aaa", "bbb", "ccc"], "bbb")
        assert len(proof.elements) == 2

    def test_prove_missing_item(self):
        with pytest.raises(ItemNotFoundException):
            MerkleProver.prove(["aaa"], "zzz")

    def test_prove_empty(self):
        with pytest.raises(ItemNotFoundException):
            MerkleProver.prove([], "aaa")

    def test_compute_root(self):
        assert MerkleProver.compute_root(["aaa", "bbb"]) == MerkleTree(["aaa", "bbb"]).root_hex()
        assert MerkleProver.compute_root([]) is None


class TestMerkleVerifier:
    """Tests for MerkleVerifier boundary helpers."""

    def test_verify_valid(self, example_items):
        tree = MerkleTree(example_items)
        assert MerkleVerifier.verify(tree.generate_proof("ddd"), tree.root_hex())

    def test_verify_malformed_sibling_returns_false(self, example_items):
        tree = MerkleTree(example_items)
        forged = MerkleProof(item=b"aaa", elements=(ProofElement("not-hex", Side.RIGHT),))

        assert MerkleVerifier.verify(forged, tree.root_hex()) is False

    def test_verify_item_in_root_with_wire_dicts(self, example_items):
        tree = MerkleTree(example_items)
        elements = [e.to_dict() for e in tree.generate_proof("bbb").elements]

        assert MerkleVerifier.verify_item_in_root("bbb", elements, tree.root_hex())
        assert not MerkleVerifier.verify_item_in_root("zzz", elements, tree.root_hex())

    def test_verify_item_in_root_with_scheme(self):
        scheme = HashScheme("A", "B")
        tree = MerkleTree(["x", "y", "z"], scheme=scheme)
        elements = tree.generate_proof("z").elements

        assert MerkleVerifier.verify_item_in_root("z", elements, tree.root_hex(), scheme)
        assert not MerkleVerifier.verify_item_in_root("z", elements, tree.root_hex())
