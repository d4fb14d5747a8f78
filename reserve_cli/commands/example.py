"""
CLI Example Command

Build, prove and verify over a fixed five-item list with the
Bitcoin_Transaction scheme.

Usage:
    por example [--item ccc]
"""

from __future__ import annotations

from argparse import Namespace

from core.crypto.hashing import BITCOIN_TRANSACTION_SCHEME
from core.merkle.merkle_proofs import verify_proof
from core.merkle.merkle_tree import MerkleTree


EXIT_SUCCESS = 0
EXIT_VERIFICATION_FAILED = 2

EXAMPLE_ITEMS = ["aaa", "bbb", "ccc", "ddd", "eee"]


def example_cmd(args: Namespace) -> int:
    """Execute the example command."""
    target = args.item
    tree = MerkleTree(EXAMPLE_ITEMS, scheme=BITCOIN_TRANSACTION_SCHEME)
    root = tree.root_hex()

    print("Merkle Tree Example")
    print("-------------------")
    print(f"Example data: {', '.join(EXAMPLE_ITEMS)}")
    print(f"Merkle root: {root}")

    proof = tree.generate_proof(target)
    print(f"Proof for '{target}':")
    for element in proof.elements:
        print(f"  Hash: {element.hash}, Is Left: {element.is_left}")

    ok = verify_proof(proof, root, scheme=BITCOIN_TRANSACTION_SCHEME)
    print(f"Proof is valid: {ok}")
    return EXIT_SUCCESS if ok else EXIT_VERIFICATION_FAILED
