"""
Merkle Tree and Inclusion Proofs
Tagged-hash Merkle tree construction + proof generation/verification.

This module provides:
- MerkleTree / MerkleNode: immutable tree built from ordered items
- MerkleProof / ProofElement / Side: standalone inclusion proofs
- build_merkle_tree, generate_proof, verify_proof: functional API
- MerkleProver / MerkleVerifier: convenience wrappers

Canonical Commitment Rules:
1. Leaf hashing: tagged_hash(leaf_tag, item)
2. Parent hashing: tagged_hash(branch_tag, left || right)
3. Padding: Duplicate last node if odd number at any level
4. Empty tree: no root (None)
5. Single leaf: root = leaf

Usage:
    from core.merkle import MerkleTree, verify_proof

    tree = MerkleTree(["aaa", "bbb", "ccc", "ddd"])
    root = tree.root_hex()

    proof = tree.generate_proof("ccc")
    assert verify_proof(proof, root)
"""
from .merkle_tree import (
    Item,
    item_bytes,
    MerkleNode,
    MerkleTree,
    iter_pairs,
    reduce_level,
    build_merkle_tree,
    compute_tree_depth,
)

from .merkle_proofs import (
    Side,
    ProofElement,
    MerkleProof,
    generate_proof,
    compute_root_from_proof,
    verify_proof,
    MerkleProver,
    MerkleVerifier,
)


__all__ = [
    # Core types
    "Item",
    "MerkleNode",
    "MerkleTree",
    "Side",
    "ProofElement",
    "MerkleProof",
    # Core functions
    "item_bytes",
    "iter_pairs",
    "reduce_level",
    "build_merkle_tree",
    "compute_tree_depth",
    "generate_proof",
    "compute_root_from_proof",
    "verify_proof",
    # Convenience classes
    "MerkleProver",
    "MerkleVerifier",
]
