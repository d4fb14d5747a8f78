"""
Core cryptographic utilities.

Tagged hashing, hash schemes and hex encoding for Merkle commitments.
"""
from .hashing import (
    DIGEST_SIZE,
    TAG_BITCOIN_TRANSACTION,
    TAG_RESERVE_LEAF,
    TAG_RESERVE_BRANCH,
    sha256,
    tagged_hash,
    hash_transaction,
    hash_reserve_leaf,
    hash_reserve_branch,
    concat_bytes,
    to_hex,
    from_hex,
    HashScheme,
    BITCOIN_TRANSACTION_SCHEME,
    PROOF_OF_RESERVE_SCHEME,
)

__all__ = [
    "DIGEST_SIZE",
    "TAG_BITCOIN_TRANSACTION",
    "TAG_RESERVE_LEAF",
    "TAG_RESERVE_BRANCH",
    "sha256",
    "tagged_hash",
    "hash_transaction",
    "hash_reserve_leaf",
    "hash_reserve_branch",
    "concat_bytes",
    "to_hex",
    "from_hex",
    "HashScheme",
    "BITCOIN_TRANSACTION_SCHEME",
    "PROOF_OF_RESERVE_SCHEME",
]
