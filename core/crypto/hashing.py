"""
Hashing Utilities
Tagged (domain-separated) hashing for Merkle commitments.

This module provides:
- SHA-256 hashing for raw bytes
- BIP340-style tagged hashing: sha256(sha256(tag) || sha256(tag) || msg)
- Convenience wrappers for the fixed tags used by the reserve tree
- HashScheme: the (leaf tag, branch tag) pair a tree is built with
- Hex encoding/decoding (lowercase, no prefix) and byte concatenation

Security/Determinism Notes:
- Always hash raw bytes exactly as given; strings are UTF-8 encoded
- The same message under two different tags yields unrelated digests
- All operations are pure and deterministic
"""
from __future__ import annotations

import hashlib
import re
from dataclasses import dataclass
from functools import lru_cache

from core.schemas.errors import InvalidEncodingException


DIGEST_SIZE = 32

TAG_BITCOIN_TRANSACTION = "Bitcoin_Transaction"
TAG_RESERVE_LEAF = "ProofOfReserve_Leaf"
TAG_RESERVE_BRANCH = "ProofOfReserve_Branch"

_HEX_RE = re.compile(r"^[0-9a-fA-F]*$")


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte SHA-256 digest

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


def _as_bytes(message: bytes | str) -> bytes:
    if isinstance(message, str):
        return message.encode("utf-8")
    return bytes(message)


@lru_cache(maxsize=64)
def _tag_prefix(tag: str) -> bytes:
    """sha256(tag) || sha256(tag), cached since tags repeat for every node."""
    tag_hash = sha256(tag.encode("utf-8"))
    return tag_hash + tag_hash


def tagged_hash(tag: str, message: bytes | str) -> bytes:
    """
    Compute a tagged hash.

    Rule: sha256(sha256(tag) || sha256(tag) || message)

    Args:
        tag: Domain-separation tag (UTF-8 encoded)
        message: Message bytes, or a string that is UTF-8 encoded first

    Returns:
        32-byte digest
    """
    return sha256(_tag_prefix(tag) + _as_bytes(message))


def hash_transaction(message: bytes | str) -> bytes:
    """Tagged hash under the "Bitcoin_Transaction" tag."""
    return tagged_hash(TAG_BITCOIN_TRANSACTION, message)


def hash_reserve_leaf(message: bytes | str) -> bytes:
    """Tagged hash under the "ProofOfReserve_Leaf" tag."""
    return tagged_hash(TAG_RESERVE_LEAF, message)


def hash_reserve_branch(message: bytes | str) -> bytes:
    """Tagged hash under the "ProofOfReserve_Branch" tag."""
    return tagged_hash(TAG_RESERVE_BRANCH, message)


def concat_bytes(first: bytes, second: bytes) -> bytes:
    """Concatenate two byte sequences, preserving order."""
    return bytes(first) + bytes(second)


def to_hex(data: bytes) -> str:
    """
    Convert bytes to a lowercase hexadecimal string.

    No prefix and no separators.

    Example:
        >>> to_hex(bytes.fromhex("DEADBEEF"))
        'deadbeef'
    """
    return data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert a hexadecimal string to bytes.

    Upper- and lower-case digits are accepted. A ``0x`` prefix is not.

    Raises:
        InvalidEncodingException: If the string has odd length or
            contains non-hex characters (whitespace included)

    Example:
        >>> from_hex("deadbeef").hex()
        'deadbeef'
    """
    if not isinstance(hex_string, str):
        raise InvalidEncodingException(
            f"Hex value must be a string, got {type(hex_string).__name__}"
        )

    if len(hex_string) % 2 != 0:
        raise InvalidEncodingException(
            f"Hex string must have even length, got length {len(hex_string)}",
            value=hex_string,
        )

    # bytes.fromhex() tolerates whitespace, so validate the alphabet first
    if not _HEX_RE.match(hex_string):
        raise InvalidEncodingException(
            "Invalid hex characters in string",
            value=hex_string,
        )

    return bytes.fromhex(hex_string)


@dataclass(frozen=True)
class HashScheme:
    """
    The pair of tags a Merkle tree is hashed with.

    Chosen once when a tree is built and reused for every leaf and
    branch hash, so proofs must be verified with the same scheme.

    Attributes:
        leaf_tag: Tag for hashing raw items into leaves
        branch_tag: Tag for hashing concatenated child digests
    """
    leaf_tag: str = TAG_BITCOIN_TRANSACTION
    branch_tag: str = TAG_BITCOIN_TRANSACTION

    def __post_init__(self) -> None:
        if not self.leaf_tag or not self.branch_tag:
            raise ValueError("Hash scheme tags must be non-empty strings")

    def hash_leaf(self, item: bytes | str) -> bytes:
        """Leaf digest: tagged_hash(leaf_tag, item)."""
        return tagged_hash(self.leaf_tag, item)

    def hash_branch(self, left: bytes, right: bytes) -> bytes:
        """Branch digest: tagged_hash(branch_tag, left || right). Order is never swapped."""
        return tagged_hash(self.branch_tag, concat_bytes(left, right))


BITCOIN_TRANSACTION_SCHEME = HashScheme(TAG_BITCOIN_TRANSACTION, TAG_BITCOIN_TRANSACTION)
PROOF_OF_RESERVE_SCHEME = HashScheme(TAG_RESERVE_LEAF, TAG_RESERVE_BRANCH)


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
