"""
Merkle Proofs
Inclusion proof generation and tree-independent verification.

This module provides:
- Side / ProofElement / MerkleProof: the proof value types
- generate_proof: sibling path for an item of a built tree
- verify_proof: recompute a root from an item and its path
- MerkleProver / MerkleVerifier: convenience class wrappers

Proof Rules:
1. Elements are ordered from the leaf level up to (excluding) the root
2. Each element is the sibling's hex digest plus the side the sibling is on
3. A single-leaf tree yields an empty proof (leaf digest == root)
4. Odd levels pair the last node with itself, exactly as during build

Error Rules:
- Unknown item -> ItemNotFoundException
- Malformed sibling hex -> InvalidEncodingException (never a silent False)
- Root mismatch -> verify_proof returns False
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Sequence

from core.crypto.hashing import (
    TAG_BITCOIN_TRANSACTION,
    HashScheme,
    from_hex,
    to_hex,
)
from core.merkle.merkle_tree import (
    Item,
    MerkleNode,
    MerkleTree,
    item_bytes,
)
from core.schemas.errors import InvalidEncodingException


logger = logging.getLogger(__name__)


class Side(str, Enum):
    """Which side of the path node the sibling digest sits on."""
    LEFT = "left"
    RIGHT = "right"

    @property
    def direction(self) -> int:
        """Wire encoding: 0 = sibling on the left, 1 = sibling on the right."""
        return 0 if self is Side.LEFT else 1

    @classmethod
    def from_direction(cls, direction: int) -> "Side":
        if direction == 0:
            return cls.LEFT
        if direction == 1:
            return cls.RIGHT
        raise ValueError(f"Direction must be 0 (left) or 1 (right), got {direction!r}")


@dataclass(frozen=True)
class ProofElement:
    """
    One step of a Merkle proof.

    Attributes:
        hash: Sibling digest as hex (normalized to lowercase)
        side: Side of the sibling relative to the running hash
    """
    hash: str
    side: Side

    def __post_init__(self) -> None:
        if isinstance(self.hash, str):
            object.__setattr__(self, "hash", self.hash.lower())
        if not isinstance(self.side, Side):
            object.__setattr__(self, "side", Side(self.side))

    @property
    def is_left(self) -> bool:
        return self.side is Side.LEFT

    @property
    def direction(self) -> int:
        return self.side.direction

    def to_dict(self) -> dict[str, Any]:
        return {"hash": self.hash, "direction": self.direction}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ProofElement":
        return cls(hash=data["hash"], side=Side.from_direction(int(data["direction"])))


@dataclass(frozen=True)
class MerkleProof:
    """
    A Merkle inclusion proof for a single item.

    Standalone value: verifying it requires only the expected root and
    the hash scheme, never the tree it came from.

    Attributes:
        item: The raw item bytes being proven
        elements: Sibling steps from the leaf level upwards
    """
    item: bytes
    elements: tuple[ProofElement, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "item", item_bytes(self.item))
        object.__setattr__(self, "elements", tuple(self.elements))

    def __len__(self) -> int:
        return len(self.elements)

    def to_dict(self) -> dict[str, Any]:
        """
        Serialize for transport.

        The item is emitted as text when it is valid UTF-8, otherwise
        as hex under ``item_hex``.
        """
        data: dict[str, Any]
        try:
            data = {"item": self.item.decode("utf-8")}
        except UnicodeDecodeError:
            data = {"item_hex": to_hex(self.item)}
        data["elements"] = [element.to_dict() for element in self.elements]
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MerkleProof":
        """
        Inverse of to_dict().

        Raises:
            InvalidEncodingException: If ``item_hex`` is malformed
            KeyError: If neither ``item`` nor ``item_hex`` is present
        """
        if "item" in data:
            item = item_bytes(data["item"])
        else:
            item = from_hex(data["item_hex"])
        elements = tuple(ProofElement.from_dict(e) for e in data.get("elements", []))
        return cls(item=item, elements=elements)


def _sibling_step(level: Sequence[MerkleNode], index: int) -> ProofElement:
    """Sibling of ``index`` within its pair, duplicating an odd last node."""
    pair_start = index - (index % 2)
    if index == pair_start:
        # Target is the left element; sibling on the right (itself if unpaired)
        sibling = level[index + 1] if index + 1 < len(level) else level[index]
        return ProofElement(hash=sibling.hex(), side=Side.RIGHT)
    # Target is the right element; sibling on the left
    return ProofElement(hash=level[pair_start].hex(), side=Side.LEFT)


def generate_proof(tree: MerkleTree, item: Item) -> MerkleProof:
    """
    Generate a Merkle proof for ``item``.

    Algorithm:
    1. Look up the first-occurrence leaf index of the item
    2. At each level below the root:
       - Record the sibling of the current index and its side
       - Move up: index = pair_start // 2
    3. Stop at the root level (it contributes no element)

    Args:
        tree: Built MerkleTree
        item: Item to prove (str or bytes)

    Returns:
        MerkleProof for the item

    Raises:
        ItemNotFoundException: If the item is not in the tree
            (always the case for an empty tree)
    """
    data = item_bytes(item)
    index = tree.index_of(data)

    elements: list[ProofElement] = []
    for level in tree.levels[:-1]:
        elements.append(_sibling_step(level, index))
        index //= 2

    return MerkleProof(item=data, elements=tuple(elements))


def compute_root_from_proof(proof: MerkleProof, scheme: HashScheme) -> bytes:
    """
    Replay a proof and return the root digest it implies.

    Raises:
        InvalidEncodingException: If a sibling hash is not valid hex
    """
    current = scheme.hash_leaf(proof.item)

    for position, element in enumerate(proof.elements):
        try:
            sibling = from_hex(element.hash)
        except InvalidEncodingException as e:
            e.details["element_index"] = position
            raise

        if element.is_left:
            current = scheme.hash_branch(sibling, current)
        else:
            current = scheme.hash_branch(current, sibling)

    return current


def verify_proof(
    proof: MerkleProof,
    expected_root_hex: str | None,
    leaf_tag: str = TAG_BITCOIN_TRANSACTION,
    branch_tag: str = TAG_BITCOIN_TRANSACTION,
    *,
    scheme: HashScheme | None = None,
) -> bool:
    """
    Verify a Merkle proof against an expected root.

    Pure: no tree instance is needed. The comparison is made on
    lowercase hex, so an upper-case root string still matches.

    Args:
        proof: MerkleProof to verify
        expected_root_hex: Claimed root as hex (None never verifies)
        leaf_tag: Tag the tree's leaves were hashed with
        branch_tag: Tag the tree's branches were hashed with
        scheme: Pre-built HashScheme; takes precedence over the tags

    Returns:
        True if the recomputed root equals the expected root

    Raises:
        InvalidEncodingException: If a sibling hash is not valid hex
    """
    if scheme is None:
        scheme = HashScheme(leaf_tag, branch_tag)

    computed = to_hex(compute_root_from_proof(proof, scheme))

    if expected_root_hex is None:
        return False
    return computed == expected_root_hex.strip().lower()


class MerkleProver:
    """
    Convenience class for generating Merkle proofs from raw items.

    Example:
        >>> proof = MerkleProver.prove(["aaa", "bbb", "ccc"], "bbb")
        >>> len(proof.elements)
        2
    """

    @staticmethod
    def prove(
        items: Iterable[Item],
        item: Item,
        scheme: HashScheme | None = None,
    ) -> MerkleProof:
        """
        Build a tree over ``items`` and prove ``item``.

        Raises:
            ItemNotFoundException: If item is not among items
        """
        return MerkleTree(items, scheme=scheme).generate_proof(item)

    @staticmethod
    def compute_root(
        items: Iterable[Item],
        scheme: HashScheme | None = None,
    ) -> str | None:
        """Root hex for ``items``, or None when there are none."""
        return MerkleTree(items, scheme=scheme).root_hex()


class MerkleVerifier:
    """
    Convenience class for verifying Merkle proofs at a boundary.

    Unlike verify_proof(), these methods never raise on malformed
    input: an undecodable sibling is logged and reported as False.
    """

    @staticmethod
    def verify(
        proof: MerkleProof,
        root_hex: str | None,
        scheme: HashScheme | None = None,
    ) -> bool:
        try:
            return verify_proof(
                proof,
                root_hex,
                scheme=scheme or HashScheme(),
            )
        except InvalidEncodingException as e:
            logger.warning(f"Rejecting proof with malformed sibling hash: {e.message}")
            return False

    @staticmethod
    def verify_item_in_root(
        item: Item,
        elements: Sequence[ProofElement | dict[str, Any]],
        root_hex: str | None,
        scheme: HashScheme | None = None,
    ) -> bool:
        """
        Verify an item against a root from raw proof components.

        ``elements`` may be ProofElement instances or wire dicts
        (``{"hash": ..., "direction": 0|1}``).
        """
        steps = tuple(
            e if isinstance(e, ProofElement) else ProofElement.from_dict(e)
            for e in elements
        )
        proof = MerkleProof(item=item_bytes(item), elements=steps)
        return MerkleVerifier.verify(proof, root_hex, scheme)


__all__ = [
    "Side",
    "ProofElement",
    "MerkleProof",
    "generate_proof",
    "compute_root_from_proof",
    "verify_proof",
    "MerkleProver",
    "MerkleVerifier",
]
