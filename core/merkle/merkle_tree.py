"""
Merkle Tree Implementation
Tagged-hash Merkle tree construction over an ordered list of items.

This module provides:
- MerkleNode: immutable leaf/branch node
- MerkleTree: eagerly built, immutable tree with leaf index lookup
- build_merkle_tree: functional form of tree construction
- reduce_level: one pairwise reduction step, shared with proof generation
- compute_tree_depth: number of levels for a given leaf count

Canonical Commitment Rules (Hard Contracts):
1. Leaf hashing: leaf = tagged_hash(leaf_tag, item)
2. Parent hashing: parent = tagged_hash(branch_tag, left || right)
3. Padding rule: the last node of an odd level is paired with itself
4. Empty items: no root (None), never an error
5. Single item: root = leaf (no branch hashing)

Determinism Notes:
- No randomness or non-deterministic ordering
- This module never sorts items - it trusts input order
- Because of rule 3, [a, b, c] and [a, b, c, c] commit to the same root
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Iterator, Optional, Sequence

from core.crypto.hashing import (
    TAG_BITCOIN_TRANSACTION,
    HashScheme,
    to_hex,
)
from core.schemas.errors import ItemNotFoundException

if TYPE_CHECKING:
    from core.merkle.merkle_proofs import MerkleProof


logger = logging.getLogger(__name__)

Item = bytes | str


def item_bytes(item: Item) -> bytes:
    """Normalize an item to the exact bytes that get hashed."""
    if isinstance(item, str):
        return item.encode("utf-8")
    if isinstance(item, (bytes, bytearray, memoryview)):
        return bytes(item)
    raise TypeError(f"Merkle items must be str or bytes, got {type(item).__name__}")


@dataclass(frozen=True, eq=False)
class MerkleNode:
    """
    A node of a Merkle tree.

    Leaves have no children; branches always have exactly two (the
    right child may be the left child itself when a level was odd).

    Attributes:
        digest: 32-byte node hash
        left: Left child, None for leaves
        right: Right child, None for leaves
    """
    digest: bytes
    left: Optional["MerkleNode"] = None
    right: Optional["MerkleNode"] = None

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def hex(self) -> str:
        """Node hash as lowercase hex."""
        return to_hex(self.digest)

    def __repr__(self) -> str:
        kind = "leaf" if self.is_leaf else "branch"
        return f"MerkleNode({kind}, {self.hex()[:16]}...)"


def iter_pairs(
    nodes: Sequence[MerkleNode],
) -> Iterator[tuple[int, MerkleNode, MerkleNode]]:
    """
    Yield (left_index, left, right) for each consecutive pair of a level.

    If the level has an odd number of nodes, the final node is yielded
    as its own right sibling.
    """
    for i in range(0, len(nodes), 2):
        right = nodes[i + 1] if i + 1 < len(nodes) else nodes[i]
        yield i, nodes[i], right


def reduce_level(nodes: Sequence[MerkleNode], scheme: HashScheme) -> list[MerkleNode]:
    """
    Reduce one level of the tree to its parent level.

    Example: [a, b, c] -> [parent(a, b), parent(c, c)]
    """
    return [
        MerkleNode(scheme.hash_branch(left.digest, right.digest), left, right)
        for _, left, right in iter_pairs(nodes)
    ]


def compute_tree_depth(num_leaves: int) -> int:
    """
    Compute the depth of a Merkle tree with given number of leaves.

    Depth is the number of levels from leaves to root (inclusive).
    A single leaf has depth 1, two leaves have depth 2, etc.

    Args:
        num_leaves: Number of leaves in the tree

    Returns:
        Tree depth (0 for empty tree)
    """
    if num_leaves == 0:
        return 0

    depth = 1
    n = num_leaves
    while n > 1:
        n = (n + 1) // 2
        depth += 1

    return depth


class MerkleTree:
    """
    Merkle tree following Bitcoin block transaction patterns, with
    tagged hashing for leaves and branches.

    The tree is fully built in the constructor and never mutated
    afterwards, so instances can be shared freely between threads.

    Example:
        >>> tree = MerkleTree(["aaa", "bbb", "ccc", "ddd"])
        >>> len(tree.root_hex())
        64
        >>> proof = tree.generate_proof("ccc")
    """

    def __init__(
        self,
        items: Iterable[Item],
        leaf_tag: str = TAG_BITCOIN_TRANSACTION,
        branch_tag: str = TAG_BITCOIN_TRANSACTION,
        *,
        scheme: HashScheme | None = None,
    ) -> None:
        """
        Build the tree.

        Args:
            items: Ordered items (str is UTF-8 encoded, bytes used as-is)
            leaf_tag: Tag for leaf hashing
            branch_tag: Tag for branch hashing
            scheme: Pre-built HashScheme; takes precedence over the tags
        """
        self._scheme = scheme if scheme is not None else HashScheme(leaf_tag, branch_tag)

        leaves: list[MerkleNode] = []
        index: dict[bytes, int] = {}
        duplicates = 0

        for position, item in enumerate(items):
            data = item_bytes(item)
            leaves.append(MerkleNode(self._scheme.hash_leaf(data)))
            # First occurrence wins; later copies are not addressable by proof
            if data in index:
                duplicates += 1
            else:
                index[data] = position

        if duplicates:
            logger.debug(
                f"{duplicates} duplicate item(s); proofs resolve to first occurrence"
            )

        self._leaves: tuple[MerkleNode, ...] = tuple(leaves)
        self._leaf_indices = index
        self._levels = self._build_levels(self._leaves)
        self._root: MerkleNode | None = self._levels[-1][0] if self._levels else None

        logger.debug(
            f"Built Merkle tree: leaves={len(self._leaves)} depth={len(self._levels)} "
            f"root={self._root.hex()[:16] if self._root else None}"
        )

    def _build_levels(
        self, leaves: tuple[MerkleNode, ...]
    ) -> tuple[tuple[MerkleNode, ...], ...]:
        if not leaves:
            return ()

        levels: list[tuple[MerkleNode, ...]] = [leaves]
        current: Sequence[MerkleNode] = leaves
        while len(current) > 1:
            current = tuple(reduce_level(current, self._scheme))
            levels.append(current)

        return tuple(levels)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------

    @property
    def scheme(self) -> HashScheme:
        return self._scheme

    @property
    def leaf_tag(self) -> str:
        return self._scheme.leaf_tag

    @property
    def branch_tag(self) -> str:
        return self._scheme.branch_tag

    @property
    def root(self) -> MerkleNode | None:
        """Root node, or None for an empty tree."""
        return self._root

    @property
    def root_hash(self) -> bytes | None:
        return self._root.digest if self._root else None

    def root_hex(self) -> str | None:
        """Merkle root as lowercase hex, or None for an empty tree."""
        return self._root.hex() if self._root else None

    @property
    def leaves(self) -> tuple[MerkleNode, ...]:
        return self._leaves

    @property
    def levels(self) -> tuple[tuple[MerkleNode, ...], ...]:
        """Every level from the leaves (index 0) up to the root level."""
        return self._levels

    @property
    def depth(self) -> int:
        return len(self._levels)

    @property
    def is_empty(self) -> bool:
        return not self._leaves

    def __len__(self) -> int:
        return len(self._leaves)

    def __contains__(self, item: object) -> bool:
        try:
            return item_bytes(item) in self._leaf_indices  # type: ignore[arg-type]
        except TypeError:
            return False

    def index_of(self, item: Item) -> int:
        """
        Index of the first leaf built from ``item``.

        Raises:
            ItemNotFoundException: If the item is not in the tree
        """
        data = item_bytes(item)
        try:
            return self._leaf_indices[data]
        except KeyError:
            raise ItemNotFoundException(
                item=data.decode("utf-8", errors="replace")
            ) from None

    def generate_proof(self, item: Item) -> "MerkleProof":
        """Generate an inclusion proof for ``item``. See merkle_proofs.generate_proof."""
        from core.merkle.merkle_proofs import generate_proof

        return generate_proof(self, item)

    def __repr__(self) -> str:
        return (
            f"MerkleTree(leaves={len(self._leaves)}, "
            f"leaf_tag={self.leaf_tag!r}, branch_tag={self.branch_tag!r}, "
            f"root={self.root_hex()!r})"
        )


def build_merkle_tree(
    items: Iterable[Item],
    leaf_tag: str = TAG_BITCOIN_TRANSACTION,
    branch_tag: str = TAG_BITCOIN_TRANSACTION,
) -> MerkleTree:
    """
    Build a Merkle tree from ordered items.

    Args:
        items: Ordered items to commit to
        leaf_tag: Tag for leaf hashing
        branch_tag: Tag for branch hashing

    Returns:
        Fully built MerkleTree (root is None when items is empty)
    """
    return MerkleTree(items, leaf_tag, branch_tag)


__all__ = [
    "Item",
    "item_bytes",
    "MerkleNode",
    "MerkleTree",
    "iter_pairs",
    "reduce_level",
    "build_merkle_tree",
    "compute_tree_depth",
]
