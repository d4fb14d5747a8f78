"""
CLI Root Command

Print the Merkle root of the account store, or of literal items.

Usage:
    por root [--json]
    por root --items aaa bbb ccc ddd [--leaf-tag T] [--branch-tag T] [--json]
"""

from __future__ import annotations

import json
import logging
from argparse import Namespace

from core.crypto.hashing import HashScheme
from core.merkle.merkle_tree import MerkleTree
from reserve_cli.config import CLIConfig, build_service


logger = logging.getLogger(__name__)


EXIT_SUCCESS = 0


def resolve_scheme(args: Namespace, config: CLIConfig) -> HashScheme:
    """Tags from --leaf-tag/--branch-tag, falling back to configuration."""
    hashing = config.runtime.hashing
    return HashScheme(
        getattr(args, "leaf_tag", None) or hashing.leaf_tag,
        getattr(args, "branch_tag", None) or hashing.branch_tag,
    )


def root_cmd(args: Namespace) -> int:
    """Execute the root command."""
    config: CLIConfig = args.cli_config

    if args.items is not None:
        tree = MerkleTree(args.items, scheme=resolve_scheme(args, config))
        source = "items"
    else:
        tree = build_service(config).tree
        source = "accounts"

    root = tree.root_hex()
    logger.debug(f"Computed root over {len(tree)} {source}")

    if args.json or config.wants_json:
        print(json.dumps({
            "merkle_root": root,
            "leaves": len(tree),
            "depth": tree.depth,
            "leaf_tag": tree.leaf_tag,
            "branch_tag": tree.branch_tag,
        }, indent=2))
    else:
        print(root if root is not None else "(no root: empty tree)")

    return EXIT_SUCCESS
