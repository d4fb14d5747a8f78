"""
CLI Proof Command

Generate the inclusion proof for an account.

Usage:
    por proof <account_id> [--out proof.json] [--json]

The saved file can be checked later with ``por verify``.
"""

from __future__ import annotations

import json
import sys
from argparse import Namespace
from pathlib import Path
from typing import Any

from reserve_cli.config import CLIConfig, build_service


EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


def proof_document(account_id: int, wire: dict[str, Any], root: str | None) -> dict[str, Any]:
    """Self-contained proof file: account, balance, path and root."""
    return {"user_id": account_id, **wire, "merkle_root": root}


def proof_cmd(args: Namespace) -> int:
    """Execute the proof command."""
    config: CLIConfig = args.cli_config
    service = build_service(config)

    proof = service.generate_proof_for_account(args.account_id)
    if proof is None:
        print(f"Error: User with ID {args.account_id} not found", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    document = proof_document(proof.account_id, proof.to_wire(), service.get_merkle_root())

    if args.out:
        out_path = Path(args.out)
        out_path.write_text(json.dumps(document, indent=2) + "\n")
        print(f"Saved proof to {out_path}", file=sys.stderr)

    if args.json or config.wants_json:
        print(json.dumps(document, indent=2))
    else:
        print(f"account: {proof.account_id}")
        print(f"balance: {proof.balance}")
        print(f"leaf: {proof.leaf_item()}")
        print(f"merkle_root: {document['merkle_root']}")
        print(f"elements ({len(proof.elements)}):")
        for step in proof.elements:
            side = "left" if step.direction == 0 else "right"
            print(f"  {step.hash} ({side})")

    return EXIT_SUCCESS
