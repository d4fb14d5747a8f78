"""
CLI Verify Command

Verify a saved proof offline.

Two file formats are accepted:
- Account proof (from ``por proof --out``):
    {"user_id": 3, "user_balance": 3333, "proof_elements": [...], "merkle_root": "..."}
- Item proof (MerkleProof.to_dict()):
    {"item": "ccc", "elements": [{"hash": "...", "direction": 0}, ...]}

Usage:
    por verify proof.json [--root HEX] [--leaf-tag T --branch-tag T] [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

from core.merkle.merkle_proofs import MerkleProof, verify_proof
from core.reserve.models import AccountProof, ProofStep
from core.schemas.errors import InvalidEncodingException
from reserve_cli.commands.root import resolve_scheme
from reserve_cli.config import CLIConfig, build_service


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


@dataclass
class VerifySummary:
    """Summary of proof verification for CLI output."""
    proof_path: str = ""
    kind: str = ""  # "account" or "item"
    subject: str = ""
    merkle_root: str | None = None
    elements: int = 0
    ok: bool = False

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _verify_account(document: dict[str, Any], root: str | None, args: Namespace, config: CLIConfig) -> tuple[bool, str, str | None, int]:
    if root is None:
        root = build_service(config).get_merkle_root()
    claimed = AccountProof(
        account_id=int(document["user_id"]),
        balance=int(document["user_balance"]),
        elements=[ProofStep.model_validate(step) for step in document.get("proof_elements", [])],
    )
    ok = verify_proof(claimed.to_merkle_proof(), root, scheme=resolve_scheme(args, config))
    return ok, claimed.leaf_item(), root, len(claimed.elements)


def _verify_item(document: dict[str, Any], root: str | None, args: Namespace, config: CLIConfig) -> tuple[bool, str, str | None, int]:
    proof = MerkleProof.from_dict(document)
    if root is None:
        raise ValueError("No merkle_root in proof file; pass --root")
    ok = verify_proof(proof, root, scheme=resolve_scheme(args, config))
    subject = proof.item.decode("utf-8", errors="replace")
    return ok, subject, root, len(proof)


def print_summary_human(summary: VerifySummary) -> None:
    """Print summary in human-readable format."""
    print(f"proof: {summary.proof_path}")
    print(f"{summary.kind}: {summary.subject}")
    print(f"merkle_root: {summary.merkle_root}")
    print(f"elements: {summary.elements}")
    print(f"ok: {str(summary.ok).lower()}")


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    Returns:
        0 if the proof verifies, 2 if it does not, 1 on malformed input
    """
    config: CLIConfig = args.cli_config
    proof_path = Path(args.proof_path)

    if not proof_path.exists():
        print(f"Error: Proof file not found: {proof_path}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        document = json.loads(proof_path.read_text())
    except (OSError, json.JSONDecodeError) as e:
        print(f"Error reading proof file: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if not isinstance(document, dict):
        print("Error: Proof file must contain a JSON object", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    root = args.root if args.root is not None else document.get("merkle_root")
    kind = "account" if "user_id" in document else "item"

    try:
        if kind == "account":
            ok, subject, root, count = _verify_account(document, root, args, config)
        else:
            ok, subject, root, count = _verify_item(document, root, args, config)
    except InvalidEncodingException as e:
        print(f"Error: Malformed proof hash: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except (KeyError, TypeError, ValueError) as e:
        print(f"Error: Invalid proof file: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    summary = VerifySummary(
        proof_path=str(proof_path),
        kind=kind,
        subject=subject,
        merkle_root=root,
        elements=count,
        ok=ok,
    )
    logger.info(f"Verified {kind} proof {proof_path}: ok={ok}")

    if args.json or config.wants_json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print_summary_human(summary)

    return EXIT_SUCCESS if ok else EXIT_VERIFICATION_FAILED
