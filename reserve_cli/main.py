"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m reserve_cli root [--items ITEM ...] [--leaf-tag T] [--branch-tag T] [--json]
    python -m reserve_cli proof <account_id> [--out PATH] [--json]
    python -m reserve_cli verify <proof_path> [--root HEX] [--leaf-tag T] [--branch-tag T] [--json]
    python -m reserve_cli accounts [--json]
    python -m reserve_cli example [--item ITEM]
    python -m reserve_cli config --init

Environment Variables:
    POR_LEAF_TAG          Tag for leaf hashing (default: ProofOfReserve_Leaf)
    POR_BRANCH_TAG        Tag for branch hashing (default: ProofOfReserve_Branch)
    POR_ACCOUNTS_FILE     JSON file with account records (default: sample accounts)
    POR_LOG_LEVEL         Log level (default: INFO)
    POR_LOG_FILE          Also log to this file
    POR_OUTPUT_FORMAT     "human" or "json"
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from core.config.runtime import get_default_config_template
from reserve_cli.commands import accounts, example, proof, root, verify
from reserve_cli.config import load_config


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )


def _add_tag_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--leaf-tag",
        type=str,
        default=None,
        help="Tag for leaf hashing (default: from config)",
    )
    parser.add_argument(
        "--branch-tag",
        type=str,
        default=None,
        help="Tag for branch hashing (default: from config)",
    )


def _add_json_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output machine-readable JSON (also: POR_OUTPUT_FORMAT=json)",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="por",
        description="Proof of Reserve CLI - Compute Merkle roots, generate and verify inclusion proofs.",
    )
    parser.add_argument(
        "--version", action="version", version="%(prog)s 0.1.0"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: ./por.json or ~/.config/por/config.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- root command ---
    root_parser = subparsers.add_parser(
        "root",
        help="Print the Merkle root",
        description="Print the Merkle root of the configured accounts, or of literal items.",
    )
    root_parser.add_argument(
        "--items",
        nargs="*",
        default=None,
        help="Hash these items instead of the account store",
    )
    _add_tag_arguments(root_parser)
    _add_json_argument(root_parser)
    root_parser.set_defaults(func=root.root_cmd)

    # --- proof command ---
    proof_parser = subparsers.add_parser(
        "proof",
        help="Generate an inclusion proof for an account",
        description="Print (and optionally save) the Merkle proof for one account.",
    )
    proof_parser.add_argument(
        "account_id",
        type=int,
        help="Account identifier",
    )
    proof_parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Write the proof as JSON to this path",
    )
    _add_json_argument(proof_parser)
    proof_parser.set_defaults(func=proof.proof_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify a saved proof offline",
        description="Recompute the root from a proof file and compare it to the expected root.",
    )
    verify_parser.add_argument(
        "proof_path",
        type=str,
        help="Path to a proof JSON file",
    )
    verify_parser.add_argument(
        "--root",
        type=str,
        default=None,
        help="Expected root (default: merkle_root from the file, else the current root)",
    )
    _add_tag_arguments(verify_parser)
    _add_json_argument(verify_parser)
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- accounts command ---
    accounts_parser = subparsers.add_parser(
        "accounts",
        help="List committed accounts",
    )
    _add_json_argument(accounts_parser)
    accounts_parser.set_defaults(func=accounts.accounts_cmd)

    # --- example command ---
    example_parser = subparsers.add_parser(
        "example",
        help="Run the built-in five-item example",
    )
    example_parser.add_argument(
        "--item",
        type=str,
        default="ccc",
        choices=example.EXAMPLE_ITEMS,
        help="Item to prove (default: ccc)",
    )
    example_parser.set_defaults(func=example.example_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default="por.json",
        help="Path for config file (default: por.json)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("\nEdit this file to configure your settings.")
        print("You can also use environment variables (POR_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        config = args.cli_config
        config_dict = config.runtime.to_dict()
        config_dict["log_file"] = config.log_file
        config_dict["output_format"] = config.default_output_format
        print(json.dumps(config_dict, indent=2))
        return EXIT_SUCCESS

    # Default: show help
    print("Usage: por config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    # Load configuration
    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    # Setup logging
    log_level = args.log_level or config.log_level
    setup_logging(level=log_level, log_file=config.log_file)

    # Attach config to args for commands to use
    args.cli_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if log_level.upper() == "DEBUG":
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
