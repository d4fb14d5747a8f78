"""
CLI Accounts Command

List the committed accounts with their leaf items.

Usage:
    por accounts [--json]
"""

from __future__ import annotations

import json
from argparse import Namespace

from reserve_cli.config import CLIConfig, build_service


EXIT_SUCCESS = 0


def accounts_cmd(args: Namespace) -> int:
    """Execute the accounts command."""
    config: CLIConfig = args.cli_config
    accounts = build_service(config).list_accounts()

    if args.json or config.wants_json:
        print(json.dumps([a.model_dump() for a in accounts], indent=2))
        return EXIT_SUCCESS

    if not accounts:
        print("No accounts")
        return EXIT_SUCCESS

    for account in accounts:
        print(f"{account.id:>6}  {account.balance:>12}  {account.serialize()}")
    return EXIT_SUCCESS
