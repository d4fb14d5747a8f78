"""
CLI command modules.
"""

from reserve_cli.commands import root, proof, verify, accounts, example

__all__ = ["root", "proof", "verify", "accounts", "example"]
