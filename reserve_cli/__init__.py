"""
Proof of Reserve CLI

Command-line interface for the reserve Merkle tree.

Usage:
    python -m reserve_cli root
    python -m reserve_cli root --items aaa bbb ccc --leaf-tag Bitcoin_Transaction
    python -m reserve_cli proof 3 --out proof.json
    python -m reserve_cli verify proof.json
    python -m reserve_cli accounts
    python -m reserve_cli example
"""

__version__ = "0.1.0"
