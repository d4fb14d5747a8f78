"""
Test fixtures package for Proof-of-Reserve tests.

This package provides factory functions for creating test objects:
- common.py: items, accounts, stores and services

Usage:
    from fixtures import make_store, make_service

    def test_something():
        service = make_service(balances=[100, 200, 300])
"""

from .common import (
    EXAMPLE_ITEMS,
    make_items,
    make_accounts,
    make_store,
    make_service,
    write_accounts_file,
)

__all__ = [
    "EXAMPLE_ITEMS",
    "make_items",
    "make_accounts",
    "make_store",
    "make_service",
    "write_accounts_file",
]
