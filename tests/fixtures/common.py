"""
Common test fixtures shared by all test modules.

Provides factory functions for:
- Plain string items
- Account records / AccountStore
- ProofOfReserveService
"""

import json
from pathlib import Path
from typing import Optional, Sequence

from core.crypto.hashing import HashScheme, PROOF_OF_RESERVE_SCHEME
from core.reserve.models import Account
from core.reserve.service import ProofOfReserveService
from core.reserve.store import AccountStore


EXAMPLE_ITEMS = ["aaa", "bbb", "ccc", "ddd", "eee"]


def make_items(count: int, prefix: str = "item") -> list[str]:
    """Distinct string items: item0, item1, ..."""
    return [f"{prefix}{i}" for i in range(count)]


def make_accounts(balances: Optional[Sequence[int]] = None) -> list[Account]:
    """
    Accounts with ids 1..n.

    Args:
        balances: Balance per account; defaults to 1111, 2222, ... 8888
    """
    if balances is None:
        balances = [1111 * i for i in range(1, 9)]
    return [Account(id=i, balance=b) for i, b in enumerate(balances, start=1)]


def make_store(balances: Optional[Sequence[int]] = None) -> AccountStore:
    return AccountStore(make_accounts(balances))


def make_service(
    balances: Optional[Sequence[int]] = None,
    scheme: HashScheme = PROOF_OF_RESERVE_SCHEME,
) -> ProofOfReserveService:
    return ProofOfReserveService(make_store(balances), scheme=scheme)


def write_accounts_file(path: Path, balances: Sequence[int]) -> Path:
    """Write an accounts JSON file in the format AccountStore.from_file expects."""
    records = [a.model_dump() for a in make_accounts(balances)]
    path.write_text(json.dumps(records))
    return path
