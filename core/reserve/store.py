"""
Account Store

Ordered, read-only collection of account records with lookup by id.
Supplies the leaf items for the reserve tree.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable, Iterator

from pydantic import ValidationError

from core.reserve.models import Account
from core.schemas.errors import ConfigurationException


logger = logging.getLogger(__name__)


SAMPLE_ACCOUNTS: tuple[tuple[int, int], ...] = (
    (1, 1111),
    (2, 2222),
    (3, 3333),
    (4, 4444),
    (5, 5555),
    (6, 6666),
    (7, 7777),
    (8, 8888),
)


class AccountStore:
    """
    In-memory account records, in commitment order.

    Account ids must be unique: the serialized form of each account is
    a leaf item, and proofs are looked up by that exact string.
    """

    def __init__(self, accounts: Iterable[Account]) -> None:
        self._accounts: tuple[Account, ...] = tuple(accounts)
        self._by_id: dict[int, Account] = {}
        for account in self._accounts:
            if account.id in self._by_id:
                raise ValueError(f"Duplicate account id: {account.id}")
            self._by_id[account.id] = account

    @classmethod
    def sample(cls) -> "AccountStore":
        """The built-in example dataset (ids 1-8)."""
        return cls(Account(id=i, balance=b) for i, b in SAMPLE_ACCOUNTS)

    @classmethod
    def from_records(cls, records: Iterable[dict]) -> "AccountStore":
        return cls(Account.model_validate(r) for r in records)

    @classmethod
    def from_file(cls, path: Path | str) -> "AccountStore":
        """
        Load accounts from a JSON file: ``[{"id": 1, "balance": 1111}, ...]``.

        Raises:
            ConfigurationException: If the file is missing or malformed
        """
        path = Path(path)
        try:
            with open(path) as f:
                records = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationException(
                f"Failed to read accounts file: {e}", path=str(path)
            ) from e

        if not isinstance(records, list):
            raise ConfigurationException(
                "Accounts file must contain a JSON list", path=str(path)
            )

        try:
            store = cls.from_records(records)
        except (ValidationError, ValueError) as e:
            raise ConfigurationException(
                f"Invalid account records: {e}", path=str(path)
            ) from e

        logger.info(f"Loaded {len(store)} accounts from {path}")
        return store

    def all(self) -> list[Account]:
        return list(self._accounts)

    def get(self, account_id: int) -> Account | None:
        return self._by_id.get(account_id)

    def serialized_items(self) -> list[str]:
        """Leaf items in commitment order."""
        return [account.serialize() for account in self._accounts]

    def __len__(self) -> int:
        return len(self._accounts)

    def __iter__(self) -> Iterator[Account]:
        return iter(self._accounts)


__all__ = [
    "SAMPLE_ACCOUNTS",
    "AccountStore",
]
