"""
Proof-of-Reserve Service

Commits the account store to a Merkle tree and answers root, proof,
and verification queries against it. The tree is built once, when the
service is created, and never changes afterwards.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

from core.config.runtime import RuntimeConfig
from core.crypto.hashing import PROOF_OF_RESERVE_SCHEME, HashScheme
from core.merkle.merkle_proofs import verify_proof
from core.merkle.merkle_tree import MerkleTree
from core.reserve.models import Account, AccountProof, ProofStep
from core.reserve.store import AccountStore
from core.schemas.errors import ItemNotFoundException


logger = logging.getLogger(__name__)


class ProofOfReserveService:
    """
    Root, proof, and listing operations over an AccountStore.

    Example:
        >>> service = ProofOfReserveService(AccountStore.sample())
        >>> proof = service.generate_proof_for_account(3)
        >>> service.verify_account_proof(3, proof.balance, proof.elements)
        True
    """

    def __init__(
        self,
        store: AccountStore,
        scheme: HashScheme = PROOF_OF_RESERVE_SCHEME,
    ) -> None:
        self._store = store
        self._scheme = scheme
        self._tree = MerkleTree(store.serialized_items(), scheme=scheme)
        logger.info(
            f"Committed {len(store)} accounts, merkle_root={self._tree.root_hex()}"
        )

    @classmethod
    def from_config(cls, config: RuntimeConfig) -> "ProofOfReserveService":
        """Build the store and hash scheme described by ``config``."""
        if config.store.accounts_file:
            store = AccountStore.from_file(config.store.accounts_file)
        else:
            store = AccountStore.sample()
        return cls(store, scheme=config.hashing.to_scheme())

    @property
    def tree(self) -> MerkleTree:
        return self._tree

    @property
    def scheme(self) -> HashScheme:
        return self._scheme

    @property
    def store(self) -> AccountStore:
        return self._store

    def get_merkle_root(self) -> str | None:
        """Current root as lowercase hex, or None when there are no accounts."""
        return self._tree.root_hex()

    def list_accounts(self) -> list[Account]:
        return self._store.all()

    def generate_proof_for_account(self, account_id: int) -> AccountProof | None:
        """
        Inclusion proof for an account.

        Returns:
            AccountProof, or None if the account does not exist
        """
        account = self._store.get(account_id)
        if account is None:
            logger.debug(f"No account with id {account_id}")
            return None

        try:
            proof = self._tree.generate_proof(account.serialize())
        except ItemNotFoundException:
            # Store and tree are built together, so this means they diverged
            logger.error(f"Account {account_id} is in the store but not in the tree")
            raise

        return AccountProof(
            account_id=account.id,
            balance=account.balance,
            elements=[ProofStep.from_element(e) for e in proof.elements],
        )

    def verify_account_proof(
        self,
        account_id: int,
        balance: int,
        elements: Sequence[ProofStep | dict[str, Any]],
        root_hex: str | None = None,
    ) -> bool:
        """
        Verify that ``(account_id, balance)`` is committed under a root.

        Args:
            account_id: Account identifier
            balance: Claimed balance
            elements: Proof steps (ProofStep or ``{"hash", "direction"}`` dicts)
            root_hex: Root to check against; defaults to the current root

        Raises:
            InvalidEncodingException: If a proof hash is not valid hex
        """
        claimed = AccountProof(
            account_id=account_id,
            balance=balance,
            elements=[
                step if isinstance(step, ProofStep) else ProofStep.model_validate(step)
                for step in elements
            ],
        )
        expected = root_hex if root_hex is not None else self.get_merkle_root()
        ok = verify_proof(claimed.to_merkle_proof(), expected, scheme=self._scheme)
        logger.debug(f"Verification for account {account_id}: ok={ok}")
        return ok


__all__ = [
    "ProofOfReserveService",
]
