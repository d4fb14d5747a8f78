"""
Account records and proof payloads.

An Account is committed to the tree through its serialized form
``(id,balance)``: no whitespace, a single comma, no other separators.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from core.merkle.merkle_proofs import MerkleProof, ProofElement, Side


class Account(BaseModel):
    """A customer account with a balance in JPY."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: int = Field(..., description="Account identifier")
    balance: int = Field(..., ge=0, description="Account balance in JPY")

    def serialize(self) -> str:
        """Leaf item for this account, e.g. ``(1,1111)``."""
        return f"({self.id},{self.balance})"

    def __str__(self) -> str:
        return self.serialize()


class ProofStep(BaseModel):
    """Wire form of a proof element: direction 0 = left sibling, 1 = right sibling."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    hash: str = Field(..., description="Sibling hash as hex")
    direction: int = Field(..., ge=0, le=1, description="0 = left sibling, 1 = right sibling")

    @classmethod
    def from_element(cls, element: ProofElement) -> "ProofStep":
        return cls(hash=element.hash, direction=element.direction)

    def to_element(self) -> ProofElement:
        return ProofElement(hash=self.hash, side=Side.from_direction(self.direction))


class AccountProof(BaseModel):
    """
    Inclusion proof for one account.

    The balance is carried alongside the path so a holder can rebuild
    the leaf item; it is not itself a proof element.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    account_id: int
    balance: int
    elements: list[ProofStep] = Field(default_factory=list)

    def leaf_item(self) -> str:
        return Account(id=self.account_id, balance=self.balance).serialize()

    def to_merkle_proof(self) -> MerkleProof:
        return MerkleProof(
            item=self.leaf_item(),
            elements=tuple(step.to_element() for step in self.elements),
        )

    def to_wire(self) -> dict[str, Any]:
        """Response shape: balance plus {hash, direction} pairs."""
        return {
            "user_balance": self.balance,
            "proof_elements": [step.model_dump() for step in self.elements],
        }


__all__ = [
    "Account",
    "ProofStep",
    "AccountProof",
]
