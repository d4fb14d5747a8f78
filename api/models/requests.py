"""
API Request Models

Pydantic models for API request validation.
"""

from pydantic import BaseModel, Field


class ProofElementRequest(BaseModel):
    """A proof step as submitted by a client."""

    hash: str = Field(..., description="Sibling hash as hex")
    direction: int = Field(..., ge=0, le=1, description="0 = left sibling, 1 = right sibling")


class VerifyProofRequest(BaseModel):
    """Request body for POST /api/merkle/verify endpoint."""

    user_id: int = Field(..., description="Account identifier")
    user_balance: int = Field(..., ge=0, description="Claimed account balance")
    proof_elements: list[ProofElementRequest] = Field(default_factory=list)
    merkle_root: str | None = Field(
        default=None,
        description="Root to verify against; defaults to the server's current root",
    )
