"""
API Response Models

Pydantic models for API response serialization.
"""

from typing import Any

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response for GET /health endpoint."""

    ok: bool = True
    service: str = "proof-of-reserve-api"
    version: str = "v1"
    accounts: int = Field(default=0, description="Number of committed accounts")
    has_root: bool = Field(default=False, description="Whether a Merkle root exists")


class RootResponse(BaseModel):
    """Response for GET /api/merkle/root endpoint."""

    merkle_root: str | None = Field(
        ...,
        description="Merkle root as lowercase hex, null when there are no accounts",
    )


class ProofElementResponse(BaseModel):
    """One sibling step of a proof."""

    hash: str = Field(..., description="Sibling hash as lowercase hex")
    direction: int = Field(..., description="0 = sibling on the left, 1 = sibling on the right")


class ProofResponse(BaseModel):
    """Response for GET /api/merkle/proof/{user_id} endpoint."""

    user_balance: int = Field(..., description="Balance of the account (not hashed)")
    proof_elements: list[ProofElementResponse] = Field(default_factory=list)


class AccountResponse(BaseModel):
    """One entry of GET /api/merkle/users."""

    id: int
    balance: int


class VerifyProofResponse(BaseModel):
    """Response for POST /api/merkle/verify endpoint."""

    ok: bool = Field(..., description="Whether the proof recomputes the root")
    merkle_root: str | None = Field(..., description="Root the proof was checked against")


class ErrorDetail(BaseModel):
    """Detailed error information."""

    code: str = Field(..., description="Error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Standard error response."""

    ok: bool = False
    error: ErrorDetail = Field(..., description="Error details")
