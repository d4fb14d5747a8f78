"""
Merkle Routes

Proof-of-Reserve query surface:
- GET /api/merkle/root - current Merkle root (null when there are no accounts)
- GET /api/merkle/proof/{user_id} - inclusion proof for an account
- GET /api/merkle/users - all committed accounts
- POST /api/merkle/verify - check a proof against a root
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from api.deps import get_reserve_service
from api.errors import NotFoundError
from api.models.requests import VerifyProofRequest
from api.models.responses import (
    AccountResponse,
    ProofElementResponse,
    ProofResponse,
    RootResponse,
    VerifyProofResponse,
)
from core.reserve.service import ProofOfReserveService


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/merkle", tags=["merkle"])


@router.get("/root", response_model=RootResponse)
async def get_merkle_root(
    service: ProofOfReserveService = Depends(get_reserve_service),
) -> RootResponse:
    """Merkle root of all accounts."""
    return RootResponse(merkle_root=service.get_merkle_root())


@router.get("/proof/{user_id}", response_model=ProofResponse)
async def get_merkle_proof(
    user_id: int,
    service: ProofOfReserveService = Depends(get_reserve_service),
) -> ProofResponse:
    """
    Merkle proof for one account.

    Directions: 0 means the sibling hash goes on the left, 1 on the right.
    """
    proof = service.generate_proof_for_account(user_id)
    if proof is None:
        raise NotFoundError(
            f"User with ID {user_id} not found",
            details={"user_id": user_id},
        )

    return ProofResponse(
        user_balance=proof.balance,
        proof_elements=[
            ProofElementResponse(hash=step.hash, direction=step.direction)
            for step in proof.elements
        ],
    )


@router.get("/users", response_model=list[AccountResponse])
async def get_all_users(
    service: ProofOfReserveService = Depends(get_reserve_service),
) -> list[AccountResponse]:
    """All accounts, in commitment order."""
    return [
        AccountResponse(id=account.id, balance=account.balance)
        for account in service.list_accounts()
    ]


@router.post("/verify", response_model=VerifyProofResponse)
async def verify_merkle_proof(
    request: VerifyProofRequest,
    service: ProofOfReserveService = Depends(get_reserve_service),
) -> VerifyProofResponse:
    """
    Verify that an (id, balance) pair is committed under a root.

    A malformed hash in ``proof_elements`` is rejected with 400
    INVALID_ENCODING rather than reported as ``ok: false``.
    """
    root = request.merkle_root if request.merkle_root is not None else service.get_merkle_root()

    ok = service.verify_account_proof(
        request.user_id,
        request.user_balance,
        [step.model_dump() for step in request.proof_elements],
        root_hex=root,
    )
    logger.info(f"Proof verification for user {request.user_id}: ok={ok}")

    return VerifyProofResponse(ok=ok, merkle_root=root)
