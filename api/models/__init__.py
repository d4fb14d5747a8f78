"""API request and response models."""

from api.models.requests import ProofElementRequest, VerifyProofRequest
from api.models.responses import (
    HealthResponse,
    RootResponse,
    ProofElementResponse,
    ProofResponse,
    AccountResponse,
    VerifyProofResponse,
    ErrorDetail,
    ErrorResponse,
)

__all__ = [
    "ProofElementRequest",
    "VerifyProofRequest",
    "HealthResponse",
    "RootResponse",
    "ProofElementResponse",
    "ProofResponse",
    "AccountResponse",
    "VerifyProofResponse",
    "ErrorDetail",
    "ErrorResponse",
]
