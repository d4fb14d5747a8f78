"""
Proof of Reserve API (FastAPI)

HTTP API for the reserve Merkle tree:
- GET /api/merkle/root - Merkle root
- GET /api/merkle/proof/{user_id} - Inclusion proof
- GET /api/merkle/users - Account listing
- POST /api/merkle/verify - Proof verification
- GET /health - Health check

Usage:
    uvicorn api.app:app --reload
"""

__version__ = "0.1.0"
