"""
Proof of Reserve

Account records, the account store, and the service that commits them
to a tagged-hash Merkle tree.
"""

from .models import Account, ProofStep, AccountProof
from .store import SAMPLE_ACCOUNTS, AccountStore
from .service import ProofOfReserveService

__all__ = [
    "Account",
    "ProofStep",
    "AccountProof",
    "SAMPLE_ACCOUNTS",
    "AccountStore",
    "ProofOfReserveService",
]
