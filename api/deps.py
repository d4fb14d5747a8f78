"""
API Dependencies

Dependency injection for the API.
Provides the shared ProofOfReserveService.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from core.config.runtime import RuntimeConfig, load_runtime_config
from core.reserve.service import ProofOfReserveService

logger = logging.getLogger(__name__)


def get_runtime_config() -> RuntimeConfig:
    """Load RuntimeConfig from por.json (if any) with env overrides."""
    return load_runtime_config()


@lru_cache(maxsize=1)
def get_reserve_service() -> ProofOfReserveService:
    """
    The process-wide ProofOfReserveService.

    Built on first use and cached: the tree is immutable, so every
    request can share it. Tests replace it through
    ``app.dependency_overrides[get_reserve_service]``.
    """
    config = get_runtime_config()
    logger.info(
        f"Building reserve tree (leaf_tag={config.hashing.leaf_tag}, "
        f"branch_tag={config.hashing.branch_tag})"
    )
    return ProofOfReserveService.from_config(config)

