"""
CLI Configuration

Wraps the shared RuntimeConfig with CLI-only settings (log file,
output format). Environment variables override file settings.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from core.config.runtime import ENV_PREFIX, RuntimeConfig, load_runtime_config
from core.reserve.service import ProofOfReserveService


@dataclass
class CLIConfig:
    """Main CLI configuration."""

    runtime: RuntimeConfig = field(default_factory=RuntimeConfig)

    # Logging
    log_file: str | None = None

    # Output
    default_output_format: str = "human"  # "human" or "json"

    @property
    def log_level(self) -> str:
        return self.runtime.log_level

    @property
    def wants_json(self) -> bool:
        return self.default_output_format == "json"


def load_config(config_path: Path | None = None) -> CLIConfig:
    """
    Load configuration from file and/or environment.

    Args:
        config_path: Optional path to config file; otherwise the default
            locations (./por.json, ./.por.json, ~/.config/por/config.json)

    Returns:
        Merged configuration

    Raises:
        ConfigurationException: If an explicit config file is missing or invalid
    """
    config = CLIConfig(runtime=load_runtime_config(config_path))

    if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
        config.log_file = os.getenv(f"{ENV_PREFIX}LOG_FILE")
    if os.getenv(f"{ENV_PREFIX}OUTPUT_FORMAT"):
        config.default_output_format = os.getenv(f"{ENV_PREFIX}OUTPUT_FORMAT", "human").lower()

    return config


def build_service(config: CLIConfig) -> ProofOfReserveService:
    """Service over the configured account store and hash scheme."""
    return ProofOfReserveService.from_config(config.runtime)
