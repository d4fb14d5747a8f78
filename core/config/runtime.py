"""
Runtime Configuration

Central configuration for the hash scheme, the account source, and
service setup.
"""

from __future__ import annotations

import copy
import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from core.crypto.hashing import TAG_RESERVE_BRANCH, TAG_RESERVE_LEAF, HashScheme
from core.schemas.errors import ConfigurationException

load_dotenv()

logger = logging.getLogger(__name__)

ENV_PREFIX = "POR_"


@dataclass
class HashingConfig:
    """Tags used for leaf and branch hashing."""
    leaf_tag: str = TAG_RESERVE_LEAF
    branch_tag: str = TAG_RESERVE_BRANCH

    def to_scheme(self) -> HashScheme:
        try:
            return HashScheme(self.leaf_tag, self.branch_tag)
        except ValueError as e:
            raise ConfigurationException(f"Invalid hashing configuration: {e}") from e


@dataclass
class StoreConfig:
    """Where account records come from."""
    accounts_file: Optional[str] = None  # None -> built-in sample accounts


@dataclass
class ServerConfig:
    """Configuration for the HTTP server."""
    host: str = "0.0.0.0"
    port: int = 8000


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables (and a .env file)
    - JSON file
    - Programmatic construction
    """
    hashing: HashingConfig = field(default_factory=HashingConfig)
    store: StoreConfig = field(default_factory=StoreConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    log_level: str = "INFO"

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - POR_LEAF_TAG: Tag for leaf hashing
        - POR_BRANCH_TAG: Tag for branch hashing
        - POR_ACCOUNTS_FILE: JSON file with account records
        - POR_HOST / POR_PORT: HTTP bind address
        - POR_LOG_LEVEL: Log level
        """
        overrides: dict[str, Any] = {}

        if os.getenv(f"{ENV_PREFIX}LEAF_TAG"):
            overrides.setdefault("hashing", {})["leaf_tag"] = os.getenv(f"{ENV_PREFIX}LEAF_TAG")
        if os.getenv(f"{ENV_PREFIX}BRANCH_TAG"):
            overrides.setdefault("hashing", {})["branch_tag"] = os.getenv(f"{ENV_PREFIX}BRANCH_TAG")

        if os.getenv(f"{ENV_PREFIX}ACCOUNTS_FILE"):
            overrides.setdefault("store", {})["accounts_file"] = os.getenv(f"{ENV_PREFIX}ACCOUNTS_FILE")

        if os.getenv(f"{ENV_PREFIX}HOST"):
            overrides.setdefault("server", {})["host"] = os.getenv(f"{ENV_PREFIX}HOST")
        if os.getenv(f"{ENV_PREFIX}PORT"):
            raw_port = os.getenv(f"{ENV_PREFIX}PORT", "")
            try:
                overrides.setdefault("server", {})["port"] = int(raw_port)
            except ValueError as e:
                raise ConfigurationException(
                    f"{ENV_PREFIX}PORT must be an integer, got {raw_port!r}"
                ) from e

        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides["log_level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """Load configuration purely from environment variables."""
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        hashing_data = data.get("hashing", {})
        store_data = data.get("store", {})
        server_data = data.get("server", {})

        try:
            hashing = HashingConfig(**hashing_data) if hashing_data else HashingConfig()
            store = StoreConfig(**store_data) if store_data else StoreConfig()
            server = ServerConfig(**server_data) if server_data else ServerConfig()
        except TypeError as e:
            raise ConfigurationException(f"Unknown configuration key: {e}") from e

        return cls(
            hashing=hashing,
            store=store,
            server=server,
            log_level=data.get("log_level", "INFO"),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)

        for section in ("hashing", "store", "server"):
            for key, value in overrides.get(section, {}).items():
                setattr(getattr(new_config, section), key, value)

        if "log_level" in overrides:
            new_config.log_level = overrides["log_level"]

        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "hashing": {
                "leaf_tag": self.hashing.leaf_tag,
                "branch_tag": self.hashing.branch_tag,
            },
            "store": {
                "accounts_file": self.store.accounts_file,
            },
            "server": {
                "host": self.server.host,
                "port": self.server.port,
            },
            "log_level": self.log_level,
        }


def default_config_paths() -> list[Path]:
    """Config file search order when no explicit path is given."""
    return [
        Path.cwd() / "por.json",
        Path.cwd() / ".por.json",
        Path.home() / ".config" / "por" / "config.json",
    ]


def _read_config_file(path: Path) -> RuntimeConfig:
    with open(path) as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ConfigurationException("Config file must contain a JSON object", path=str(path))
    return RuntimeConfig.from_dict(data)


def load_runtime_config(path: Path | str | None = None) -> RuntimeConfig:
    """
    Load RuntimeConfig from a config file, then overlay environment variables.

    An explicit ``path`` must exist and parse. Without one, the default
    locations are searched and the first parseable file wins; broken
    files found by the search are logged and skipped.

    Environment variables ALWAYS override config file values.

    Raises:
        ConfigurationException: If an explicit config file is missing or invalid
    """
    config: RuntimeConfig | None = None

    if path is not None:
        path = Path(path)
        if not path.exists():
            raise ConfigurationException(f"Config file not found: {path}", path=str(path))
        try:
            config = _read_config_file(path)
        except (json.JSONDecodeError, OSError) as e:
            raise ConfigurationException(f"Failed to parse {path}: {e}", path=str(path)) from e
        logger.info(f"Loaded config from {path}")
    else:
        for candidate in default_config_paths():
            if not candidate.exists():
                continue
            try:
                config = _read_config_file(candidate)
            except (json.JSONDecodeError, OSError, ConfigurationException) as e:
                logger.warning(f"Failed to parse {candidate}: {e}")
                continue
            logger.info(f"Loaded config from {candidate}")
            break

    if config is None:
        config = RuntimeConfig()

    return config.with_env_overrides()


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return json.dumps(RuntimeConfig().to_dict(), indent=2) + "\n"

