"""
Mecene settings.

Values resolve in this order, first match wins:
    environment variables (including those loaded from .env.<env>, then .env)
    config/<env>.yaml
    config/default.yaml
    field defaults below
"""

import os
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT = Path(__file__).resolve().parents[3]
CONFIG_DIR = PROJECT_ROOT / "config"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
ETH_NETWORKS = ("mainnet", "ropsten", "rinkeby", "goerli", "sepolia", "holesky", "local")


class Settings(BaseSettings):
    """
    Store, chain, error reporting and logging settings.

    Contract addresses and endpoints differ per network and come from
    the environment-specific YAML file or from environment variables.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="allow",
    )

    # Application
    APP_NAME: str = "Mecene"
    APP_VERSION: str = "0.1.0"
    ENV: str = Field(default="development", description="Environment name")

    # Store (Feathers real-time query service)
    STORE_URL: str = Field(
        default="http://localhost:3030",
        description="Store REST base URL",
    )
    STORE_REALTIME_URL: Optional[str] = Field(
        default=None,
        description="Store websocket base URL (derived from STORE_URL if unset)",
    )
    STORE_TIMEOUT: float = Field(
        default=30.0,
        gt=0,
        description="Store request timeout in seconds",
    )

    # Blockchain
    ETH_RPC_URL: str = Field(
        default="http://localhost:8545",
        description="Ethereum JSON-RPC URL",
    )
    ETH_NETWORK: str = Field(default="sepolia")
    CAMPAIGN_FACTORY_ADDRESS: Optional[str] = Field(
        default=None,
        description="Deployed LPP campaign factory address",
    )
    EXPLORER_URL: Optional[str] = Field(
        default=None,
        description="Block explorer base URL (defaults per network)",
    )
    RPC_TIMEOUT: float = Field(default=30.0, gt=0)
    RECEIPT_TIMEOUT: float = Field(
        default=600.0,
        gt=0,
        description="Max seconds to wait for a transaction to be mined",
    )
    RECEIPT_POLL_INTERVAL: float = Field(
        default=2.0,
        gt=0,
        description="Seconds between receipt polls",
    )

    # Error reporting (Courier)
    ERROR_REPORTING_ENABLED: bool = Field(
        default=True,
        description="Publish error popups to Courier",
    )
    COURIER_URL: str = Field(
        default="http://courier:8765",
        description="Courier service URL (Docker DNS)",
    )
    COURIER_ERROR_CHANNEL: str = Field(default="errors")
    COURIER_TIMEOUT: float = Field(default=5.0, gt=0)

    # Logging
    LOG_LEVEL: str = Field(default="INFO")
    LOG_JSON: bool = Field(default=True)

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize log level to upper case."""
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {LOG_LEVELS}, got {v}")
        return level

    @field_validator("ETH_NETWORK")
    @classmethod
    def validate_eth_network(cls, v: str) -> str:
        """Normalize network name to lower case."""
        network = v.lower()
        if network not in ETH_NETWORKS:
            raise ValueError(f"ETH_NETWORK must be one of {ETH_NETWORKS}, got {v}")
        return network


def _read_yaml(path: Path) -> dict:
    if not path.exists():
        return {}
    with open(path, "r") as f:
        return yaml.safe_load(f) or {}


def load_config(
    config_file: Optional[str] = None,
    env_file: Optional[str] = None,
    env: Optional[str] = None,
) -> Settings:
    """
    Load configuration from YAML files and environment variables.

    Args:
        config_file: YAML filename under config/ (defaults per environment)
        env_file: Dotenv filename at project root (defaults per environment)
        env: Environment name (defaults to $ENV, then "development")

    Returns:
        Settings instance

    Raises:
        ValidationError: If a field is invalid
    """
    environment = env or os.getenv("ENV", "development")
    default_env_file = f".env.{environment}"
    default_config_file = f"{environment}.yaml"

    dotenv_path = PROJECT_ROOT / (env_file or default_env_file)
    if dotenv_path.exists():
        load_dotenv(dotenv_path, override=True)

    # The working directory .env fills gaps only
    local_dotenv = Path(".env")
    if local_dotenv.exists():
        load_dotenv(local_dotenv, override=False)

    values = _read_yaml(CONFIG_DIR / "default.yaml")
    values.update(_read_yaml(CONFIG_DIR / (config_file or default_config_file)))

    # Environment variables win over YAML values
    overrides = {key: value for key, value in values.items() if key not in os.environ}

    return Settings(**overrides)


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or initialize global settings singleton."""
    global _settings
    if _settings is None:
        _settings = load_config()
    return _settings


def override_settings(new_settings: Settings) -> None:
    """Override global settings (for testing)."""
    global _settings
    _settings = new_settings


def reset_settings() -> None:
    """Reset settings to force re-initialization (for testing)."""
    global _settings
    _settings = None
