"""Configuration utilities for the OFT sender."""

from .loader import (
    SEND_MODES,
    ChainConfig,
    ComposeConfig,
    ConfigurationError,
    ContractsConfig,
    SenderConfig,
    TransferConfig,
    load_account,
    load_config,
)

__all__ = [
    "ChainConfig",
    "ComposeConfig",
    "ConfigurationError",
    "ContractsConfig",
    "SEND_MODES",
    "SenderConfig",
    "TransferConfig",
    "load_account",
    "load_config",
]
