"""Config loader for the OFT sender."""

from __future__ import annotations

import json
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Iterable, Mapping, MutableMapping, Optional

from eth_account import Account
from eth_account.signers.local import LocalAccount
from web3 import Web3

from oft_sender.core.errors import ConfigurationError
from oft_sender.core.utils import parse_token_amount

SEND_MODES = ("basic", "compose")
DEFAULT_COMPOSE_GAS = 200_000


def _require_keys(data: Mapping[str, Any], keys: Iterable[str], context: str) -> None:
    missing = [key for key in keys if key not in data]
    if missing:
        raise ConfigurationError(f"{context} missing required keys: {', '.join(missing)}")


def _to_checksum(value: Any, *, field_name: str) -> str:
    if not isinstance(value, str) or not Web3.is_address(value):
        raise ConfigurationError(f"Invalid address for {field_name}: {value!r}")
    try:
        return Web3.to_checksum_address(value)
    except Exception as exc:  # web3 raises ValueError for malformed inputs
        raise ConfigurationError(f"Invalid address for {field_name}: {value}") from exc


def _optional_checksum(value: Any, *, field_name: str) -> Optional[str]:
    return None if value is None else _to_checksum(value, field_name=field_name)


def _to_int(value: Any, *, field_name: str, minimum: int = 0) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise ConfigurationError(f"{field_name} must be an integer, got {value!r}")
    try:
        result = int(value)
    except ValueError as exc:
        raise ConfigurationError(f"{field_name} must be an integer, got {value!r}") from exc
    if result < minimum:
        raise ConfigurationError(f"{field_name} must be >= {minimum}, got {result}")
    return result


def _to_amount(value: Any, *, field_name: str, decimals: int) -> int:
    try:
        return parse_token_amount(value, decimals)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"Invalid {field_name}: {exc}") from exc


def _check_min_amount(transfer: "TransferConfig") -> None:
    if transfer.min_amount_ld > transfer.amount_ld:
        raise ConfigurationError("transfer.min_amount cannot exceed transfer.amount")


@dataclass(frozen=True)
class ChainConfig:
    """Configuration for the source chain."""

    chain_id: int
    rpc_url: Optional[str] = None
    rpc_timeout: Optional[int] = None

    def ensure_rpc_url(self) -> str:
        """Return the RPC URL or raise if it is missing."""
        if not self.rpc_url:
            raise ConfigurationError("RPC URL required but not configured")
        return self.rpc_url


@dataclass(frozen=True)
class ContractsConfig:
    """Contract addresses on the source chain."""

    oft_address: str


@dataclass(frozen=True)
class TransferConfig:
    """Parameters of the single transfer to submit."""

    mode: str
    dst_eid: int
    amount_ld: int
    min_amount_ld: int
    decimals: int
    recipient: Optional[str] = None
    refund_address: Optional[str] = None
    lz_receive_gas: Optional[int] = None


@dataclass(frozen=True)
class ComposeConfig:
    """Follow-on hop executed by the compose receiver on the hub chain."""

    hop_address: str
    final_dst_eid: int
    index: int = 0
    gas: int = DEFAULT_COMPOSE_GAS
    value: int = 0


@dataclass(frozen=True)
class SenderConfig:
    """Typed wrapper around the sender configuration."""

    chain: ChainConfig
    contracts: ContractsConfig
    transfer: TransferConfig
    compose: Optional[ComposeConfig] = None

    def with_mode(self, mode: str) -> "SenderConfig":
        """Return a copy using ``mode``, re-checking the compose section."""
        if mode not in SEND_MODES:
            raise ConfigurationError(f"Unknown send mode {mode!r}; expected one of {', '.join(SEND_MODES)}")
        if mode == "compose" and self.compose is None:
            raise ConfigurationError("compose mode requires a 'compose' section with hop_address")
        return replace(self, transfer=replace(self.transfer, mode=mode))

    def with_amount(self, amount: str) -> "SenderConfig":
        """Return a copy sending ``amount`` (token units) instead of the configured amount."""
        amount_ld = _to_amount(amount, field_name="amount", decimals=self.transfer.decimals)
        transfer = replace(self.transfer, amount_ld=amount_ld)
        _check_min_amount(transfer)
        return replace(self, transfer=transfer)


def _load_json(path: Path) -> MutableMapping[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as fh:
            return json.load(fh)
    except FileNotFoundError as exc:
        raise ConfigurationError(f"Config file not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Config file contains invalid JSON: {path}") from exc


def _parse_compose(data: Mapping[str, Any]) -> ComposeConfig:
    _require_keys(data, ["hop_address", "final_dst_eid"], "compose")
    return ComposeConfig(
        hop_address=_to_checksum(data["hop_address"], field_name="compose.hop_address"),
        final_dst_eid=_to_int(data["final_dst_eid"], field_name="compose.final_dst_eid"),
        index=_to_int(data.get("index", 0), field_name="compose.index"),
        gas=_to_int(data.get("gas", DEFAULT_COMPOSE_GAS), field_name="compose.gas", minimum=1),
        value=_to_int(data.get("value", 0), field_name="compose.value"),
    )


def load_config(config_path: Optional[Path] = None) -> SenderConfig:
    """Load and validate sender configuration data."""
    config_path = config_path or Path("config.json")
    data = _load_json(config_path)

    _require_keys(data, ["chain", "contracts", "transfer"], "config")

    chain_data = data["chain"]
    _require_keys(chain_data, ["chain_id", "rpc_url"], "chain")
    rpc_timeout = chain_data.get("rpc_timeout")
    chain = ChainConfig(
        chain_id=_to_int(chain_data["chain_id"], field_name="chain.chain_id", minimum=1),
        rpc_url=str(chain_data["rpc_url"]) if chain_data["rpc_url"] else None,
        rpc_timeout=None if rpc_timeout is None else _to_int(rpc_timeout, field_name="chain.rpc_timeout", minimum=1),
    )

    contracts_data = data["contracts"]
    _require_keys(contracts_data, ["oft_address"], "contracts")
    contracts = ContractsConfig(
        oft_address=_to_checksum(contracts_data["oft_address"], field_name="contracts.oft_address"),
    )

    transfer_data = data["transfer"]
    _require_keys(transfer_data, ["dst_eid", "amount"], "transfer")
    decimals = _to_int(transfer_data.get("decimals", 18), field_name="transfer.decimals")
    lz_receive_gas = transfer_data.get("lz_receive_gas")
    transfer = TransferConfig(
        mode=str(transfer_data.get("mode", "compose")),
        dst_eid=_to_int(transfer_data["dst_eid"], field_name="transfer.dst_eid"),
        amount_ld=_to_amount(transfer_data["amount"], field_name="transfer.amount", decimals=decimals),
        min_amount_ld=_to_amount(transfer_data.get("min_amount", "0"), field_name="transfer.min_amount", decimals=decimals),
        decimals=decimals,
        recipient=_optional_checksum(transfer_data.get("recipient"), field_name="transfer.recipient"),
        refund_address=_optional_checksum(transfer_data.get("refund_address"), field_name="transfer.refund_address"),
        lz_receive_gas=None if lz_receive_gas is None else _to_int(lz_receive_gas, field_name="transfer.lz_receive_gas", minimum=1),
    )
    _check_min_amount(transfer)

    compose_data = data.get("compose")
    compose = _parse_compose(compose_data) if compose_data is not None else None

    config = SenderConfig(chain=chain, contracts=contracts, transfer=transfer, compose=compose)
    return config.with_mode(transfer.mode)


def load_account(private_key: Optional[str]) -> LocalAccount:
    """Build the signing account from a hex private key."""
    key = (private_key or "").strip()
    if not key:
        raise ConfigurationError("PK environment variable not set")
    try:
        return Account.from_key(key)
    except (TypeError, ValueError) as exc:
        # never echo the key itself
        raise ConfigurationError("PK is not a valid private key") from exc


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
