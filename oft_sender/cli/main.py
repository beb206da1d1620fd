"""CLI entrypoint for submitting an OFT send."""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path
from typing import Callable, List, Optional

from dotenv import load_dotenv
from eth_account.signers.local import LocalAccount
from web3 import Web3
from web3.contract import Contract

from oft_sender.config import SEND_MODES, SenderConfig, load_account, load_config
from oft_sender.contracts import load_contract_abi
from oft_sender.core.errors import ConfigurationError, OftSendError, RemoteCallError
from oft_sender.core.request import TransferRequest, build_basic_request, build_compose_request
from oft_sender.core.transfer import (
    GasParameters,
    REMOTE_ERRORS,
    MessagingFee,
    SubmissionResult,
    estimate_send_gas,
    fetch_decimal_conversion_rate,
    quote_fee,
    run_transfer,
)
from oft_sender.core.utils import get_logger

LOGGER = get_logger("oft_sender.cli")

load_dotenv()


def default_web3_factory(url: str, timeout: Optional[int] = None) -> Web3:
    request_kwargs = {"timeout": timeout} if timeout else None
    return Web3(Web3.HTTPProvider(url, request_kwargs=request_kwargs))


def build_request(config: SenderConfig, signer_address: str) -> TransferRequest:
    """Build the ``SendParam`` described by ``config``; the recipient defaults to the signer."""
    transfer = config.transfer
    recipient = transfer.recipient or signer_address

    if transfer.mode == "basic":
        return build_basic_request(
            recipient=recipient,
            dst_eid=transfer.dst_eid,
            amount=transfer.amount_ld,
            min_amount=transfer.min_amount_ld,
            lz_receive_gas=transfer.lz_receive_gas,
        )

    compose = config.compose
    if compose is None:
        raise ConfigurationError("compose mode requires a 'compose' section with hop_address")
    return build_compose_request(
        hop_address=compose.hop_address,
        hub_eid=transfer.dst_eid,
        final_recipient=recipient,
        final_dst_eid=compose.final_dst_eid,
        amount=transfer.amount_ld,
        min_amount=transfer.min_amount_ld,
        compose_gas=compose.gas,
        compose_index=compose.index,
        compose_value=compose.value,
        lz_receive_gas=transfer.lz_receive_gas,
    )


class OftSender:
    """Builds, quotes and submits one OFT ``send`` from a loaded config."""

    def __init__(
        self,
        *,
        config: SenderConfig,
        account: LocalAccount,
        rpc_url: Optional[str] = None,
        web3_factory: Callable[..., Web3] = default_web3_factory,
        contract: Optional[Contract] = None,
    ) -> None:
        self.config = config
        self.account = account
        self.address = account.address

        resolved_rpc = rpc_url or config.chain.ensure_rpc_url()
        self.web3 = web3_factory(resolved_rpc, config.chain.rpc_timeout)

        try:
            connected = self.web3.is_connected()
            chain_id = self.web3.eth.chain_id if connected else None
        except REMOTE_ERRORS as exc:
            raise RemoteCallError(f"Failed to query RPC {resolved_rpc}: {exc}") from exc
        if not connected:
            raise RemoteCallError(f"Failed to connect to RPC: {resolved_rpc}")
        if chain_id != config.chain.chain_id:
            raise ConfigurationError(f"Wrong chain! Expected {config.chain.chain_id}, got {chain_id}")
        LOGGER.info("Connected to chain %s as %s", config.chain.chain_id, self.address)

        self.contract = contract or self.web3.eth.contract(
            address=config.contracts.oft_address,
            abi=load_contract_abi(),
        )

    @property
    def refund_address(self) -> str:
        return self.config.transfer.refund_address or self.address

    def prepare_request(self) -> TransferRequest:
        """Build the ``SendParam`` for the configured mode."""
        return build_request(self.config, self.address)

    def execute_dry_run(self) -> GasParameters:
        """Quote the fee and estimate gas without broadcasting."""
        request = self.prepare_request()
        self._log_request(request)
        self._warn_on_dust(request)
        fee = quote_fee(self.contract, request)
        gas = estimate_send_gas(
            web3=self.web3,
            contract=self.contract,
            request=request,
            fee=fee,
            sender=self.address,
            refund_address=self.refund_address,
        )
        self._log_gas(gas, fee)
        return gas

    def execute_send(self, *, wait_for_receipt: bool = False) -> SubmissionResult:
        """Quote the fee and broadcast the send."""
        request = self.prepare_request()
        self._log_request(request)
        return run_transfer(
            web3=self.web3,
            contract=self.contract,
            request=request,
            account=self.account,
            refund_address=self.refund_address,
            wait_for_receipt=wait_for_receipt,
        )

    def _log_request(self, request: TransferRequest) -> None:
        transfer = self.config.transfer
        LOGGER.info(
            "Mode=%s dstEid=%s amount=%s (%s decimals) minAmount=%s",
            transfer.mode,
            request.dst_eid,
            request.amount_ld,
            transfer.decimals,
            request.min_amount_ld,
        )
        if transfer.mode == "compose" and self.config.compose is not None:
            LOGGER.info(
                "Compose hop=%s finalDstEid=%s gas=%s",
                self.config.compose.hop_address,
                self.config.compose.final_dst_eid,
                self.config.compose.gas,
            )

    def _warn_on_dust(self, request: TransferRequest) -> None:
        rate = fetch_decimal_conversion_rate(self.contract)
        if rate and int(request.amount_ld) % rate:
            LOGGER.warning(
                "Amount %s is not a multiple of the decimal conversion rate %s; dust will be removed",
                request.amount_ld,
                rate,
            )

    @staticmethod
    def _log_gas(gas: GasParameters, fee: MessagingFee) -> None:
        LOGGER.info(
            "Estimate gas=%s maxFee=%.2f gwei priority=%.2f gwei estimatedCost=%.6f ETH nativeFee=%.6f ETH",
            gas.gas,
            gas.max_fee / 10**9,
            gas.max_priority_fee / 10**9,
            gas.estimated_cost / 10**18,
            fee.native_fee / 10**18,
        )


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Submit a LayerZero OFT send")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--dry-run", action="store_true", help="Quote and estimate without sending")
    group.add_argument("--send", action="store_true", help="Sign and broadcast the send transaction")
    parser.add_argument("--config", type=Path, default=None, help="Path to config JSON (default: config.json)")
    parser.add_argument("--mode", choices=SEND_MODES, default=None, help="Override transfer.mode")
    parser.add_argument("--amount", default=None, help="Override transfer.amount in token units")
    parser.add_argument("--wait", action="store_true", help="Wait for the transaction receipt after sending")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)

    rpc_url_env = os.getenv("RPC_URL") or ""
    rpc_url = rpc_url_env.strip() or None
    private_key = os.getenv("PK") or os.getenv("PRIVATE_KEY")

    try:
        account = load_account(private_key)
        config = load_config(args.config)
        if args.mode:
            config = config.with_mode(args.mode)
        if args.amount:
            config = config.with_amount(args.amount)

        sender = OftSender(config=config, account=account, rpc_url=rpc_url)
        if args.dry_run:
            sender.execute_dry_run()
        else:
            result = sender.execute_send(wait_for_receipt=args.wait)
            if result.succeeded is False:
                sys.exit(1)
    except OftSendError as exc:
        print(f"\n❌ Error: {exc}")
        sys.exit(1)


if __name__ == "__main__":  # pragma: no cover - CLI entry
    main()
