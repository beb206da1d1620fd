"""Fee quoting and submission of OFT ``send`` transactions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from eth_account.signers.local import LocalAccount
from web3 import Web3
from web3.contract import Contract
from web3.exceptions import Web3Exception

from oft_sender.core.errors import RemoteCallError, SubmissionError
from oft_sender.core.request import TransferRequest
from oft_sender.core.utils import get_logger

LOGGER = get_logger("oft_sender.transfer")

# web3 surfaces node/transport failures as Web3Exception, ValueError (JSON-RPC
# error payloads) or OSError (requests/aiohttp connection errors).
REMOTE_ERRORS = (Web3Exception, ValueError, OSError)


@dataclass(frozen=True)
class MessagingFee:
    """Fee returned by ``quoteSend``."""

    native_fee: int
    lz_token_fee: int = 0

    def as_tuple(self) -> Tuple[int, int]:
        return (self.native_fee, self.lz_token_fee)


@dataclass(frozen=True)
class GasParameters:
    """EIP-1559 gas parameters."""

    gas: int
    gas_price: int
    max_priority_fee: int
    max_fee: int
    estimated_cost: int


@dataclass(frozen=True)
class SubmissionResult:
    """Outcome of a broadcast ``send``."""

    tx_hash: str
    fee: MessagingFee
    receipt: Optional[Dict[str, Any]] = None

    @property
    def succeeded(self) -> Optional[bool]:
        if self.receipt is None:
            return None
        return self.receipt["status"] == 1


def quote_fee(contract: Contract, request: TransferRequest, *, pay_in_lz_token: bool = False) -> MessagingFee:
    """Ask the OFT for the fee required to deliver ``request``."""
    try:
        native_fee, lz_token_fee = contract.functions.quoteSend(request.as_tuple(), pay_in_lz_token).call()
    except REMOTE_ERRORS as exc:
        raise RemoteCallError(f"quoteSend failed: {exc}") from exc

    fee = MessagingFee(native_fee=int(native_fee), lz_token_fee=int(lz_token_fee))
    LOGGER.info("Quoted nativeFee=%s (%.6f ETH) lzTokenFee=%s", fee.native_fee, fee.native_fee / 10**18, fee.lz_token_fee)
    return fee


def fetch_decimal_conversion_rate(contract: Contract) -> int:
    """Return the OFT local-to-shared decimal conversion rate."""
    try:
        return int(contract.functions.decimalConversionRate().call())
    except REMOTE_ERRORS as exc:
        raise RemoteCallError(f"decimalConversionRate failed: {exc}") from exc


def _send_call(contract: Contract, request: TransferRequest, fee: MessagingFee, refund_address: str):
    return contract.functions.send(request.as_tuple(), fee.as_tuple(), Web3.to_checksum_address(refund_address))


def estimate_send_gas(
    *,
    web3: Web3,
    contract: Contract,
    request: TransferRequest,
    fee: MessagingFee,
    sender: str,
    refund_address: Optional[str] = None,
) -> GasParameters:
    """Estimate gas for ``send`` without broadcasting anything."""
    call = _send_call(contract, request, fee, refund_address or sender)
    try:
        gas_estimate = call.estimate_gas({"from": sender, "value": fee.native_fee})
        gas_price = web3.eth.gas_price
        max_priority_fee = web3.eth.max_priority_fee
    except REMOTE_ERRORS as exc:
        raise RemoteCallError(f"Gas estimation for send failed: {exc}") from exc

    return GasParameters(
        gas=gas_estimate,
        gas_price=gas_price,
        max_priority_fee=max_priority_fee,
        max_fee=gas_price + max_priority_fee,
        estimated_cost=gas_estimate * gas_price,
    )


def submit_transfer(
    *,
    web3: Web3,
    contract: Contract,
    request: TransferRequest,
    fee: MessagingFee,
    account: LocalAccount,
    refund_address: Optional[str] = None,
    wait_for_receipt: bool = False,
) -> SubmissionResult:
    """Sign and broadcast ``send`` with ``fee.native_fee`` attached as value."""
    sender = account.address
    refund = refund_address or sender

    try:
        tx = _send_call(contract, request, fee, refund).build_transaction(
            {
                "from": sender,
                "value": fee.native_fee,
                "nonce": web3.eth.get_transaction_count(sender),
                "chainId": web3.eth.chain_id,
            }
        )
    except REMOTE_ERRORS as exc:
        raise SubmissionError(f"Failed to build send transaction: {exc}") from exc

    try:
        LOGGER.info("Signing transaction")
        signed = account.sign_transaction(tx)
    except (TypeError, ValueError) as exc:
        raise SubmissionError(f"Failed to sign send transaction: {exc}") from exc

    try:
        LOGGER.info("Broadcasting transaction")
        tx_hash = web3.eth.send_raw_transaction(signed.raw_transaction)
    except REMOTE_ERRORS as exc:
        raise SubmissionError(f"Node rejected send transaction: {exc}") from exc

    tx_hex = Web3.to_hex(tx_hash)
    LOGGER.info("Transaction hash: %s", tx_hex)

    receipt = None
    if wait_for_receipt:
        LOGGER.info("Awaiting confirmation")
        try:
            receipt = web3.eth.wait_for_transaction_receipt(tx_hash)
        except REMOTE_ERRORS as exc:
            raise SubmissionError(f"Transaction {tx_hex} was broadcast but no receipt was obtained: {exc}") from exc
        if receipt["status"] == 1:
            LOGGER.info("Transaction confirmed in block %s (gasUsed=%s)", receipt["blockNumber"], receipt["gasUsed"])
        else:
            LOGGER.error("Transaction failed! status=%s", receipt["status"])

    return SubmissionResult(tx_hash=tx_hex, fee=fee, receipt=receipt)


def run_transfer(
    *,
    web3: Web3,
    contract: Contract,
    request: TransferRequest,
    account: LocalAccount,
    refund_address: Optional[str] = None,
    wait_for_receipt: bool = False,
) -> SubmissionResult:
    """Quote then submit; a failed quote aborts before anything is signed."""
    LOGGER.info("Transfer request: %s", request.describe())
    fee = quote_fee(contract, request)
    return submit_transfer(
        web3=web3,
        contract=contract,
        request=request,
        fee=fee,
        account=account,
        refund_address=refund_address,
        wait_for_receipt=wait_for_receipt,
    )


__all__ = [
    "GasParameters",
    "MessagingFee",
    "REMOTE_ERRORS",
    "SubmissionResult",
    "estimate_send_gas",
    "fetch_decimal_conversion_rate",
    "quote_fee",
    "run_transfer",
    "submit_transfer",
]
