"""Transfer request (``SendParam``) construction."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, Union

from oft_sender.core.compose import encode_compose_message
from oft_sender.core.options import build_options
from oft_sender.core.utils import address_to_bytes32, get_logger, hex_to_bytes, to_uint_string

LOGGER = get_logger("oft_sender.request")

_UINT32_MAX = 2**32 - 1


def _to_bytes(value: Union[str, bytes, None]) -> bytes:
    if value is None:
        return b""
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    return hex_to_bytes(value)


@dataclass(frozen=True)
class TransferRequest:
    """One OFT ``SendParam``; field order matches the on-chain struct."""

    dst_eid: int
    to: bytes
    amount_ld: str
    min_amount_ld: str
    extra_options: bytes
    compose_msg: bytes
    oft_cmd: bytes = b""

    def as_tuple(self) -> Tuple[int, bytes, int, int, bytes, bytes, bytes]:
        """Return the ABI argument tuple for ``quoteSend``/``send``."""
        return (
            self.dst_eid,
            self.to,
            int(self.amount_ld),
            int(self.min_amount_ld),
            self.extra_options,
            self.compose_msg,
            self.oft_cmd,
        )

    def describe(self) -> str:
        return (
            f"dstEid={self.dst_eid} to=0x{self.to.hex()} amountLD={self.amount_ld} "
            f"minAmountLD={self.min_amount_ld} options=0x{self.extra_options.hex()} "
            f"composeMsg={len(self.compose_msg)} bytes"
        )


def build_transfer_request(
    *,
    recipient: Union[str, bytes],
    dst_eid: int,
    amount: Union[int, str],
    min_amount: Union[int, str] = 0,
    extra_options: Union[str, bytes, None] = None,
    compose_msg: Union[str, bytes, None] = None,
) -> TransferRequest:
    """Assemble a :class:`TransferRequest` without touching the network."""
    if isinstance(dst_eid, bool) or not isinstance(dst_eid, int):
        raise TypeError("dst_eid must be an int")
    if not 0 <= dst_eid <= _UINT32_MAX:
        raise ValueError(f"dst_eid {dst_eid} does not fit in uint32")

    to = address_to_bytes32(recipient)
    amount_ld = to_uint_string(amount, field_name="amount")
    min_amount_ld = to_uint_string(min_amount, field_name="min_amount")
    if int(min_amount_ld) > int(amount_ld):
        LOGGER.warning("min_amount %s exceeds amount %s; the send will revert on slippage", min_amount_ld, amount_ld)

    return TransferRequest(
        dst_eid=dst_eid,
        to=to,
        amount_ld=amount_ld,
        min_amount_ld=min_amount_ld,
        extra_options=_to_bytes(build_options() if extra_options is None else extra_options),
        compose_msg=_to_bytes(compose_msg),
    )


def build_basic_request(
    *,
    recipient: str,
    dst_eid: int,
    amount: Union[int, str],
    min_amount: Union[int, str] = 0,
    lz_receive_gas: Optional[int] = None,
) -> TransferRequest:
    """Plain send: tokens land directly at ``recipient`` on ``dst_eid``."""
    return build_transfer_request(
        recipient=recipient,
        dst_eid=dst_eid,
        amount=amount,
        min_amount=min_amount,
        extra_options=build_options(lz_receive_gas=lz_receive_gas),
    )


def build_compose_request(
    *,
    hop_address: str,
    hub_eid: int,
    final_recipient: str,
    final_dst_eid: int,
    amount: Union[int, str],
    min_amount: Union[int, str] = 0,
    compose_gas: int = 200_000,
    compose_index: int = 0,
    compose_value: int = 0,
    lz_receive_gas: Optional[int] = None,
) -> TransferRequest:
    """Send to a hop contract on ``hub_eid`` which forwards to ``final_recipient`` on ``final_dst_eid``."""
    options = build_options(
        lz_receive_gas=lz_receive_gas,
        compose_gas=compose_gas,
        compose_index=compose_index,
        compose_value=compose_value,
    )
    return build_transfer_request(
        recipient=hop_address,
        dst_eid=hub_eid,
        amount=amount,
        min_amount=min_amount,
        extra_options=options,
        compose_msg=encode_compose_message(final_recipient, final_dst_eid),
    )


__all__ = ["TransferRequest", "build_basic_request", "build_compose_request", "build_transfer_request"]
