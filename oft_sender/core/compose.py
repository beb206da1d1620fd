"""Compose message codec for the mint/redeem hop."""

from __future__ import annotations

from typing import Tuple, Union

from eth_abi import decode, encode

from oft_sender.core.utils import address_to_bytes32

COMPOSE_MSG_TYPES = ["bytes32", "uint32"]


def encode_compose_message(recipient: Union[str, bytes], dst_eid: int) -> bytes:
    """ABI-encode ``(bytes32 recipient, uint32 dstEid)`` for the hop contract."""
    return encode(COMPOSE_MSG_TYPES, [address_to_bytes32(recipient), int(dst_eid)])


def decode_compose_message(payload: bytes) -> Tuple[bytes, int]:
    """Inverse of :func:`encode_compose_message`."""
    recipient, dst_eid = decode(COMPOSE_MSG_TYPES, bytes(payload))
    return recipient, dst_eid


__all__ = ["COMPOSE_MSG_TYPES", "decode_compose_message", "encode_compose_message"]
