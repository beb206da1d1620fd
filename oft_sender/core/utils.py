"""Utility helpers shared across OFT sender core modules."""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation, localcontext
from typing import Union

from web3 import Web3

BYTES32_LENGTH = 32
UINT256_MAX = 2**256 - 1


def get_logger(name: str = "oft_sender") -> logging.Logger:
    """Return a configured logger that prints to stdout."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
    return logger


def hex_to_bytes(data: str) -> bytes:
    """Convert a hex string (with or without ``0x``) to bytes."""
    data = data[2:] if data.startswith("0x") else data
    return bytes.fromhex(data)


def address_to_bytes32(address: Union[str, bytes]) -> bytes:
    """Left-pad an address (hex string or raw bytes) with zero bytes to 32 bytes."""
    raw = bytes(address) if isinstance(address, (bytes, bytearray)) else Web3.to_bytes(hexstr=address)
    if len(raw) > BYTES32_LENGTH:
        raise ValueError(f"Address is {len(raw)} bytes, cannot pad to {BYTES32_LENGTH}")
    return raw.rjust(BYTES32_LENGTH, b"\x00")


def bytes32_to_address(value: bytes) -> str:
    """Return the checksummed EVM address held in the low 20 bytes of ``value``."""
    if len(value) != BYTES32_LENGTH:
        raise ValueError(f"Expected {BYTES32_LENGTH} bytes, got {len(value)}")
    return Web3.to_checksum_address(value[-20:])


def to_uint_string(value: Union[int, str], *, field_name: str = "amount") -> str:
    """Normalise a non-negative integer amount to its exact decimal string form."""
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise TypeError(f"{field_name} must be an int or a decimal string, got {type(value).__name__}")
    if isinstance(value, str):
        text = value.strip()
        if not (text.isascii() and text.isdigit()):
            raise ValueError(f"{field_name} must be a non-negative integer string, got {value!r}")
        value = int(text)
    if value < 0:
        raise ValueError(f"{field_name} must be non-negative, got {value}")
    if value > UINT256_MAX:
        raise ValueError(f"{field_name} {value} does not fit in uint256")
    return str(value)


def parse_token_amount(value: Union[int, str], decimals: int) -> int:
    """Convert a human-unit amount (``"20"``, ``"1.5"``) to base units without precision loss."""
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise TypeError(f"Token amount must be an int or a decimal string, got {type(value).__name__}")
    if decimals < 0:
        raise ValueError("decimals must be non-negative")
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation as exc:
        raise ValueError(f"Invalid token amount: {value!r}") from exc
    if not amount.is_finite() or amount < 0:
        raise ValueError(f"Token amount must be a finite non-negative number, got {value!r}")
    if amount and amount.adjusted() + decimals >= len(str(UINT256_MAX)):
        raise ValueError(f"Token amount {value!r} does not fit in uint256 at {decimals} decimals")

    with localcontext() as ctx:
        # scaleb only moves the exponent; keeping every digit makes it exact
        ctx.prec = max(len(amount.as_tuple().digits), 1)
        scaled = amount.scaleb(decimals)
    if scaled != scaled.to_integral_value():
        raise ValueError(f"Token amount {value!r} has more than {decimals} decimal places")
    result = int(scaled)
    if result > UINT256_MAX:
        raise ValueError(f"Token amount {value!r} does not fit in uint256 at {decimals} decimals")
    return result


__all__ = [
    "BYTES32_LENGTH",
    "UINT256_MAX",
    "address_to_bytes32",
    "bytes32_to_address",
    "get_logger",
    "hex_to_bytes",
    "parse_token_amount",
    "to_uint_string",
]
