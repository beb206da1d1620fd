"""LayerZero executor option encoding (type 3 options)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from oft_sender.core.utils import address_to_bytes32, hex_to_bytes

TYPE_3 = 3
EXECUTOR_WORKER_ID = 1

OPTION_TYPE_LZRECEIVE = 1
OPTION_TYPE_NATIVE_DROP = 2
OPTION_TYPE_LZCOMPOSE = 3
OPTION_TYPE_ORDERED_EXECUTION = 4


def _uint(value: int, size: int, field_name: str) -> bytes:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{field_name} must be an int")
    if value < 0 or value >= 2 ** (size * 8):
        raise ValueError(f"{field_name} {value} does not fit in uint{size * 8}")
    return value.to_bytes(size, "big")


@dataclass(frozen=True)
class ExecutorOption:
    """A single decoded executor option entry."""

    worker_id: int
    option_type: int
    data: bytes


class Options:
    """Builder for the ``extraOptions`` bytes passed to ``quoteSend`` and ``send``.

    Mirrors the LayerZero options builder: every entry is
    ``workerId (uint8) | size (uint16) | optionType (uint8) | data`` after a
    ``uint16`` type-3 header. Value fields are only encoded when non-zero.
    """

    def __init__(self) -> None:
        self._entries: List[Tuple[int, bytes]] = []

    @classmethod
    def new_options(cls) -> "Options":
        return cls()

    def add_executor_lz_receive_option(self, gas: int, value: int = 0) -> "Options":
        data = _uint(gas, 16, "gas")
        if value:
            data += _uint(value, 16, "value")
        return self._add_executor_option(OPTION_TYPE_LZRECEIVE, data)

    def add_executor_native_drop_option(self, amount: int, receiver: Union[str, bytes]) -> "Options":
        data = _uint(amount, 16, "amount") + address_to_bytes32(receiver)
        return self._add_executor_option(OPTION_TYPE_NATIVE_DROP, data)

    def add_executor_compose_option(self, index: int, gas: int, value: int = 0) -> "Options":
        data = _uint(index, 2, "index") + _uint(gas, 16, "gas")
        if value:
            data += _uint(value, 16, "value")
        return self._add_executor_option(OPTION_TYPE_LZCOMPOSE, data)

    def add_executor_ordered_execution_option(self) -> "Options":
        return self._add_executor_option(OPTION_TYPE_ORDERED_EXECUTION, b"")

    def _add_executor_option(self, option_type: int, data: bytes) -> "Options":
        self._entries.append((option_type, data))
        return self

    def to_bytes(self) -> bytes:
        encoded = bytearray(_uint(TYPE_3, 2, "options type"))
        for option_type, data in self._entries:
            encoded += _uint(EXECUTOR_WORKER_ID, 1, "worker id")
            encoded += _uint(len(data) + 1, 2, "option size")
            encoded += _uint(option_type, 1, "option type")
            encoded += data
        return bytes(encoded)

    def to_hex(self) -> str:
        return "0x" + self.to_bytes().hex()


def decode_options(options: Union[str, bytes]) -> List[ExecutorOption]:
    """Split type-3 option bytes back into their individual entries."""
    raw = hex_to_bytes(options) if isinstance(options, str) else bytes(options)
    if len(raw) < 2:
        raise ValueError("Options payload is too short to contain a type header")
    option_type = int.from_bytes(raw[:2], "big")
    if option_type != TYPE_3:
        raise ValueError(f"Unsupported options type {option_type}")

    entries: List[ExecutorOption] = []
    cursor = 2
    while cursor < len(raw):
        if cursor + 4 > len(raw):
            raise ValueError(f"Truncated option header at offset {cursor}")
        worker_id = raw[cursor]
        size = int.from_bytes(raw[cursor + 1 : cursor + 3], "big")
        if size == 0:
            raise ValueError(f"Option at offset {cursor} has zero size")
        end = cursor + 3 + size
        if end > len(raw):
            raise ValueError(f"Option at offset {cursor} overruns payload")
        entries.append(
            ExecutorOption(worker_id=worker_id, option_type=raw[cursor + 3], data=raw[cursor + 4 : end])
        )
        cursor = end
    return entries


def decode_compose_option(data: bytes) -> Tuple[int, int, int]:
    """Return ``(index, gas, value)`` from the data of a compose option."""
    if len(data) not in (18, 34):
        raise ValueError(f"Invalid compose option length {len(data)}")
    index = int.from_bytes(data[:2], "big")
    gas = int.from_bytes(data[2:18], "big")
    value = int.from_bytes(data[18:34], "big") if len(data) == 34 else 0
    return index, gas, value


def build_options(
    *,
    lz_receive_gas: Optional[int] = None,
    compose_gas: Optional[int] = None,
    compose_index: int = 0,
    compose_value: int = 0,
) -> str:
    """Return the hex options for a send; no arguments yields the bare type-3 header."""
    options = Options.new_options()
    if lz_receive_gas is not None:
        options.add_executor_lz_receive_option(lz_receive_gas)
    if compose_gas is not None:
        options.add_executor_compose_option(compose_index, compose_gas, compose_value)
    return options.to_hex()


__all__ = [
    "EXECUTOR_WORKER_ID",
    "ExecutorOption",
    "OPTION_TYPE_LZCOMPOSE",
    "OPTION_TYPE_LZRECEIVE",
    "OPTION_TYPE_NATIVE_DROP",
    "OPTION_TYPE_ORDERED_EXECUTION",
    "Options",
    "TYPE_3",
    "build_options",
    "decode_compose_option",
    "decode_options",
]
