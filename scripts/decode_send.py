#!/usr/bin/env python3
"""Decode OFT send/quoteSend calldata using the shipped ABI."""

from pathlib import Path
import sys

from web3 import Web3

SCRIPT_DIR = Path(__file__).resolve().parent
PROJECT_ROOT = SCRIPT_DIR.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from oft_sender.contracts import load_contract_abi
from oft_sender.core.compose import decode_compose_message
from oft_sender.core.options import decode_options
from oft_sender.core.utils import bytes32_to_address


def decode_call(calldata: str, abi: list) -> None:
    """Decode the call data using the provided ABI and print the details."""
    data = calldata if calldata.startswith("0x") else f"0x{calldata}"
    contract = Web3().eth.contract(abi=abi)
    function, params = contract.decode_function_input(data)

    print(f"Function: {function.fn_name}")
    for name, value in params.items():
        print(f"{name}: {value}")

    send_param = params.get("_sendParam")
    if not send_param:
        return
    dst_eid, to, amount_ld, min_amount_ld, extra_options, compose_msg, _oft_cmd = (
        send_param.values() if isinstance(send_param, dict) else send_param
    )
    print(f"\ndstEid={dst_eid} to=0x{to.hex()} amountLD={amount_ld} minAmountLD={min_amount_ld}")
    for option in decode_options(extra_options):
        print(f"option worker={option.worker_id} type={option.option_type} data=0x{option.data.hex()}")
    if compose_msg:
        recipient, final_eid = decode_compose_message(compose_msg)
        print(f"composeMsg recipient={bytes32_to_address(recipient)} dstEid={final_eid}")


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print("usage: decode_send.py <calldata>")
        sys.exit(1)
    decode_call(sys.argv[1], load_contract_abi())
