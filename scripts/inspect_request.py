#!/usr/bin/env python3
"""Print the SendParam the sender would submit, without touching the network."""

import os
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from oft_sender.cli.main import build_request
from oft_sender.config import load_account, load_config
from oft_sender.core.compose import decode_compose_message
from oft_sender.core.errors import OftSendError
from oft_sender.core.options import decode_options
from oft_sender.core.utils import bytes32_to_address

FALLBACK_SIGNER = "0x0000000000000000000000000000000000000000"


def main() -> None:
    """Build and print the configured transfer request."""
    private_key = os.getenv("PK") or os.getenv("PRIVATE_KEY")
    try:
        config = load_config()
        if private_key:
            signer_address = load_account(private_key).address
        else:
            signer_address = FALLBACK_SIGNER
            print("⚠️  PK not set, using fallback signer address as recipient")
        request = build_request(config, signer_address)
    except OftSendError as exc:
        print(f"❌ Error: {exc}")
        sys.exit(1)

    transfer = config.transfer

    print("=" * 60)
    print(f"SENDPARAM ({transfer.mode})")
    print("=" * 60)
    print(f"🎯 dstEid: {request.dst_eid}")
    print(f"📥 to: 0x{request.to.hex()}")
    print(f"💰 amountLD: {request.amount_ld} ({transfer.amount_ld / 10**transfer.decimals:.6f} tokens)")
    print(f"🛡️  minAmountLD: {request.min_amount_ld}")
    print(f"⚙️  extraOptions: 0x{request.extra_options.hex()}")
    for option in decode_options(request.extra_options):
        print(f"   worker={option.worker_id} type={option.option_type} data=0x{option.data.hex()}")
    print(f"📦 composeMsg: 0x{request.compose_msg.hex()}")
    if request.compose_msg:
        final_recipient, final_eid = decode_compose_message(request.compose_msg)
        print(f"   recipient={bytes32_to_address(final_recipient)} dstEid={final_eid}")


if __name__ == "__main__":
    main()
