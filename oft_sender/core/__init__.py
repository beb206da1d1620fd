"""Core domain logic for the OFT sender."""

from .compose import decode_compose_message, encode_compose_message
from .errors import ConfigurationError, OftSendError, RemoteCallError, SubmissionError
from .options import Options, build_options, decode_options
from .request import TransferRequest, build_basic_request, build_compose_request, build_transfer_request
from .transfer import MessagingFee, SubmissionResult, quote_fee, run_transfer, submit_transfer

__all__ = [
    "ConfigurationError",
    "MessagingFee",
    "OftSendError",
    "Options",
    "RemoteCallError",
    "SubmissionError",
    "SubmissionResult",
    "TransferRequest",
    "build_basic_request",
    "build_compose_request",
    "build_options",
    "build_transfer_request",
    "decode_compose_message",
    "decode_options",
    "encode_compose_message",
    "quote_fee",
    "run_transfer",
    "submit_transfer",
]
