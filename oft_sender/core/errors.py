"""Exception types raised by the OFT sender."""

from __future__ import annotations


class OftSendError(Exception):
    """Base class for every failure surfaced by the sender."""


class ConfigurationError(OftSendError, ValueError):
    """Raised when configuration data or the signing key is invalid or missing."""


class RemoteCallError(OftSendError):
    """Raised when a read-only contract call (the fee quote) fails."""


class SubmissionError(OftSendError):
    """Raised when signing or broadcasting the send transaction fails."""


__all__ = ["ConfigurationError", "OftSendError", "RemoteCallError", "SubmissionError"]
