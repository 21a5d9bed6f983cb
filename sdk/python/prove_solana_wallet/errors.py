from __future__ import annotations

from typing import Any, Optional


class WalletProofError(Exception):
    code = "UNKNOWN_ERROR"


class ConfigurationError(WalletProofError):
    code = "CONFIGURATION_ERROR"


class MalformedEvidenceError(WalletProofError):
    code = "MALFORMED_EVIDENCE"


class SignatureError(WalletProofError):
    code = "INVALID_SIGNATURE"


class InvalidProofStructureError(WalletProofError):
    # reason is one of the REASON_* tags, in the order they are checked
    code = "INVALID_STRUCTURE"

    REASON_INSTRUCTION_COUNT = "instruction count"
    REASON_NOT_A_TRANSFER = "not a transfer"
    REASON_NOT_SELF_TO_SELF = "not self-to-self"
    REASON_NONZERO_AMOUNT = "nonzero amount"

    def __init__(self, reason: str, message: Optional[str] = None):
        super().__init__(message or reason)
        self.reason = reason


class ReplayError(WalletProofError):
    code = "REPLAYED"


class ExpiredProofError(WalletProofError):
    code = "EXPIRED"


class NetworkError(WalletProofError):
    code = "NETWORK_ERROR"

    def __init__(self, message: str, status_code: Optional[int] = None, error_code: Optional[Any] = None, details: Optional[Any] = None):
        super().__init__(message)
        self.status_code = status_code
        self.error_code = error_code
        self.details = details


class SigningError(WalletProofError):
    code = "SIGNING_FAILED"
