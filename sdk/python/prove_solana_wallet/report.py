from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from solders.pubkey import Pubkey

from . import message as message_proof
from . import transaction as transaction_proof
from .config import DEFAULT_CONFIG, Config
from .errors import InvalidProofStructureError, WalletProofError


class VerifyFailureCode:
    VERIFIED = "VERIFIED"
    MALFORMED_EVIDENCE = "MALFORMED_EVIDENCE"
    INVALID_SIGNATURE = "INVALID_SIGNATURE"
    INVALID_STRUCTURE = "INVALID_STRUCTURE"
    REPLAYED = "REPLAYED"
    EXPIRED = "EXPIRED"
    NETWORK_ERROR = "NETWORK_ERROR"
    SIGNING_FAILED = "SIGNING_FAILED"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"


@dataclass
class VerifyReport:
    ok: bool
    code: str
    reason: str = ""
    message: str = ""


def _failure(exc: WalletProofError) -> VerifyReport:
    reason = exc.reason if isinstance(exc, InvalidProofStructureError) else ""
    return VerifyReport(ok=False, code=exc.code, reason=reason, message=str(exc))


async def verify_transaction_report(evidence: bytes, public_key: Union[Pubkey, str], config: Config = DEFAULT_CONFIG) -> VerifyReport:
    try:
        await transaction_proof.verify_transaction(evidence, public_key, config)
    except WalletProofError as exc:
        return _failure(exc)
    return VerifyReport(ok=True, code=VerifyFailureCode.VERIFIED)


def verify_message_report(public_key: Union[Pubkey, str], proof: str, message: str) -> VerifyReport:
    try:
        message_proof.verify(public_key, proof, message)
    except WalletProofError as exc:
        return _failure(exc)
    return VerifyReport(ok=True, code=VerifyFailureCode.VERIFIED)
