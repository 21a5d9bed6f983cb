from __future__ import annotations

import base64
import binascii
import logging
from typing import Union

from solders.pubkey import Pubkey

from .errors import MalformedEvidenceError, SignatureError, SigningError
from .keys import SignMessageFn, as_pubkey, verify_detached

logger = logging.getLogger(__name__)


async def create(sign_message: SignMessageFn, message: str) -> str:
    signature = await sign_message(message)
    if not signature:
        raise SigningError("signer returned no signature")
    return base64.b64encode(bytes(signature)).decode("ascii")


def verify(public_key: Union[Pubkey, str], proof: str, message: str) -> None:
    # NOTE: message proofs carry no recent blockhash and are never checked
    # against the ledger, so they can be replayed for as long as the message is accepted.
    try:
        signature = base64.b64decode(proof, validate=True)
    except (binascii.Error, ValueError, TypeError) as exc:
        raise MalformedEvidenceError("proof must be base64") from exc
    pub = as_pubkey(public_key)
    if not verify_detached(message.encode("utf-8"), signature, bytes(pub)):
        raise SignatureError(f"Message signature not verified for {pub}")
    logger.debug("verified message proof for %s", pub)
