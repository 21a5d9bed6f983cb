from __future__ import annotations

from typing import Any, Optional, Union

from solders.pubkey import Pubkey

from . import message as message_proof
from . import transaction as transaction_proof
from .config import DEFAULT_CONFIG, Config
from .keys import KeyMaterial, SignCallback, SignMessageFn


class ProofScheme:
    # implementations share only keys.verify_detached
    async def prove(self, *args: Any, **kwargs: Any) -> Union[bytes, str]:
        raise NotImplementedError

    async def verify(self, evidence: Union[bytes, str], public_key: Union[Pubkey, str]) -> None:
        raise NotImplementedError


class TransactionProof(ProofScheme):
    def __init__(self, config: Config = DEFAULT_CONFIG):
        self.config = config

    async def prove(self, key: KeyMaterial, signer: Optional[SignCallback] = None) -> bytes:
        return await transaction_proof.prove_transaction(key, signer, self.config)

    async def verify(self, evidence: Union[bytes, str], public_key: Union[Pubkey, str]) -> None:
        await transaction_proof.verify_transaction(evidence, public_key, self.config)


class MessageProof(ProofScheme):
    def __init__(self, message: str):
        self.message = message

    async def prove(self, sign_message: SignMessageFn) -> str:
        return await message_proof.create(sign_message, self.message)

    async def verify(self, evidence: Union[bytes, str], public_key: Union[Pubkey, str]) -> None:
        message_proof.verify(public_key, evidence, self.message)
