from __future__ import annotations

from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, Union

from nacl.exceptions import BadSignatureError
from nacl.signing import SigningKey
from nacl.signing import VerifyKey
from solders.keypair import Keypair
from solders.pubkey import Pubkey
from solders.transaction import Transaction

from .errors import SignatureError

PUBLIC_KEY_LENGTH = 32
SIGNATURE_LENGTH = 64

SignCallback = Callable[[Transaction], Awaitable[Transaction]]
SignMessageFn = Callable[[str], Awaitable[Optional[bytes]]]


@dataclass(frozen=True)
class OwnedKey:
    keypair: Keypair

    @classmethod
    def generate(cls) -> "OwnedKey":
        return cls(Keypair())

    @classmethod
    def from_secret_key(cls, secret_key: bytes) -> "OwnedKey":
        if not isinstance(secret_key, (bytes, bytearray)) or len(secret_key) != 64:
            raise ValueError("solana secret key must be 64 bytes")
        return cls(Keypair.from_bytes(bytes(secret_key)))

    @property
    def public_key(self) -> Pubkey:
        return self.keypair.pubkey()

    @property
    def secret_key(self) -> bytes:
        return bytes(self.keypair)


@dataclass(frozen=True)
class ExternalKey:
    public_key: Pubkey


KeyMaterial = Union[OwnedKey, ExternalKey]


def as_pubkey(value: Union[Pubkey, str, bytes]) -> Pubkey:
    if isinstance(value, Pubkey):
        return value
    if isinstance(value, str):
        try:
            return Pubkey.from_string(value)
        except ValueError as exc:
            raise SignatureError(f"invalid public key: {value!r}") from exc
    if isinstance(value, (bytes, bytearray)) and len(value) == PUBLIC_KEY_LENGTH:
        return Pubkey.from_bytes(bytes(value))
    raise SignatureError("public key must be a Pubkey, a base58 string or 32 raw bytes")


def default_signer(key: OwnedKey) -> SignCallback:
    async def sign(transaction: Transaction) -> Transaction:
        transaction.sign([key.keypair], transaction.message.recent_blockhash)
        return transaction

    return sign


def sign_detached(message: bytes, secret: bytes) -> bytes:
    # accepts a 32 byte ed25519 seed or a 64 byte solana secret key (seed || public)
    if not isinstance(secret, (bytes, bytearray)) or len(secret) not in (32, 64):
        raise ValueError("secret must be a 32 byte seed or a 64 byte secret key")
    return SigningKey(bytes(secret[:32])).sign(bytes(message)).signature


def verify_detached(message: bytes, signature: bytes, public_key: bytes) -> bool:
    if len(public_key) != PUBLIC_KEY_LENGTH or len(signature) != SIGNATURE_LENGTH:
        return False
    try:
        VerifyKey(bytes(public_key)).verify(bytes(message), bytes(signature))
    except BadSignatureError:
        return False
    return True
