import asyncio
import base64
import time

import pytest
from nacl.signing import SigningKey

from prove_solana_wallet import (
    MalformedEvidenceError,
    MessageProof,
    OwnedKey,
    SignatureError,
    SigningError,
    VerifyFailureCode,
    create,
    sign_detached,
    verify,
    verify_detached,
    verify_message_report,
)


def _signer_for(key: OwnedKey):
    seed = key.secret_key[:32]

    async def sign_message(message: str) -> bytes:
        return SigningKey(seed).sign(message.encode("utf-8")).signature

    return sign_message


@pytest.fixture
def message() -> str:
    return str(int(time.time() * 1000))


def test_create_encodes_signature_in_base64(owned_key, message):
    proof = asyncio.run(create(_signer_for(owned_key), message))
    assert isinstance(proof, str)
    assert len(base64.b64decode(proof)) == 64


def test_verifies_wallet_ownership_with_signer_function(owned_key, message):
    proof = asyncio.run(create(_signer_for(owned_key), message))
    verify(owned_key.public_key, proof, message)
    verify(str(owned_key.public_key), proof, message)


def test_rejects_signature_from_a_different_key(owned_key, message):
    someone_else = OwnedKey.generate()
    proof = asyncio.run(create(_signer_for(someone_else), message))
    with pytest.raises(SignatureError):
        verify(owned_key.public_key, proof, message)


def test_rejects_a_different_message(owned_key, message):
    proof = asyncio.run(create(_signer_for(owned_key), message))
    with pytest.raises(SignatureError):
        verify(owned_key.public_key, proof, message + "0")


def test_signer_without_output_is_a_signing_error(message):
    async def broken(message: str):
        return None

    with pytest.raises(SigningError):
        asyncio.run(create(broken, message))


def test_rejects_proof_that_is_not_base64(owned_key, message):
    with pytest.raises(MalformedEvidenceError):
        verify(owned_key.public_key, "not base64!", message)


def test_rejects_truncated_signature(owned_key, message):
    proof = asyncio.run(create(_signer_for(owned_key), message))
    short = base64.b64encode(base64.b64decode(proof)[:32]).decode("ascii")
    with pytest.raises(SignatureError):
        verify(owned_key.public_key, short, message)


def test_detached_primitives_accept_seed_or_secret_key(owned_key):
    pub = bytes(owned_key.public_key)
    from_secret = sign_detached(b"hello", owned_key.secret_key)
    from_seed = sign_detached(b"hello", owned_key.secret_key[:32])
    assert from_secret == from_seed
    assert verify_detached(b"hello", from_secret, pub) is True
    assert verify_detached(b"hullo", from_secret, pub) is False
    assert verify_detached(b"hello", from_secret[:63], pub) is False
    with pytest.raises(ValueError):
        sign_detached(b"hello", bytes(31))


def test_message_proof_scheme(owned_key, message):
    scheme = MessageProof(message)
    proof = asyncio.run(scheme.prove(_signer_for(owned_key)))
    asyncio.run(scheme.verify(proof, owned_key.public_key))
    with pytest.raises(SignatureError):
        asyncio.run(MessageProof("something else").verify(proof, owned_key.public_key))


def test_message_report(owned_key, message):
    proof = asyncio.run(create(_signer_for(owned_key), message))
    assert verify_message_report(owned_key.public_key, proof, message).code == VerifyFailureCode.VERIFIED
    bad = verify_message_report(OwnedKey.generate().public_key, proof, message)
    assert bad.ok is False
    assert bad.code == VerifyFailureCode.INVALID_SIGNATURE


def test_malformed_public_key_is_reported_not_raised(owned_key, message):
    proof = asyncio.run(create(_signer_for(owned_key), message))
    with pytest.raises(SignatureError):
        verify("not-a-pubkey", proof, message)
    report = verify_message_report("not-a-pubkey", proof, message)
    assert report.ok is False
    assert report.code == VerifyFailureCode.INVALID_SIGNATURE
