import asyncio
import os
import time

from nacl.signing import SigningKey

from prove_solana_wallet import OwnedKey, create, verify_message_report

key = OwnedKey.generate()
message = os.getenv("PROOF_MESSAGE") or str(int(time.time() * 1000))


async def sign_message(text: str) -> bytes:
    return SigningKey(key.secret_key[:32]).sign(text.encode("utf-8")).signature


proof = asyncio.run(create(sign_message, message))
print("wallet:", key.public_key)
print("proof:", proof)

report = verify_message_report(key.public_key, proof, message)
print("verified:", report.ok, report.code)
