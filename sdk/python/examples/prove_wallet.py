from __future__ import annotations

import asyncio
import base64
import json
import os
from pathlib import Path

from prove_solana_wallet import Config, OwnedKey, prove_transaction, verify_transaction


def load_key() -> OwnedKey:
    path = Path(os.getenv("SOLANA_KEYPAIR", str(Path.home() / ".config" / "solana" / "id.json")))
    if not path.exists():
        return OwnedKey.generate()
    return OwnedKey.from_secret_key(bytes(json.loads(path.read_text(encoding="utf-8"))))


async def main() -> None:
    cluster = os.getenv("PROVE_WALLET_CLUSTER", "devnet")
    rpc_url = os.getenv("PROVE_WALLET_RPC_URL", "")
    config = Config(cluster=cluster, endpoint_overrides={cluster: rpc_url} if rpc_url else {})
    key = load_key()

    proof = await prove_transaction(key, config=config)
    print("Wallet:", key.public_key)
    print("Proof:", base64.b64encode(proof).decode("ascii"))

    await verify_transaction(proof, key.public_key, config)
    print("Verified: True")


if __name__ == "__main__":
    asyncio.run(main())
