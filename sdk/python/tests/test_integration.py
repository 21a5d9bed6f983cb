import asyncio
import os

import pytest
from solders.transaction import Transaction

from prove_solana_wallet import Config, ExternalKey, OwnedKey, prove_transaction, verify_transaction


PROVE_WALLET_INTEGRATION = os.getenv("PROVE_WALLET_INTEGRATION") == "1"
PROVE_WALLET_CLUSTER = os.getenv("PROVE_WALLET_CLUSTER", "devnet")
PROVE_WALLET_RPC_URL = os.getenv("PROVE_WALLET_RPC_URL", "")


def _config() -> Config:
    overrides = {PROVE_WALLET_CLUSTER: PROVE_WALLET_RPC_URL} if PROVE_WALLET_RPC_URL else {}
    return Config(cluster=PROVE_WALLET_CLUSTER, endpoint_overrides=overrides)


@pytest.mark.skipif(not PROVE_WALLET_INTEGRATION, reason="set PROVE_WALLET_INTEGRATION=1")
def test_integration_prove_then_verify_against_live_cluster():
    key = OwnedKey.generate()
    proof = asyncio.run(prove_transaction(key, config=_config()))
    asyncio.run(verify_transaction(proof, key.public_key, _config()))


@pytest.mark.skipif(not PROVE_WALLET_INTEGRATION, reason="set PROVE_WALLET_INTEGRATION=1")
def test_integration_external_wallet_against_live_cluster():
    key = OwnedKey.generate()

    async def external_wallet(transaction: Transaction) -> Transaction:
        transaction.sign([key.keypair], transaction.message.recent_blockhash)
        return transaction

    proof = asyncio.run(prove_transaction(ExternalKey(key.public_key), external_wallet, _config()))
    asyncio.run(verify_transaction(proof, key.public_key, _config()))
