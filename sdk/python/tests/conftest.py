import asyncio
from typing import List, Optional, Set, Tuple

import pytest
from solders.hash import Hash

from prove_solana_wallet import Config, LedgerGateway, OwnedKey


class FakeGateway(LedgerGateway):
    def __init__(self, anchor: Optional[str] = None):
        self.anchor = anchor or str(Hash.new_unique())
        self.known_anchors: Set[str] = {self.anchor}
        self.known_transactions: Set[str] = set()
        self.calls: List[Tuple[str, str]] = []

    async def fetch_anchor(self) -> str:
        self.calls.append(("fetch_anchor", ""))
        return self.anchor

    async def lookup_anchor(self, anchor: str) -> bool:
        self.calls.append(("lookup_anchor", anchor))
        await asyncio.sleep(0)
        return anchor in self.known_anchors

    async def lookup_transaction(self, signature: str) -> bool:
        self.calls.append(("lookup_transaction", signature))
        await asyncio.sleep(0)
        return signature in self.known_transactions


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def config(gateway: FakeGateway) -> Config:
    return Config(cluster="devnet", gateway=gateway)


@pytest.fixture
def owned_key() -> OwnedKey:
    return OwnedKey.generate()
