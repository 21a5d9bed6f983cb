from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Mapping, Optional

from .errors import ConfigurationError

if TYPE_CHECKING:
    from .gateway import LedgerGateway

COMMITMENTS = ("processed", "confirmed", "finalized")

# public clusters addressable by name, as with solana's clusterApiUrl()
PUBLIC_CLUSTERS = ("devnet", "testnet", "mainnet-beta")


@dataclass(frozen=True)
class Config:
    # cluster used both when generating and when verifying proofs
    cluster: str = "mainnet-beta"
    # commitment used by gateway lookups, i.e. how finalised ledger state must be
    commitment: str = "confirmed"
    # cluster name -> RPC url, for clusters that are not public solana clusters
    endpoint_overrides: Mapping[str, str] = field(default_factory=dict, hash=False)
    # disabling this keeps proofs valid for longer and makes replay easier
    recent_block_check: bool = True
    broadcast_check: bool = True
    # when set, used verbatim; cluster, commitment and endpoint_overrides are ignored
    gateway: Optional["LedgerGateway"] = field(default=None, hash=False)

    def __post_init__(self) -> None:
        if self.commitment not in COMMITMENTS:
            raise ConfigurationError(f"commitment must be one of {', '.join(COMMITMENTS)}")
        object.__setattr__(self, "endpoint_overrides", MappingProxyType(dict(self.endpoint_overrides or {})))


DEFAULT_CONFIG = Config()


def cluster_api_url(cluster: str, tls: bool = True) -> str:
    if cluster not in PUBLIC_CLUSTERS:
        raise ConfigurationError(f"Unknown cluster: {cluster}")
    scheme = "https" if tls else "http"
    return f"{scheme}://api.{cluster}.solana.com"


def get_cluster_url(config: Config) -> str:
    override = config.endpoint_overrides.get(config.cluster)
    if override:
        return override
    return cluster_api_url(config.cluster)
