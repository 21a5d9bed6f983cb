from __future__ import annotations

import itertools
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, List, Optional

import httpx

from .config import Config, get_cluster_url
from .errors import NetworkError

logger = logging.getLogger(__name__)

USER_AGENT = "prove-solana-wallet-python/0.1.0"


class LedgerGateway:
    async def fetch_anchor(self) -> str:
        raise NotImplementedError

    async def lookup_anchor(self, anchor: str) -> bool:
        raise NotImplementedError

    async def lookup_transaction(self, signature: str) -> bool:
        raise NotImplementedError


class RpcGateway(LedgerGateway):
    def __init__(
        self,
        url: str,
        commitment: str = "confirmed",
        timeout_seconds: Optional[float] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.url = url
        self.commitment = commitment
        self.timeout_seconds = timeout_seconds
        self.headers = headers or {}
        self.http = httpx.AsyncClient(timeout=self.timeout_seconds)
        self._ids = itertools.count(1)

    async def __aenter__(self) -> "RpcGateway":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.http.aclose()

    async def fetch_anchor(self) -> str:
        result = await self._request("getLatestBlockhash", [{"commitment": self.commitment}])
        try:
            return str(result["value"]["blockhash"])
        except (KeyError, TypeError) as exc:
            raise NetworkError("malformed getLatestBlockhash response", details=result) from exc

    async def lookup_anchor(self, anchor: str) -> bool:
        result = await self._request("isBlockhashValid", [anchor, {"commitment": self.commitment}])
        try:
            return bool(result["value"])
        except (KeyError, TypeError) as exc:
            raise NetworkError("malformed isBlockhashValid response", details=result) from exc

    async def lookup_transaction(self, signature: str) -> bool:
        # getTransaction does not accept "processed"
        commitment = "confirmed" if self.commitment == "processed" else self.commitment
        opts = {"commitment": commitment, "encoding": "json", "maxSupportedTransactionVersion": 0}
        result = await self._request("getTransaction", [signature, opts])
        return result is not None

    async def _request(self, method: str, params: List[Any]) -> Any:
        body = {"jsonrpc": "2.0", "id": next(self._ids), "method": method, "params": params}
        headers: Dict[str, str] = {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "User-Agent": USER_AGENT,
            **self.headers,
        }
        logger.debug("rpc %s -> %s", method, self.url)
        try:
            resp = await self.http.post(self.url, json=body, headers=headers)
        except httpx.HTTPError as exc:
            raise NetworkError(f"{method}: {exc}") from exc
        if not 200 <= resp.status_code < 300:
            raise self._to_error(method, resp)
        try:
            parsed = resp.json()
        except ValueError as exc:
            raise NetworkError(f"{method}: response is not JSON", status_code=resp.status_code) from exc
        if not isinstance(parsed, dict):
            raise NetworkError(f"{method}: unexpected response", status_code=resp.status_code, details=parsed)
        error = parsed.get("error")
        if error is not None:
            inner = error if isinstance(error, dict) else {"message": str(error)}
            raise NetworkError(
                f"{method}: {inner.get('message') or 'rpc error'}",
                status_code=resp.status_code,
                error_code=inner.get("code"),
                details=inner.get("data"),
            )
        return parsed.get("result")

    def _to_error(self, method: str, resp: httpx.Response) -> NetworkError:
        try:
            parsed = resp.json()
        except ValueError:
            return NetworkError(f"{method}: {resp.text or f'HTTP {resp.status_code}'}", status_code=resp.status_code)
        inner = parsed.get("error") if isinstance(parsed, dict) and isinstance(parsed.get("error"), dict) else parsed
        if not isinstance(inner, dict):
            inner = {}
        return NetworkError(
            f"{method}: {inner.get('message') or f'HTTP {resp.status_code}'}",
            status_code=resp.status_code,
            error_code=inner.get("code"),
            details=inner.get("data"),
        )


def resolve_gateway(config: Config) -> LedgerGateway:
    if config.gateway is not None:
        return config.gateway
    return RpcGateway(get_cluster_url(config), commitment=config.commitment)


@asynccontextmanager
async def open_gateway(config: Config) -> AsyncIterator[LedgerGateway]:
    gateway = resolve_gateway(config)
    if gateway is config.gateway:
        yield gateway
        return
    try:
        yield gateway
    finally:
        if isinstance(gateway, RpcGateway):
            await gateway.aclose()
