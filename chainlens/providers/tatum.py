import logging
from typing import Any, Dict, List, Optional

import httpx

from ..config import Settings, settings as default_settings
from ..services.chains import ChainDescriptor, get_chain
from ..services.units import format_native_balance, gas_tiers, parse_hex_quantity, wei_to_gwei
from .base import IndexerProvider, UpstreamDataError

logger = logging.getLogger(__name__)

# Well-known funded address used to validate API keys.
KEY_PROBE_ADDRESS = "0xd8dA6BF26964aF9D7eEd9e03E53415D37aA96045"


class TatumProvider(IndexerProvider):
    """Tatum RPC gateway (v3) and data API (v4) provider"""

    name = "tatum"

    def __init__(self, api_key: Optional[str] = None, config: Optional[Settings] = None):
        self.config = config or default_settings
        self.api_key = api_key if api_key is not None else self.config.tatum_api_key
        self.base_url = self.config.tatum_api_url.rstrip("/")
        self.data_url = self.config.tatum_data_url.rstrip("/")
        self.timeout_s = self.config.request_timeout_seconds

    def _headers(self, api_key: Optional[str] = None) -> Dict[str, str]:
        return {
            "x-api-key": api_key if api_key is not None else self.api_key,
            "Content-Type": "application/json",
        }

    def _chain(self, chain: str) -> ChainDescriptor:
        descriptor = get_chain(chain)
        if descriptor is None:
            raise UpstreamDataError(f"Unsupported chain: {chain}", chain=chain)
        return descriptor

    async def ready(self) -> bool:
        return bool(self.api_key)

    async def health_check(self) -> Dict[str, Any]:
        if not await self.ready():
            return {
                "status": "unavailable",
                "reason": "API key not configured"
            }

        try:
            block = await self.get_block_number("ethereum")
            return {"status": "healthy", "block_number": block}
        except UpstreamDataError as e:
            return {"status": "error", "reason": str(e)}

    async def _rpc(self, chain: str, method: str, params: Optional[List[Any]] = None) -> Any:
        """Send a JSON-RPC call through the gateway node for ``chain``."""
        descriptor = self._chain(chain)
        payload = {
            "jsonrpc": "2.0",
            "method": method,
            "params": params or [],
            "id": 1
        }

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    f"{self.base_url}/blockchain/node/{descriptor.rpc_name}",
                    json=payload,
                    headers=self._headers(),
                    timeout=self.timeout_s
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as exc:
            raise UpstreamDataError(
                f"Tatum {method} failed ({exc.response.status_code}): {exc.response.text}",
                chain=chain,
                status_code=exc.response.status_code,
            ) from exc
        except httpx.RequestError as exc:
            raise UpstreamDataError(f"Tatum {method} request error: {exc}", chain=chain) from exc
        except ValueError as exc:
            raise UpstreamDataError(f"Tatum {method} returned invalid JSON", chain=chain) from exc

        if not isinstance(data, dict):
            raise UpstreamDataError(f"Tatum {method} returned unexpected body", chain=chain)
        if "error" in data:
            raise UpstreamDataError(f"Tatum {method} error: {data['error']}", chain=chain)
        return data.get("result")

    async def get_native_balance(self, address: str, chain: str = "ethereum") -> Dict[str, Any]:
        """Native balance in wei plus a 6-decimal display string"""
        descriptor = self._chain(chain)
        result = await self._rpc(chain, "eth_getBalance", [address, "latest"])
        try:
            balance_wei = parse_hex_quantity(result)
        except ValueError as exc:
            raise UpstreamDataError(f"Malformed balance {result!r}", chain=chain) from exc

        return {
            "chain": chain,
            "address": address,
            "symbol": descriptor.symbol,
            "decimals": descriptor.decimals,
            "balance_wei": balance_wei,
            "balance_formatted": format_native_balance(balance_wei, descriptor.decimals),
        }

    async def get_token_balances(self, address: str, chain: str = "ethereum") -> List[Dict[str, Any]]:
        """Token balances from the v4 data API.

        A failed lookup yields an empty list; the native balance is still useful.
        """
        descriptor = self._chain(chain)
        try:
            async with httpx.AsyncClient() as client:
                response = await client.get(
                    f"{self.data_url}/data/wallet/balances",
                    params={"chain": descriptor.data_slug, "addresses": address},
                    headers={"x-api-key": self.api_key},
                    timeout=self.timeout_s
                )
                response.raise_for_status()
                data = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Token balance lookup failed for %s on %s: %s", address, chain, exc)
            return []

        tokens = data.get("result") if isinstance(data, dict) else None
        return tokens if isinstance(tokens, list) else []

    async def get_gas_price(self, chain: str = "ethereum") -> float:
        """Gas price in Gwei, two decimal places"""
        result = await self._rpc(chain, "eth_gasPrice")
        try:
            return wei_to_gwei(parse_hex_quantity(result))
        except ValueError as exc:
            raise UpstreamDataError(f"Malformed gas price {result!r}", chain=chain) from exc

    async def get_gas_tiers(self, chain: str = "ethereum") -> Dict[str, int]:
        return gas_tiers(await self.get_gas_price(chain))

    async def get_block_number(self, chain: str = "ethereum") -> int:
        result = await self._rpc(chain, "eth_blockNumber")
        try:
            return parse_hex_quantity(result)
        except ValueError as exc:
            raise UpstreamDataError(f"Malformed block number {result!r}", chain=chain) from exc

    async def test_api_key(self, api_key: Optional[str] = None) -> Dict[str, Any]:
        """Validate a key by reading the balance of a known address."""
        key = api_key if api_key is not None else self.api_key
        try:
            async with httpx.AsyncClient() as client:
                response = await client.get(
                    f"{self.base_url}/ethereum/account/balance/{KEY_PROBE_ADDRESS}",
                    headers={"x-api-key": key},
                    timeout=10
                )
                response.raise_for_status()
                return {"success": True, "message": "API key is valid", "data": response.json()}
        except httpx.HTTPStatusError as exc:
            detail = exc.response.text
            try:
                body = exc.response.json()
            except ValueError:
                body = None
            if isinstance(body, dict):
                detail = body.get("message", detail)
            return {"success": False, "message": "API key is invalid or expired", "error": detail}
        except httpx.RequestError as exc:
            return {"success": False, "message": "API key could not be verified", "error": str(exc)}
