"""Read-only access to Monoracle feed contracts over JSON-RPC.

Every fetch opens its own provider, binds the Monoracle ABI to the requested
address and issues the six accessor calls concurrently. A single failed call
fails the whole fetch; no partial record is ever returned.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional, Sequence

import aiohttp
from web3 import AsyncHTTPProvider, AsyncWeb3
from web3.contract import AsyncContract
from web3.exceptions import ProviderConnectionError, Web3Exception

from .abi import ACCESSORS, MONORACLE_ABI
from .config import DEFAULT_RPC_URL
from .records import MonoracleRecord, decode_payload

logger = logging.getLogger(__name__)

_CONNECTION_ERRORS = (
    ProviderConnectionError,
    aiohttp.ClientError,
    asyncio.TimeoutError,
    OSError,
)


class RpcCallError(Exception):
    """Raised when a Monoracle fetch cannot be completed."""

    def __init__(
        self,
        message: str,
        *,
        contract_address: Optional[str] = None,
        rpc_url: Optional[str] = None,
        accessor: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.contract_address = contract_address
        self.rpc_url = rpc_url
        self.accessor = accessor
        self.cause = cause


class RpcConnectionError(RpcCallError):
    """Raised when the RPC endpoint is unreachable or answers outside JSON-RPC."""


class ContractCallError(RpcCallError):
    """Raised when the address cannot be bound or an accessor call fails on the node."""


def _connect(rpc_url: str) -> AsyncWeb3:
    # web3's built-in retry on transport errors is disabled: failures surface once
    provider = AsyncHTTPProvider(rpc_url, exception_retry_configuration=None)
    return AsyncWeb3(provider)


async def _disconnect(web3: AsyncWeb3) -> None:
    disconnect = getattr(web3.provider, "disconnect", None)
    if not callable(disconnect):
        return
    try:
        await disconnect()
    except Exception as exc:  # pragma: no cover - session teardown is best effort
        logger.debug("Failed to close provider session: %s", exc)


def _map_error(
    exc: BaseException,
    *,
    contract_address: str,
    rpc_url: str,
    accessor: Optional[str],
) -> RpcCallError:
    target = f"{accessor}()" if accessor else "contract binding"
    if isinstance(exc, _CONNECTION_ERRORS):
        return RpcConnectionError(
            f"RPC endpoint {rpc_url} unreachable during {target}: {exc}",
            contract_address=contract_address,
            rpc_url=rpc_url,
            accessor=accessor,
            cause=exc,
        )
    return ContractCallError(
        f"Monoracle {target} failed for {contract_address}: {exc}",
        contract_address=contract_address,
        rpc_url=rpc_url,
        accessor=accessor,
        cause=exc,
    )


def _bind(web3: AsyncWeb3, contract_address: str, abi: Sequence[dict[str, Any]], rpc_url: str) -> AsyncContract:
    try:
        checksum_address = AsyncWeb3.to_checksum_address(contract_address)
        return web3.eth.contract(address=checksum_address, abi=list(abi))
    except (TypeError, ValueError, Web3Exception) as exc:
        raise _map_error(exc, contract_address=contract_address, rpc_url=rpc_url, accessor=None) from exc


async def _call_accessor(contract: AsyncContract, accessor: str, contract_address: str, rpc_url: str) -> Any:
    try:
        return await contract.get_function_by_name(accessor)().call()
    except Exception as exc:
        raise _map_error(exc, contract_address=contract_address, rpc_url=rpc_url, accessor=accessor) from exc


async def _gather_accessors(contract: AsyncContract, contract_address: str, rpc_url: str) -> list[Any]:
    # every call settles before the first failure is raised; web3 holds a
    # process-wide session lock from an executor thread that a cancel would leak
    results = await asyncio.gather(
        *(_call_accessor(contract, accessor, contract_address, rpc_url) for _, accessor in ACCESSORS),
        return_exceptions=True,
    )
    for result in results:
        if isinstance(result, BaseException):
            raise result
    return list(results)


async def fetch_monoracle_data(
    contract_address: str,
    rpc_url: str = DEFAULT_RPC_URL,
    *,
    abi: Optional[Sequence[dict[str, Any]]] = None,
) -> MonoracleRecord[Any]:
    """Read a Monoracle feed and return it as an immutable record.

    The ``data`` field holds the decoded JSON value when the on-chain string
    parses, otherwise the string exactly as stored. Raises ``RpcConnectionError``
    when the endpoint cannot be reached and ``ContractCallError`` when the
    address or any accessor call is rejected.
    """
    logger.debug("Fetching Monoracle feed %s via %s", contract_address, rpc_url)
    web3 = _connect(rpc_url)
    try:
        try:
            contract = _bind(web3, contract_address, MONORACLE_ABI if abi is None else abi, rpc_url)
            results = await _gather_accessors(contract, contract_address, rpc_url)
        except RpcCallError as exc:
            logger.warning(
                "Monoracle fetch for %s failed at %s: %s",
                contract_address,
                exc.accessor or "binding",
                type(exc.cause).__name__,
            )
            raise
    finally:
        await _disconnect(web3)

    values = {field: value for (field, _), value in zip(ACCESSORS, results)}
    values["data"] = decode_payload(values["data"]).value
    values["last_update_time"] = int(values["last_update_time"])
    record: MonoracleRecord[Any] = MonoracleRecord(**values)
    logger.debug(
        "Fetched Monoracle feed %s (lastUpdateTime=%s)",
        contract_address,
        record.last_update_time,
    )
    return record


def fetch_monoracle_data_sync(
    contract_address: str,
    rpc_url: str = DEFAULT_RPC_URL,
    *,
    abi: Optional[Sequence[dict[str, Any]]] = None,
) -> MonoracleRecord[Any]:
    """Blocking wrapper around ``fetch_monoracle_data`` for scripts."""
    return asyncio.run(fetch_monoracle_data(contract_address, rpc_url, abi=abi))


__all__ = [
    "DEFAULT_RPC_URL",
    "ContractCallError",
    "RpcCallError",
    "RpcConnectionError",
    "fetch_monoracle_data",
    "fetch_monoracle_data_sync",
]
