"""Monoracle: read your own data feed back from chain."""

from .abi import MONORACLE_ABI, AbiError, load_abi
from .client import (
    DEFAULT_RPC_URL,
    ContractCallError,
    RpcCallError,
    RpcConnectionError,
    fetch_monoracle_data,
    fetch_monoracle_data_sync,
)
from .records import MonoracleRecord

__version__ = "1.0.0"

__all__ = [
    "DEFAULT_RPC_URL",
    "MONORACLE_ABI",
    "AbiError",
    "ContractCallError",
    "MonoracleRecord",
    "RpcCallError",
    "RpcConnectionError",
    "fetch_monoracle_data",
    "fetch_monoracle_data_sync",
    "load_abi",
]
