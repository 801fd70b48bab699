"""Contract interface descriptor for Monoracle feeds."""
from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any, Optional

MONORACLE_ABI: list[dict[str, Any]] = [
    {
        "inputs": [],
        "name": "creatorWallet",
        "outputs": [{"internalType": "address", "name": "", "type": "address"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [],
        "name": "getData",
        "outputs": [{"internalType": "string", "name": "", "type": "string"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [],
        "name": "apiUrl",
        "outputs": [{"internalType": "string", "name": "", "type": "string"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [],
        "name": "apiHeaders",
        "outputs": [{"internalType": "string", "name": "", "type": "string"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [],
        "name": "apiParameters",
        "outputs": [{"internalType": "string", "name": "", "type": "string"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [],
        "name": "lastUpdateTime",
        "outputs": [{"internalType": "uint64", "name": "", "type": "uint64"}],
        "stateMutability": "view",
        "type": "function",
    },
]

# (record field, contract accessor)
ACCESSORS: tuple[tuple[str, str], ...] = (
    ("creator_wallet", "creatorWallet"),
    ("data", "getData"),
    ("api_url", "apiUrl"),
    ("api_headers", "apiHeaders"),
    ("api_parameters", "apiParameters"),
    ("last_update_time", "lastUpdateTime"),
)


class AbiError(ValueError):
    """Raised when an ABI override cannot be used to bind a Monoracle contract."""


def _missing_accessors(abi: list[Any]) -> list[str]:
    declared = {
        entry.get("name")
        for entry in abi
        if isinstance(entry, dict) and entry.get("type", "function") == "function"
    }
    return [name for _, name in ACCESSORS if name not in declared]


def load_abi(abi_json: Optional[str] = None, abi_path: Optional[Path] = None) -> list[dict[str, Any]]:
    """Return the ABI to bind, preferring inline JSON over a file path.

    Without an override the built-in ``MONORACLE_ABI`` is returned (as a copy).
    An override must be a JSON list declaring every Monoracle accessor.
    """
    source: Optional[str] = None
    payload: Any = None
    if abi_json:
        source = "inline ABI JSON"
        try:
            payload = json.loads(abi_json)
        except json.JSONDecodeError as exc:
            raise AbiError(f"Failed to parse {source}: {exc}") from exc
    elif abi_path:
        resolved = Path(abi_path).expanduser()
        source = f"ABI file {resolved}"
        try:
            with resolved.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except json.JSONDecodeError as exc:
            raise AbiError(f"Failed to parse {source}: {exc}") from exc
        except OSError as exc:
            raise AbiError(f"Unable to read {source}: {exc}") from exc
    else:
        return copy.deepcopy(MONORACLE_ABI)

    # Hardhat/Foundry artifacts wrap the ABI under an "abi" key
    if isinstance(payload, dict) and isinstance(payload.get("abi"), list):
        payload = payload["abi"]
    if not isinstance(payload, list):
        raise AbiError(f"{source} must be a JSON list of ABI entries")

    missing = _missing_accessors(payload)
    if missing:
        raise AbiError(f"{source} is missing accessors: {', '.join(missing)}")
    return payload


__all__ = ["ACCESSORS", "MONORACLE_ABI", "AbiError", "load_abi"]
