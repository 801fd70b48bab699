"""Result record for Monoracle feeds and best-effort payload decoding."""
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Parsed:
    value: Any


@dataclass(frozen=True)
class Raw:
    value: str


# deeper payloads are left raw; the stdlib decoder recurses per level
MAX_NESTING_DEPTH = 256


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant {name}")


def _too_deep(raw: str, limit: int = MAX_NESTING_DEPTH) -> bool:
    depth = 0
    in_string = False
    escaped = False
    for char in raw:
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
        elif char == '"':
            in_string = True
        elif char in "[{":
            depth += 1
            if depth > limit:
                return True
        elif char in "]}":
            depth -= 1
    return False


def decode_payload(raw: str) -> Union[Parsed, Raw]:
    """Parse an on-chain payload as JSON, falling back to the untouched string.

    ``NaN`` and ``Infinity`` are not JSON and leave the payload raw, as does
    anything nested deeper than ``MAX_NESTING_DEPTH``.
    """
    if not isinstance(raw, str) or _too_deep(raw):
        return Raw(raw)
    try:
        return Parsed(json.loads(raw, parse_constant=_reject_constant))
    except (TypeError, ValueError, RecursionError):
        return Raw(raw)


@dataclass(frozen=True)
class MonoracleRecord(Generic[T]):
    creator_wallet: str
    data: Union[T, str]
    api_url: str
    api_headers: str
    api_parameters: str
    last_update_time: int

    def as_dict(self) -> dict[str, Any]:
        return {
            "creatorWallet": self.creator_wallet,
            "data": self.data,
            "apiUrl": self.api_url,
            "apiHeaders": self.api_headers,
            "apiParameters": self.api_parameters,
            "lastUpdateTime": self.last_update_time,
        }


__all__ = ["MonoracleRecord", "Parsed", "Raw", "decode_payload"]
