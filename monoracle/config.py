"""Settings loader for the Monoracle client."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_RPC_URL = "https://testnet-rpc.monad.xyz/"


class MonoracleSettings(BaseSettings):
    rpc_url: str = Field(default=DEFAULT_RPC_URL)
    contract_address: Optional[str] = Field(default=None)

    abi_path: Optional[Path] = Field(default=None)
    abi_json: Optional[str] = Field(default=None)

    log_level: str = Field(default="INFO")

    model_config = SettingsConfigDict(
        env_prefix="MONORACLE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("rpc_url")
    @classmethod
    def validate_rpc_url(cls, value: str) -> str:
        candidate = value.strip()
        if not candidate.startswith(("http://", "https://")):
            raise ValueError("MONORACLE_RPC_URL must be an http(s) URL")
        return candidate

    @field_validator("contract_address")
    @classmethod
    def validate_contract_address(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        candidate = value.strip()
        if not candidate:
            return None
        if not candidate.startswith("0x") or len(candidate) != 42:
            raise ValueError("MONORACLE_CONTRACT_ADDRESS must be a 42-character hex string")
        return candidate

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level


settings = MonoracleSettings()
