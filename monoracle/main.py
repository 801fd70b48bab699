"""CLI entrypoint for reading a Monoracle feed."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence, Union

from .abi import AbiError, load_abi
from .client import RpcCallError, fetch_monoracle_data_sync
from .config import settings


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s:%(lineno)d | %(message)s",
        stream=sys.stderr,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="monoracle",
        description="Read a Monoracle feed contract and print it as JSON.",
    )
    parser.add_argument(
        "address",
        nargs="?",
        default=settings.contract_address,
        help="Monoracle contract address (default: MONORACLE_CONTRACT_ADDRESS)",
    )
    parser.add_argument("--rpc-url", default=settings.rpc_url, help="JSON-RPC endpoint")
    parser.add_argument("--abi-path", help="Override ABI JSON file (default: MONORACLE_ABI_PATH)")
    parser.add_argument("--abi-json", help="Override ABI as inline JSON (default: MONORACLE_ABI_JSON)")
    parser.add_argument("--log-level", default=settings.log_level)
    parser.add_argument("--indent", type=int, default=2, help="JSON indent (0 for compact)")
    return parser


def _resolve_abi_sources(args: argparse.Namespace) -> tuple[Optional[str], Optional[Union[str, Path]]]:
    # sources given on the command line replace both environment sources
    if args.abi_json or args.abi_path:
        return args.abi_json, args.abi_path
    return settings.abi_json, settings.abi_path


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    configure_logging(args.log_level)
    logger = logging.getLogger(__name__)

    if not args.address:
        print("error: contract address required (argument or MONORACLE_CONTRACT_ADDRESS)", file=sys.stderr)
        return 2

    try:
        abi_json, abi_path = _resolve_abi_sources(args)
        abi = load_abi(abi_json=abi_json, abi_path=abi_path)
    except AbiError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    logger.info("Reading Monoracle feed %s via %s", args.address, args.rpc_url)
    try:
        record = fetch_monoracle_data_sync(args.address, args.rpc_url, abi=abi)
    except RpcCallError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    indent = args.indent if args.indent > 0 else None
    json.dump(record.as_dict(), sys.stdout, indent=indent)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
