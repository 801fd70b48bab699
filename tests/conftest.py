import os
import sys
from pathlib import Path

import pytest

os.environ.setdefault("MONORACLE_RPC_URL", "https://testnet-rpc.monad.xyz/")
os.environ.setdefault("MONORACLE_LOG_LEVEL", "INFO")
os.environ.pop("MONORACLE_CONTRACT_ADDRESS", None)
os.environ.pop("MONORACLE_ABI_JSON", None)
os.environ.pop("MONORACLE_ABI_PATH", None)

PACKAGE_ROOT = Path(__file__).resolve().parents[1]
if str(PACKAGE_ROOT) not in sys.path:
    sys.path.insert(0, str(PACKAGE_ROOT))


@pytest.fixture()
def anyio_backend():
    return "asyncio"
