"""Central configuration loader.

Read env vars, expose typed config objects and defaults.
Built once per invocation from CLI input and passed explicitly to the
registry/selector/executor; nothing here is process-global.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List, Optional

DEFAULT_KEYFILE = "keys.json"
DEFAULT_ASSETS = ["BTC", "BNB", "WINK", "USDT"]


def _env_bool(name: str, default: bool = False) -> bool:
    val = os.getenv(name)
    if val is None:
        return default
    return val.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    val = os.getenv(name)
    if val is None or val.strip() == "":
        return default
    return int(val)


def _env_list(name: str, default: List[str], sep: str = ",") -> List[str]:
    val = os.getenv(name)
    if val is None or val.strip() == "":
        return default
    return [v.strip() for v in val.split(sep) if v.strip()]


@dataclass(frozen=True)
class BinanceConfig:
    testnet: bool = False
    recv_window: int = 5000


@dataclass(frozen=True)
class AppConfig:
    name: str = ""
    keyfile: str = DEFAULT_KEYFILE
    debug: bool = False
    binance: BinanceConfig = field(default_factory=BinanceConfig)


def default_assets() -> List[str]:
    """Assets for `list-balances` when `--assets` is not given."""
    return _env_list("BINANCE_ASSETS", list(DEFAULT_ASSETS))


def load_config(
    *,
    name: Optional[str] = None,
    keyfile: Optional[str] = None,
    debug: bool = False,
) -> AppConfig:
    """Load configuration from CLI values, falling back to environment."""
    binance = BinanceConfig(
        testnet=_env_bool("BINANCE_TESTNET", False),
        recv_window=_env_int("BINANCE_RECV_WINDOW", 5000),
    )
    return AppConfig(
        name=name or "",
        keyfile=keyfile or os.getenv("BINANCE_KEYFILE") or DEFAULT_KEYFILE,
        debug=bool(debug),
        binance=binance,
    )


__all__ = ["AppConfig", "BinanceConfig", "DEFAULT_ASSETS", "default_assets", "load_config"]
