"""Runtime configuration profiles for walletview."""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Dict

PROFILE = os.getenv("WALLETVIEW_PROFILE", "mainnet")

PROFILES: Dict[str, Dict[str, str]] = {
    "mainnet": {
        "WALLETVIEW_NUM_CONFIRMATIONS": "6",
        "WALLETVIEW_COINBASE_MATURITY": "100",
        "WALLETVIEW_MIN_REWARD_DEPTH": "2",
        "WALLETVIEW_LOCKTIME_THRESHOLD": "500000000",
        "WALLETVIEW_OFFLINE_GRACE": "120",
        "WALLETVIEW_CHAIN_ENDPOINT": "http://127.0.0.1:8332",
        "WALLETVIEW_CHAIN_TIMEOUT": "10",
        "WALLETVIEW_CURRENCY_UNIT": "BTC",
        "WALLETVIEW_AMOUNT_DECIMALS": "8",
    },
    "regtest": {
        "WALLETVIEW_NUM_CONFIRMATIONS": "1",
        "WALLETVIEW_COINBASE_MATURITY": "100",
        "WALLETVIEW_MIN_REWARD_DEPTH": "2",
        "WALLETVIEW_LOCKTIME_THRESHOLD": "500000000",
        "WALLETVIEW_OFFLINE_GRACE": "120",
        "WALLETVIEW_CHAIN_ENDPOINT": "http://127.0.0.1:18443",
        "WALLETVIEW_CHAIN_TIMEOUT": "5",
        "WALLETVIEW_CURRENCY_UNIT": "BTC",
        "WALLETVIEW_AMOUNT_DECIMALS": "8",
    },
}

DEFAULTS = PROFILES["mainnet"]


def apply_profile() -> None:
    profile = os.getenv("WALLETVIEW_PROFILE", PROFILE)
    if not profile:
        return
    settings = PROFILES.get(profile)
    if not settings:
        return
    for key, value in settings.items():
        os.environ.setdefault(key, value)


def _env_int(key: str) -> int:
    try:
        return int(os.getenv(key, DEFAULTS[key]))
    except ValueError:
        return int(DEFAULTS[key])


@dataclass(frozen=True)
class Settings:
    """Thresholds used by decomposition and status computation"""
    num_confirmations: int = 6
    coinbase_maturity: int = 100
    min_reward_depth: int = 2
    locktime_threshold: int = 500000000
    offline_grace: int = 120
    chain_endpoint: str = "http://127.0.0.1:8332"
    chain_timeout: int = 10
    currency_unit: str = "BTC"
    amount_decimals: int = 8


def load_settings() -> Settings:
    """Build Settings from the environment, seeded by the active profile."""
    apply_profile()
    return Settings(
        num_confirmations=max(0, _env_int("WALLETVIEW_NUM_CONFIRMATIONS")),
        coinbase_maturity=max(0, _env_int("WALLETVIEW_COINBASE_MATURITY")),
        min_reward_depth=max(0, _env_int("WALLETVIEW_MIN_REWARD_DEPTH")),
        locktime_threshold=_env_int("WALLETVIEW_LOCKTIME_THRESHOLD"),
        offline_grace=max(0, _env_int("WALLETVIEW_OFFLINE_GRACE")),
        chain_endpoint=os.getenv("WALLETVIEW_CHAIN_ENDPOINT", DEFAULTS["WALLETVIEW_CHAIN_ENDPOINT"]).rstrip("/"),
        chain_timeout=max(1, _env_int("WALLETVIEW_CHAIN_TIMEOUT")),
        currency_unit=os.getenv("WALLETVIEW_CURRENCY_UNIT", DEFAULTS["WALLETVIEW_CURRENCY_UNIT"]),
        amount_decimals=max(0, _env_int("WALLETVIEW_AMOUNT_DECIMALS")),
    )
