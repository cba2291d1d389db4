"""Account registry: one exchange session per named credential record.

The registry is rebuilt from the credential file every time accounts are
requested. There is no cache across calls.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable

from src.accounts.credentials import CredentialRecord, load_credentials
from src.config import AppConfig
from src.execution.binance_client import BinanceSpotClient

ClientFactory = Callable[..., Any]


@dataclass(frozen=True)
class Account:
    name: str
    client: Any

    def __repr__(self) -> str:
        return f"Account(name={self.name!r})"


def build_accounts(
    records: Iterable[CredentialRecord],
    *,
    config: AppConfig,
    client_factory: ClientFactory = BinanceSpotClient,
) -> Dict[str, Account]:
    """Construct one Account per record; a repeated name replaces the earlier one."""
    accounts: Dict[str, Account] = {}
    for rec in records:
        client = client_factory(
            rec.api_key,
            rec.secret_key,
            testnet=config.binance.testnet,
            recv_window=config.binance.recv_window,
            debug=config.debug,
            account=rec.name,
        )
        accounts[rec.name] = Account(name=rec.name, client=client)
    return accounts


class AccountRegistry:
    """Loads credentials and builds sessions on every `load()`."""

    def __init__(self, config: AppConfig, *, client_factory: ClientFactory = BinanceSpotClient):
        self.config = config
        self.client_factory = client_factory

    def load(self) -> Dict[str, Account]:
        records = load_credentials(self.config.keyfile)
        return build_accounts(records, config=self.config, client_factory=self.client_factory)


__all__ = ["Account", "AccountRegistry", "ClientFactory", "build_accounts"]
