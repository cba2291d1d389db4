import json
import os
import sys
from typing import Any, Dict, List, Optional

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))


class FakeExchange:
    """In-memory stand-in for Binance, keyed by account name."""

    def __init__(self) -> None:
        self.balances: Dict[str, List[Dict[str, Any]]] = {}
        self.prices: List[Dict[str, Any]] = []
        self.open_orders: Dict[str, List[Dict[str, Any]]] = {}
        self.failures: Dict[str, Exception] = {}
        self.clients: List["FakeClient"] = []
        self.calls: List[tuple] = []

    def factory(self, api_key: str, secret_key: str, **kwargs: Any) -> "FakeClient":
        client = FakeClient(self, api_key, secret_key, **kwargs)
        self.clients.append(client)
        return client


class FakeClient:
    def __init__(self, exchange: FakeExchange, api_key: str, secret_key: str, **kwargs: Any):
        self.exchange = exchange
        self.api_key = api_key
        self.secret_key = secret_key
        self.account = kwargs.get("account")
        self.kwargs = kwargs

    def _call(self, method: str, *args: Any) -> None:
        self.exchange.calls.append((self.account, method) + args)
        err = self.exchange.failures.get(self.account)
        if err is not None:
            raise err

    def get_balances(self) -> List[Dict[str, Any]]:
        self._call("get_balances")
        return self.exchange.balances.get(self.account, [])

    def get_prices(self, symbol: Optional[str] = None) -> List[Dict[str, Any]]:
        self._call("get_prices", symbol)
        rows = self.exchange.prices
        if symbol:
            rows = [r for r in rows if r["symbol"] == symbol]
        return rows

    def get_open_orders(self, symbol: Optional[str] = None) -> List[Dict[str, Any]]:
        self._call("get_open_orders", symbol)
        rows = self.exchange.open_orders.get(self.account, [])
        if symbol:
            rows = [r for r in rows if r["symbol"] == symbol]
        return list(rows)

    def place_order(self, **params: Any) -> Dict[str, Any]:
        self._call("place_order", params)
        return {"orderId": 42, "status": "NEW", "type": "LIMIT", "account": self.account, **params}

    def cancel_order(self, *, symbol: str, order_id: int) -> Dict[str, Any]:
        self._call("cancel_order", symbol, order_id)
        return {"symbol": symbol, "orderId": order_id, "status": "CANCELED"}


@pytest.fixture
def exchange() -> FakeExchange:
    return FakeExchange()


@pytest.fixture
def write_keys(tmp_path):
    def _write(records: Any, filename: str = "keys.json") -> str:
        path = tmp_path / filename
        path.write_text(records if isinstance(records, str) else json.dumps(records))
        return str(path)

    return _write


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for var in ("BINANCE_ASSETS", "BINANCE_TESTNET", "BINANCE_RECV_WINDOW", "BINANCE_KEYFILE"):
        monkeypatch.delenv(var, raising=False)
