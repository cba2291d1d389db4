"""Binance spot client wrapper.

Only this layer should ever touch Binance keys. It exposes the small surface
the account commands need (balances, prices, open orders, place order,
cancel order) and nothing else.
"""

from __future__ import annotations

import sys
import time
from typing import Any, Dict, List, Optional

from binance.client import Client
from binance.exceptions import BinanceAPIException, BinanceRequestException


class BinanceSpotClient:
    """Thin wrapper over python-binance spot endpoints with testnet support.

    The underlying `Client` is built on first use: python-binance pings the
    API from its constructor, and creating a session must not touch the
    network.
    """

    def __init__(
        self,
        api_key: str,
        secret_key: str,
        *,
        testnet: bool = False,
        recv_window: int = 5000,
        debug: bool = False,
        account: Optional[str] = None,
    ):
        self._api_key = api_key
        self._secret_key = secret_key
        self.testnet = testnet
        self.recv_window = recv_window
        self.debug = debug
        self.account = account
        self._client: Optional[Client] = None

    def __repr__(self) -> str:
        return f"BinanceSpotClient(account={self.account!r}, testnet={self.testnet})"

    @property
    def client(self) -> Client:
        if self._client is None:
            self._client = Client(self._api_key, self._secret_key, testnet=self.testnet)
            self._trace("binance_init", {"testnet": self.testnet, "api_url": self._client.API_URL})
        return self._client

    def _trace(self, event_type: str, payload: Dict[str, Any]) -> None:
        if not self.debug:
            return
        print(f"[DEBUG] {event_type} account={self.account} {payload}", file=sys.stderr)

    def get_balances(self) -> List[Dict[str, Any]]:
        """Return the account's raw balance rows (`asset`, `free`, `locked`)."""
        start = time.perf_counter()
        try:
            account = self.client.get_account(recvWindow=self.recv_window)
        except (BinanceAPIException, BinanceRequestException) as e:
            self._trace("binance_balances", {"error": str(e)})
            raise
        balances = account.get("balances", [])
        self._trace(
            "binance_balances",
            {"count": len(balances), "latency_s": time.perf_counter() - start},
        )
        return balances

    def get_prices(self, symbol: Optional[str] = None) -> List[Dict[str, Any]]:
        """Latest ticker prices; a single symbol still comes back as a list."""
        start = time.perf_counter()
        if symbol:
            res: Any = self.client.get_symbol_ticker(symbol=symbol)
        else:
            res = self.client.get_symbol_ticker()
        rows = [res] if isinstance(res, dict) else list(res)
        self._trace(
            "binance_prices",
            {"symbol": symbol, "count": len(rows), "latency_s": time.perf_counter() - start},
        )
        return rows

    def get_open_orders(self, symbol: Optional[str] = None) -> List[Dict[str, Any]]:
        start = time.perf_counter()
        params: Dict[str, Any] = {"recvWindow": self.recv_window}
        if symbol:
            params["symbol"] = symbol
        res = self.client.get_open_orders(**params)
        self._trace(
            "binance_open_orders",
            {"symbol": symbol, "count": len(res), "latency_s": time.perf_counter() - start},
        )
        return res

    def place_order(
        self,
        *,
        symbol: str,
        side: str,
        quantity: str,
        price: str,
        order_type: str = "LIMIT",
        time_in_force: str = "GTC",
    ) -> Dict[str, Any]:
        """Place a spot order and return the exchange confirmation verbatim."""
        params: Dict[str, Any] = {
            "symbol": symbol,
            "side": side,
            "type": order_type,
            "quantity": quantity,
            "price": price,
            "recvWindow": self.recv_window,
        }
        if order_type.upper() == "LIMIT":
            params["timeInForce"] = time_in_force

        start = time.perf_counter()
        try:
            res = self.client.create_order(**params)
        except (BinanceAPIException, BinanceRequestException) as e:
            self._trace(
                "binance_place_order",
                {"symbol": symbol, "side": side, "type": order_type, "error": str(e)},
            )
            raise
        self._trace(
            "binance_place_order",
            {
                "symbol": symbol,
                "side": side,
                "qty": quantity,
                "price": price,
                "latency_s": time.perf_counter() - start,
                "order_id": res.get("orderId"),
            },
        )
        return res

    def cancel_order(self, *, symbol: str, order_id: int) -> Dict[str, Any]:
        start = time.perf_counter()
        res = self.client.cancel_order(
            symbol=symbol, orderId=order_id, recvWindow=self.recv_window
        )
        self._trace(
            "binance_cancel_order",
            {"symbol": symbol, "order_id": order_id, "latency_s": time.perf_counter() - start},
        )
        return res


__all__ = ["BinanceSpotClient"]
