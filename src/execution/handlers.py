"""Per-account operation handlers.

Each handler takes an Account (plus keyword options bound by the CLI with
`functools.partial`) and returns a JSON-friendly payload. Exceptions are left
to the fan-out executor, which records them per account.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence

from src.accounts.registry import Account
from src.execution.schemas import OrderRequest

_ZERO = Decimal("0")


def list_balances(account: Account, *, assets: Sequence[str], with_total: bool = True) -> Dict[str, Any]:
    """Balances for `assets` only; assets the account does not hold report zero."""
    wanted = [a.upper() for a in assets]
    rows = {b.get("asset"): b for b in account.client.get_balances()}
    out: Dict[str, Any] = {}
    for asset in wanted:
        row = rows.get(asset) or {}
        free = Decimal(str(row.get("free", _ZERO)))
        locked = Decimal(str(row.get("locked", _ZERO)))
        entry: Dict[str, Decimal] = {"free": free, "locked": locked}
        if with_total:
            entry["total"] = free + locked
        out[asset] = entry
    return out


def list_prices(account: Account, *, symbol: Optional[str] = None) -> List[Dict[str, Any]]:
    return account.client.get_prices(symbol or None)


def list_orders(account: Account, *, symbol: Optional[str] = None) -> List[Dict[str, Any]]:
    return account.client.get_open_orders(symbol or None)


def create_order(
    account: Account, *, symbol: str, side: str, quantity: str, price: str
) -> Dict[str, Any]:
    """Validate and place a LIMIT order; a ValidationError is this account's result."""
    order = OrderRequest(symbol=symbol, side=side, quantity=quantity, price=price)
    return account.client.place_order(**order.to_params())


def cancel_orders(account: Account, *, symbol: Optional[str] = None) -> List[Dict[str, Any]]:
    """Cancel every open order (optionally for one symbol); return the confirmations."""
    cancelled: List[Dict[str, Any]] = []
    for o in account.client.get_open_orders(symbol or None):
        cancelled.append(
            account.client.cancel_order(symbol=o["symbol"], order_id=int(o["orderId"]))
        )
    return cancelled


__all__ = ["cancel_orders", "create_order", "list_balances", "list_orders", "list_prices"]
