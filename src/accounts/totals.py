"""Balance totals across accounts (finalizer for `list-balances --total`)."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Dict

from src.accounts.fanout import FinalizerError, is_error

TOTAL_KEY = "total"


def total_key(results: Dict[str, Any]) -> str:
    """`total`, prefixed with underscores until it does not clash with an account name."""
    key = TOTAL_KEY
    while key in results:
        key = "_" + key
    return key


def sum_totals(results: Dict[str, Any]) -> Dict[str, Any]:
    """Return the per-account results plus a total entry summed per asset.

    Accounts whose entry is an error string are left out of the sum.
    """
    totals: Dict[str, Decimal] = {}
    for name, payload in results.items():
        if is_error(payload):
            continue
        if not isinstance(payload, dict):
            raise FinalizerError(f"account {name}: expected balance mapping, got {type(payload).__name__}")
        for asset, row in payload.items():
            if not isinstance(row, dict) or "total" not in row:
                raise FinalizerError(f"account {name}: balance for {asset} has no total")
            try:
                amount = Decimal(str(row["total"]))
            except InvalidOperation as e:
                raise FinalizerError(f"account {name}: bad total for {asset}: {row['total']!r}") from e
            totals[asset] = totals.get(asset, Decimal("0")) + amount

    out: Dict[str, Any] = dict(results)
    out[total_key(results)] = totals
    return out


__all__ = ["TOTAL_KEY", "sum_totals", "total_key"]
