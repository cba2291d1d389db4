"""Command-line interface: multi-account Binance balance/price/order commands.

Output is one JSON document on stdout. Diagnostics go to stderr.
Per-account failures are embedded in the output and do not change the exit
code; credential, finalizer and usage errors are fatal. Invalid order
parameters are reported per account like any other exchange rejection.
"""

from __future__ import annotations

import argparse
import logging
import sys
import traceback
from functools import partial
from typing import List, Optional, Sequence, TextIO

from dotenv import load_dotenv

from src.accounts.fanout import run
from src.accounts.registry import AccountRegistry, ClientFactory
from src.accounts.selector import select, select_single
from src.accounts.totals import sum_totals
from src.config import AppConfig, default_assets, load_config
from src.execution import handlers
from src.execution.binance_client import BinanceSpotClient
from src.execution.schemas import OrderSide


def _split_assets(values: Optional[Sequence[str]]) -> List[str]:
    if not values:
        return default_assets()
    out: List[str] = []
    for v in values:
        out.extend(a.strip().upper() for a in v.split(",") if a.strip())
    return out


_CLIENT_LOGGERS = ("binance", "urllib3")
_debug_handler = logging.StreamHandler(sys.stderr)
_debug_handler.setFormatter(logging.Formatter("[DEBUG] %(name)s %(message)s"))


def _enable_client_debug_logging() -> None:
    """Send python-binance and urllib3 debug records to stderr; the root logger is untouched."""
    for name in _CLIENT_LOGGERS:
        logger = logging.getLogger(name)
        logger.setLevel(logging.DEBUG)
        if _debug_handler not in logger.handlers:
            logger.addHandler(_debug_handler)


def _build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="binance-cli", description="Binance CLI (multi-account)")
    p.add_argument("--name", default=None, help="Account name (default: all accounts)")
    p.add_argument("--keyfile", default=None, help="File path of API keys (default: keys.json)")
    p.add_argument("-d", "--debug", action="store_true", help="Show debug info")

    sub = p.add_subparsers(dest="command", metavar="COMMAND")
    sub.required = True

    bal = sub.add_parser("list-balances", help="List account balances")
    bal.add_argument(
        "--assets",
        action="extend",
        nargs="+",
        default=None,
        help="List balances with asset BTC, BNB ... (env BINANCE_ASSETS; default BTC BNB WINK USDT)",
    )
    bal.add_argument(
        "--total",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Show total balance (default: on)",
    )

    prices = sub.add_parser("list-prices", help="List latest price for a symbol or symbols")
    prices.add_argument("--symbol", default=None, help="Filter with symbol")

    orders = sub.add_parser("list-orders", help="List open orders")
    orders.add_argument("--symbol", default=None, help="List orders with symbol")

    create = sub.add_parser("create-order", help="Create order")
    create.add_argument("--symbol", required=True, help="Symbol name: BNBBTC")
    create.add_argument(
        "--side",
        required=True,
        type=str.upper,
        choices=[s.value for s in OrderSide],
        help="Side type: SELL or BUY",
    )
    create.add_argument("--quantity", required=True, help="Quantity of symbol")
    create.add_argument("--price", required=True, help="Price of symbol")

    cancel = sub.add_parser("cancel-orders", help="Cancel open orders")
    cancel.add_argument("--symbol", default=None, help="Cancel open orders with symbol")
    return p


def _dispatch(args: argparse.Namespace, cfg: AppConfig, registry: AccountRegistry, stream: TextIO) -> None:
    if args.command == "list-balances":
        assets = _split_assets(args.assets)
        op = partial(handlers.list_balances, assets=assets, with_total=args.total)
        run(select(cfg.name), registry, op, sum_totals if args.total else None, stream=stream)
    elif args.command == "list-prices":
        run(select(cfg.name), registry, partial(handlers.list_prices, symbol=args.symbol), stream=stream)
    elif args.command == "list-orders":
        run(select(cfg.name), registry, partial(handlers.list_orders, symbol=args.symbol), stream=stream)
    elif args.command == "create-order":
        op = partial(
            handlers.create_order,
            symbol=args.symbol, side=args.side, quantity=args.quantity, price=args.price,
        )
        run(select_single(cfg.name), registry, op, stream=stream)
    elif args.command == "cancel-orders":
        run(select_single(cfg.name), registry, partial(handlers.cancel_orders, symbol=args.symbol), stream=stream)
    else:  # pragma: no cover - argparse rejects unknown commands
        raise SystemExit(f"unknown command: {args.command}")


def main(
    argv: Optional[Sequence[str]] = None,
    *,
    client_factory: ClientFactory = BinanceSpotClient,
    stdout: Optional[TextIO] = None,
) -> int:
    load_dotenv()
    args = _build_arg_parser().parse_args(argv)
    cfg = load_config(name=args.name, keyfile=args.keyfile, debug=args.debug)

    if cfg.debug:
        _enable_client_debug_logging()
        print(
            f"[INFO] keyfile={cfg.keyfile} name={cfg.name or '*'} "
            f"BINANCE_TESTNET={cfg.binance.testnet} recv_window={cfg.binance.recv_window}",
            file=sys.stderr,
        )

    registry = AccountRegistry(cfg, client_factory=client_factory)
    try:
        _dispatch(args, cfg, registry, stdout if stdout is not None else sys.stdout)
    except Exception as e:  # pylint: disable=broad-exception-caught
        print(f"[ERROR] {args.command} failed: {e}", file=sys.stderr)
        traceback.print_exception(type(e), e, e.__traceback__, file=sys.stderr)
        return 1
    return 0


def entrypoint() -> None:
    raise SystemExit(main())


__all__ = ["main", "entrypoint"]
