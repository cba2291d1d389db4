"""Run the multi-account Binance CLI.

Examples:
  python run.py list-balances --assets BTC USDT
  python run.py --name main list-orders --symbol BNBBTC
  python run.py create-order --symbol BNBBTC --side BUY --quantity 1 --price 0.001
"""

from __future__ import annotations

from src.cli import entrypoint

if __name__ == "__main__":
    entrypoint()
