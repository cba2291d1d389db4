"""Execution layer (only place that touches exchange keys).

Keep this package `__init__` lightweight to avoid import cycles.
Import concrete modules directly, e.g.:
  - `from src.execution.binance_client import BinanceSpotClient`
  - `from src.execution import handlers`
"""

__all__: list[str] = []
