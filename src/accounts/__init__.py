"""Multi-account layer: credentials, registry, selection, fan-out.

Keep this package `__init__` lightweight to avoid import cycles.
Import concrete modules directly, e.g.:
  - `from src.accounts.registry import AccountRegistry`
  - `from src.accounts.fanout import execute`
"""

__all__: list[str] = []
