"""Fan-out executor: run one operation across selected accounts.

Per-account failures are captured as "error: <message>" strings and never
stop the loop; every selected account gets exactly one entry. A finalizer,
when given, replaces the raw results and its errors propagate.
"""

from __future__ import annotations

import json
import sys
from decimal import Decimal
from typing import Any, Callable, Dict, Mapping, Optional, TextIO

from src.accounts.registry import Account, AccountRegistry
from src.accounts.selector import Selected, Selection

Operation = Callable[[Account], Any]
Finalizer = Callable[[Dict[str, Any]], Any]

ERROR_PREFIX = "error: "


class AccountNotFoundError(LookupError):
    def __init__(self, name: str):
        super().__init__(f"account not found: {name}")
        self.name = name


class FinalizerError(RuntimeError):
    pass


def is_error(value: Any) -> bool:
    return isinstance(value, str) and value.startswith(ERROR_PREFIX)


def execute(
    accounts: Selected,
    operation: Operation,
    finalizer: Optional[Finalizer] = None,
) -> Any:
    """Apply `operation` to each account sequentially; return the value to render."""
    results: Dict[str, Any] = {}
    for name, account in accounts.items():
        try:
            if account is None:
                raise AccountNotFoundError(name)
            results[name] = operation(account)
        except Exception as e:  # pylint: disable=broad-exception-caught
            print(f"[WARN] account={name} error={e}", file=sys.stderr)
            results[name] = f"{ERROR_PREFIX}{e}"
    if finalizer is not None:
        return finalizer(results)
    return results


def jsonify(value: Any) -> Any:
    """Best-effort conversion to JSON-safe types."""
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (list, tuple)):
        return [jsonify(v) for v in value]
    if isinstance(value, Mapping):
        return {str(k): jsonify(v) for k, v in value.items()}
    # Pydantic v2
    if hasattr(value, "model_dump"):
        return jsonify(value.model_dump())
    return str(value)


def render(value: Any, stream: Optional[TextIO] = None) -> None:
    out = stream if stream is not None else sys.stdout
    out.write(json.dumps(jsonify(value), indent=4, ensure_ascii=False))
    out.write("\n")


def run(
    selection: Selection,
    registry: AccountRegistry,
    operation: Operation,
    finalizer: Optional[Finalizer] = None,
    *,
    stream: Optional[TextIO] = None,
) -> Any:
    """Resolve accounts, execute, render. Returns the rendered value."""
    accounts = selection.resolve(registry)
    value = execute(accounts, operation, finalizer)
    render(value, stream)
    return value


__all__ = [
    "AccountNotFoundError",
    "ERROR_PREFIX",
    "FinalizerError",
    "execute",
    "is_error",
    "jsonify",
    "render",
    "run",
]
