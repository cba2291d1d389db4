"""Fan-out executor: partial-failure isolation and rendering."""

import io
import json
from decimal import Decimal

import pytest

from src.accounts.fanout import (
    AccountNotFoundError,
    FinalizerError,
    execute,
    is_error,
    render,
    run,
)
from src.accounts.registry import Account, AccountRegistry
from src.accounts.selector import SelectAll, SelectByName
from src.config import AppConfig


def _accounts(*names):
    return {n: Account(name=n, client=None) for n in names}


def test_failures_are_isolated_and_every_account_has_an_entry():
    attempted = []

    def op(account):
        attempted.append(account.name)
        if account.name in {"B", "D"}:
            raise RuntimeError(f"auth failed for {account.name}")
        return {"ok": account.name}

    results = execute(_accounts("A", "B", "C", "D", "E"), op)
    assert attempted == ["A", "B", "C", "D", "E"]
    assert len(results) == 5
    assert results["B"] == "error: auth failed for B"
    assert results["D"] == "error: auth failed for D"
    assert results["C"] == {"ok": "C"}


def test_failure_at_first_position_does_not_abort():
    def op(account):
        if account.name == "A":
            raise ValueError("boom")
        return 1

    assert execute(_accounts("A", "B"), op) == {"A": "error: boom", "B": 1}


def test_missing_account_becomes_not_found_error_string():
    called = []
    results = execute({"ghost": None}, lambda a: called.append(a))
    assert results == {"ghost": "error: account not found: ghost"}
    assert called == []


def test_failures_are_warned_on_stderr(capsys):
    execute({"ghost": None}, lambda a: a)
    assert "[WARN] account=ghost" in capsys.readouterr().err


def test_finalizer_replaces_raw_results():
    value = execute(_accounts("A"), lambda a: 2, finalizer=lambda res: sum(res.values()))
    assert value == 2


def test_finalizer_error_propagates_and_nothing_is_rendered(exchange, write_keys):
    path = write_keys([{"name": "A", "api_key": "x", "secret_key": "y"}])
    registry = AccountRegistry(AppConfig(keyfile=path), client_factory=exchange.factory)

    def bad_finalizer(results):
        raise FinalizerError("cannot aggregate")

    out = io.StringIO()
    with pytest.raises(FinalizerError):
        run(SelectAll(), registry, lambda a: 1, bad_finalizer, stream=out)
    assert out.getvalue() == ""


def test_run_renders_indented_json(exchange, write_keys):
    path = write_keys([{"name": "A", "api_key": "x", "secret_key": "y"}])
    registry = AccountRegistry(AppConfig(keyfile=path), client_factory=exchange.factory)
    out = io.StringIO()
    value = run(SelectByName("A"), registry, lambda a: {"n": Decimal("1.50")}, stream=out)
    assert value == {"A": {"n": Decimal("1.50")}}
    assert json.loads(out.getvalue()) == {"A": {"n": "1.50"}}
    assert '\n        "n"' in out.getvalue()


def test_render_defaults_to_stdout(capsys):
    render({"A": [1, 2]})
    assert json.loads(capsys.readouterr().out) == {"A": [1, 2]}


def test_is_error():
    assert is_error("error: x")
    assert not is_error("fine")
    assert not is_error({"error": "x"})


def test_not_found_error_carries_name():
    err = AccountNotFoundError("Z")
    assert err.name == "Z"
    assert str(err) == "account not found: Z"
