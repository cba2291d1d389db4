"""Account selection strategies.

Each command picks one of:
  - SelectAll: every account in the registry.
  - SelectByName(name): a one-entry mapping for `name`. An unknown name maps
    to None; the fan-out executor reports it as AccountNotFoundError.
  - SelectArbitrarySingle: exactly one account, the lexicographically
    smallest name, for commands that must never hit more than one account.

Every `resolve()` rebuilds the registry from the credential file.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Protocol

from src.accounts.registry import Account, AccountRegistry

Selected = Dict[str, Optional[Account]]


class Selection(Protocol):
    def resolve(self, registry: AccountRegistry) -> Selected: ...


@dataclass(frozen=True)
class SelectAll:
    def resolve(self, registry: AccountRegistry) -> Selected:
        return dict(registry.load())


@dataclass(frozen=True)
class SelectByName:
    name: str

    def resolve(self, registry: AccountRegistry) -> Selected:
        accounts = registry.load()
        return {self.name: accounts.get(self.name)}


@dataclass(frozen=True)
class SelectArbitrarySingle:
    def resolve(self, registry: AccountRegistry) -> Selected:
        accounts = registry.load()
        if not accounts:
            return {}
        first = min(accounts)
        return {first: accounts[first]}


def select(name: Optional[str]) -> Selection:
    """SelectByName when a name is given, else SelectAll."""
    return SelectByName(name) if name else SelectAll()


def select_single(name: Optional[str]) -> Selection:
    """SelectByName when a name is given, else SelectArbitrarySingle."""
    return SelectByName(name) if name else SelectArbitrarySingle()


__all__ = [
    "SelectAll",
    "SelectArbitrarySingle",
    "SelectByName",
    "Selected",
    "Selection",
    "select",
    "select_single",
]
