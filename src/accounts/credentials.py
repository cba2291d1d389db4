"""Credential store: named API key records loaded from a JSON file.

File format:
  [{"name": "main", "api_key": "...", "secret_key": "..."}, ...]

Only shape is validated here. Duplicate names and empty keys are accepted;
the registry resolves duplicates (last wins).
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError

from src.config import DEFAULT_KEYFILE


class ConfigError(RuntimeError):
    pass


class ParseError(RuntimeError):
    pass


class CredentialRecord(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str
    api_key: str
    secret_key: str

    def __repr__(self) -> str:
        return f"CredentialRecord(name={self.name!r})"


_RECORDS = TypeAdapter(List[CredentialRecord])


def parse_credentials(raw: str | bytes) -> List[CredentialRecord]:
    """Validate raw JSON text into credential records."""
    try:
        return _RECORDS.validate_json(raw)
    except ValidationError as e:
        raise ParseError(f"Malformed credentials: {e.error_count()} validation error(s)") from e


def load_credentials(path: Optional[str] = None) -> List[CredentialRecord]:
    """Read and parse the credential file (default `keys.json`)."""
    p = Path(path or DEFAULT_KEYFILE)
    try:
        raw = p.read_bytes()
    except OSError as e:
        raise ConfigError(f"Cannot read credential file: {p}") from e
    return parse_credentials(raw)


__all__ = [
    "ConfigError",
    "CredentialRecord",
    "ParseError",
    "load_credentials",
    "parse_credentials",
]
