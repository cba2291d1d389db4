"""Execution-layer schemas.

Validated before anything is sent to the exchange; the exchange still has the
final say on filters (lot size, tick size, min notional).
"""

from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator


class OrderSide(str, Enum):
    buy = "BUY"
    sell = "SELL"


class OrderRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    symbol: str = Field(..., min_length=1)
    side: OrderSide
    quantity: Decimal = Field(..., gt=0)
    price: Decimal = Field(..., gt=0)

    @field_validator("symbol")
    @classmethod
    def _upper_symbol(cls, v: str) -> str:
        return v.strip().upper()

    @field_validator("side", mode="before")
    @classmethod
    def _upper_side(cls, v: Any) -> Any:
        return v.strip().upper() if isinstance(v, str) else v

    def to_params(self) -> Dict[str, str]:
        """Exchange params; numbers in plain notation, never exponent form."""
        return {
            "symbol": self.symbol,
            "side": self.side.value,
            "quantity": format(self.quantity, "f"),
            "price": format(self.price, "f"),
        }


__all__ = ["OrderRequest", "OrderSide"]
