# src/fxrates/adapters/http/schemas.py
"""
HTTP Schemas - Response Bodies of the JSON API

Pydantic models describing every response the API returns. Field aliases
keep the wire names (``from``, ``convertedAmount``) that are not valid or
idiomatic Python identifiers.

Files that USE this module:
- fxrates.adapters.http.handlers (response models of every route)
- fxrates.adapters.http.server (ErrorResponse for mapped exceptions)
"""
from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ErrorResponse(BaseModel):
    """Body of every failed request."""

    success: bool = False
    message: str


class RatesListResponse(BaseModel):
    id: str = Field(..., description="Random identifier of this response.")
    success: bool = True
    data: List[dict[str, Any]] = Field(..., description="All stored records in append order.")


class RateRecordResponse(BaseModel):
    id: str
    success: bool = True
    data: dict[str, Any] = Field(..., description="The record stored for the date.")


class CurrencyRateResponse(BaseModel):
    id: str
    success: bool = True
    date: str
    currency: str = Field(..., description="Uppercase currency code.")
    rate: Any = Field(..., description="Currency units per 1 USD, as stored.")


class UsdConversionResponse(BaseModel):
    """USD amount converted into one currency."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    date: str
    from_currency: str = Field("USD", alias="from")
    to_currency: str = Field(..., alias="to")
    amount: Optional[float] = Field(..., description="Parsed amount; null when not a number.")
    rate: Any
    converted_amount: str = Field(..., alias="convertedAmount", description="Two-decimal string.")


class ConversionResponse(BaseModel):
    """Amount converted between two currencies through USD."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    date: str
    from_currency: str = Field(..., alias="from")
    to_currency: str = Field(..., alias="to")
    amount: Optional[float] = Field(..., description="Parsed amount; null when not a number.")
    converted_amount: str = Field(..., alias="convertedAmount", description="Two-decimal string.")


class RateCreatedResponse(BaseModel):
    id: str
    success: bool = True
    message: str = "Rate added successfully"
    data: dict[str, Any]
