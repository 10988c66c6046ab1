# src/fxrates/adapters/http/handlers.py
"""
HTTP Handlers - Route Definitions of the JSON API

This module maps the API's URL patterns onto RatesService operations and
shapes the results into response models. Lookups that find nothing raise
domain errors, which the app-level exception handlers turn into 404s.

Files that USE this module:
- fxrates.adapters.http.server (build_routers registers these routes)

Files that this module USES:
- fxrates.application.rates_service (RatesService)
- fxrates.application.health (HealthChecker for /health)
- fxrates.adapters.http.schemas (response models)
"""
from __future__ import annotations

import logging
import math
from typing import Any, Optional
from uuid import uuid4

from fastapi import APIRouter, Body, Depends, Request, status
from fastapi.responses import JSONResponse

from fxrates.application.health import HealthChecker
from fxrates.application.rates_service import RatesService
from fxrates.adapters.http.schemas import (
    ConversionResponse,
    CurrencyRateResponse,
    ErrorResponse,
    RateCreatedResponse,
    RateRecordResponse,
    RatesListResponse,
    UsdConversionResponse,
)

logger = logging.getLogger(__name__)

NOT_FOUND = {status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}}
BAD_RECORD = {status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}}

rates_router = APIRouter(prefix="/api", tags=["Rates"])
health_router = APIRouter(tags=["Health"])


def get_rates_service(request: Request) -> RatesService:
    """Build a RatesService over the store attached to the app."""
    return RatesService(request.app.state.rate_store)


def _new_id() -> str:
    return uuid4().hex


def _json_number(value: float) -> Optional[float]:
    # JSON has no NaN/Infinity
    return value if math.isfinite(value) else None


# --- Rates ---
@rates_router.get("/rates", response_model=RatesListResponse, summary="List all stored rates")
def list_rates(service: RatesService = Depends(get_rates_service)):
    records = service.list_rates()
    return RatesListResponse(id=_new_id(), data=[r.to_json() for r in records])


@rates_router.get(
    "/rates/{date}",
    response_model=RateRecordResponse,
    responses=NOT_FOUND,
    summary="Get all rates for a date",
)
def get_rates_by_date(date: str, service: RatesService = Depends(get_rates_service)):
    record = service.get_by_date(date)
    return RateRecordResponse(id=_new_id(), data=record.to_json())


@rates_router.get(
    "/rates/{date}/{currency}",
    response_model=CurrencyRateResponse,
    responses=NOT_FOUND,
    summary="Get one currency's rate on a date",
)
def get_currency_rate(date: str, currency: str, service: RatesService = Depends(get_rates_service)):
    code, rate = service.get_currency_rate(date, currency)
    return CurrencyRateResponse(id=_new_id(), date=date, currency=code, rate=rate)


@rates_router.post(
    "/rates", response_model=RateCreatedResponse, responses=BAD_RECORD, summary="Add the rates of a new date"
)
def add_rate(
    record: dict[str, Any] = Body(..., description="Record to store, e.g. {date, rates}."),
    service: RatesService = Depends(get_rates_service),
):
    stored = service.add_rate(record)
    return RateCreatedResponse(id=_new_id(), data=stored.to_json())


# --- Conversion ---
@rates_router.get(
    "/convert/{date}/{currency}/{amount}",
    response_model=UsdConversionResponse,
    responses=NOT_FOUND,
    summary="Convert a USD amount into a currency",
)
def convert_from_usd(
    date: str,
    currency: str,
    amount: str,
    service: RatesService = Depends(get_rates_service),
):
    result = service.convert_from_usd(date, currency, amount)
    return UsdConversionResponse(
        date=result.date,
        from_currency=result.from_currency,
        to_currency=result.to_currency,
        amount=_json_number(result.amount),
        rate=result.rate,
        converted_amount=result.converted_amount,
    )


@rates_router.get(
    "/convert/{date}/{from_currency}/{to_currency}/{amount}",
    response_model=ConversionResponse,
    responses=NOT_FOUND,
    summary="Convert an amount between two currencies",
)
def convert(
    date: str,
    from_currency: str,
    to_currency: str,
    amount: str,
    service: RatesService = Depends(get_rates_service),
):
    result = service.convert(date, from_currency, to_currency, amount)
    return ConversionResponse(
        date=result.date,
        from_currency=result.from_currency,
        to_currency=result.to_currency,
        amount=_json_number(result.amount),
        converted_amount=result.converted_amount,
    )


# --- /health ---
@health_router.get("/health", summary="Report whether the rate store is usable")
def health(request: Request):
    report = HealthChecker(request.app.state.rate_store).get_overall_health()
    status_code = status.HTTP_200_OK if report["overall_healthy"] else status.HTTP_503_SERVICE_UNAVAILABLE
    return JSONResponse(status_code=status_code, content=report)


def build_routers() -> list[APIRouter]:
    """
    Build and return the API routers.

    Returns:
        List of routers for registration with the app
    """
    return [
        rates_router,
        health_router,
    ]
