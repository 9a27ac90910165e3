from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Dict, Optional

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import CORS_ALLOW_HEADERS, CORS_ALLOW_METHODS, get_settings
from app.costs import calculate_pvc_vs_wood_cost, projection_summary
from app.delivery import EmailSender, build_email_sender
from app.formatting import format_currency
from app.i18n import translate
from app.logging import json_logger_middleware
from app.storage import SubmissionStore, build_submission_store
from app.submissions import process_contact, process_quote
from app.validation import SubmissionError

from api.models import (
    CalculatorRequest,
    CalculatorResponse,
    ErrorBody,
    QuoteResponse,
    SubmissionResponse,
    YearlyCostOut,
)

logger = logging.getLogger(__name__)

settings = get_settings()
APP_TITLE = settings.APP_NAME
APP_VERSION = settings.APP_VERSION

app = FastAPI(title=APP_TITLE, version=APP_VERSION)

# CORS (wide-open: any origin may post the site's forms, preflights always pass)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.middleware("http")(json_logger_middleware())

NOT_ALLOWED_METHODS = ["GET", "PUT", "PATCH", "DELETE"]
METHOD_NOT_ALLOWED = "Method not allowed"


# ------------ Collaborators ------------


@lru_cache
def get_email_sender() -> EmailSender:
    return build_email_sender(get_settings())


@lru_cache
def get_submission_store() -> Optional[SubmissionStore]:
    return build_submission_store(get_settings())


# ------------ Helpers ------------


async def _read_json_object(request: Request) -> Dict[str, Any]:
    try:
        body = await request.json()
    except ValueError as e:
        raise SubmissionError("Invalid JSON body") from e
    if not isinstance(body, dict):
        raise SubmissionError("Invalid JSON body")
    return body


def _server_error(message: str) -> JSONResponse:
    env = ErrorBody(error="Internal server error", message=message)
    return JSONResponse(status_code=500, content=env.model_dump())


# ------------ Routes ------------


@app.get("/health")
def health() -> dict:
    return {"ok": True, "service": APP_TITLE, "version": APP_VERSION}


@app.get("/")
def root():
    return {
        "message": f"{APP_TITLE}. See /health, POST /api/contact, POST /api/quote, POST /api/calculator"
    }


@app.post("/api/contact", response_model=SubmissionResponse)
async def submit_contact(
    request: Request,
    lang: Optional[str] = None,
    sender: EmailSender = Depends(get_email_sender),
    store: Optional[SubmissionStore] = Depends(get_submission_store),
):
    request.state.submission_kind = "contact"
    try:
        payload = await _read_json_object(request)
        await run_in_threadpool(process_contact, payload, sender=sender, store=store)
    except SubmissionError as e:
        return JSONResponse(status_code=400, content=e.to_dict())
    except Exception:
        logger.exception("Contact form error")
        return _server_error("Failed to process contact form submission")

    return SubmissionResponse(message=translate(lang, "api.contactSuccess"))


@app.post("/api/quote", response_model=QuoteResponse)
async def submit_quote(
    request: Request,
    lang: Optional[str] = None,
    sender: EmailSender = Depends(get_email_sender),
    store: Optional[SubmissionStore] = Depends(get_submission_store),
):
    request.state.submission_kind = "quote"
    try:
        payload = await _read_json_object(request)
        outcome = await run_in_threadpool(process_quote, payload, sender=sender, store=store)
    except SubmissionError as e:
        return JSONResponse(status_code=400, content=e.to_dict())
    except Exception:
        logger.exception("Quote form error")
        return _server_error("Failed to process quote request")

    request.state.estimated_cost = outcome.estimate.estimated_cost
    request.state.urgent = outcome.urgent
    return QuoteResponse(
        message=translate(lang, "api.quoteSuccess"),
        estimatedCost=outcome.estimate.estimated_cost,
        estimatedArea=outcome.estimate.area,
    )


@app.options("/api/contact", include_in_schema=False)
@app.options("/api/quote", include_in_schema=False)
def preflight() -> Response:
    return Response(
        status_code=200,
        headers={
            "Access-Control-Allow-Methods": ", ".join(CORS_ALLOW_METHODS),
            "Access-Control-Allow-Headers": ", ".join(CORS_ALLOW_HEADERS),
        },
    )


@app.api_route("/api/contact", methods=NOT_ALLOWED_METHODS, include_in_schema=False)
@app.api_route("/api/quote", methods=NOT_ALLOWED_METHODS, include_in_schema=False)
def method_not_allowed() -> JSONResponse:
    return JSONResponse(
        status_code=405,
        content={"error": METHOD_NOT_ALLOWED},
        headers={"Allow": ", ".join(CORS_ALLOW_METHODS)},
    )


@app.post("/api/calculator", response_model=CalculatorResponse)
def cost_calculator(inputs: Optional[CalculatorRequest] = None, lang: Optional[str] = None):
    inputs = inputs or CalculatorRequest()
    costs = calculate_pvc_vs_wood_cost(
        inputs.kitchen_size,
        inputs.pvc_price_per_sqft,
        inputs.wood_price_per_sqft,
        inputs.wood_maintenance_percent,
        inputs.humidity_multiplier,
        inputs.wood_replacement_risk,
    )
    summary = projection_summary(costs)
    labels = {
        k: translate(lang, f"calculator.{k}")
        for k in ("title", "subtitle", "chartTitle", "pvc", "wood", "start")
    }
    labels["savings"] = translate(
        lang, "calculator.savings", {"amount": format_currency(summary["totalSavings"])}
    )
    for c in costs:
        labels[f"year{c.year}"] = translate(lang, "calculator.year", {"year": c.year})
    return CalculatorResponse(
        years=[YearlyCostOut(**c.to_dict()) for c in costs],
        totalSavings=summary["totalSavings"],
        maxCost=summary["maxCost"],
        labels=labels,
    )


# ------------ Exception Handlers ------------


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 405:
        # Verbs without an explicit route (HEAD, TRACE, ...) get the same body
        return JSONResponse(
            status_code=405,
            content={"error": METHOD_NOT_ALLOWED},
            headers=exc.headers,
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail or "HTTP error")},
        headers=exc.headers,
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    details = [
        {
            "field": ".".join(str(p) for p in err.get("loc", ())[1:]),
            "message": err.get("msg", ""),
        }
        for err in exc.errors()
    ]
    return JSONResponse(status_code=400, content={"error": "Invalid request", "details": details})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s", request.url.path)
    return _server_error("Unexpected server error")
