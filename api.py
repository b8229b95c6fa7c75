"""
Damm Checksum — FastAPI Server
==============================

RESTful API for generating and validating Damm check digits.

Endpoints:
    POST /checksum          Append the check digit to a number
    POST /validate          Inspect a number ending in its check digit
    POST /validate/batch    Inspect many numbers at once
    GET  /health            Health check / readiness probe

Run:
    uvicorn api:app --reload              # Dev (http://localhost:8000)
    uvicorn api:app --host 0.0.0.0        # Production

Config (environment or .env):
    DAMM_MAX_NUMBER_LENGTH   Longest accepted number (default 4096)
"""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from damm_checksum import __version__
from damm_checksum.exceptions import MalformedInputError
from damm_checksum.inspection import ChecksumInspector
from damm_checksum.models import ChecksumReport

load_dotenv()

logger = logging.getLogger(__name__)

MAX_NUMBER_LENGTH = int(os.environ.get("DAMM_MAX_NUMBER_LENGTH", "4096"))
MAX_BATCH_SIZE = 1000


# ─── Application Lifespan (verify table once) ───────────────────────

_inspector: ChecksumInspector | None = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Verify the operation table on startup."""
    global _inspector  # noqa: PLW0603
    _inspector = ChecksumInspector()
    yield
    _inspector = None


# ─── FastAPI App ─────────────────────────────────────────────────────

app = FastAPI(
    title="Damm Checksum API",
    description=(
        "Generate and validate Damm check digits. Detects every single-digit "
        "error and every adjacent transposition. Malformed input is reported "
        "separately from a mismatching check digit."
    ),
    version=__version__,
    lifespan=lifespan,
)


# ─── Request / Response Schemas ─────────────────────────────────────


class NumberRequest(BaseModel):
    """Request body carrying a single number."""

    number: str = Field(
        ...,
        max_length=MAX_NUMBER_LENGTH,
        description="Decimal digits only ('0'-'9').",
        json_schema_extra={"example": "572"},
    )


class BatchRequest(BaseModel):
    numbers: list[str] = Field(
        ...,
        min_length=1,
        max_length=MAX_BATCH_SIZE,
        json_schema_extra={"example": ["5724", "438812345679", "438812345670"]},
    )


class ChecksumResponse(BaseModel):
    number: str
    check_digit: int
    number_with_check_digit: str


class BatchResponse(BaseModel):
    valid_count: int
    invalid_count: int
    reports: list[ChecksumReport]


class ErrorResponse(BaseModel):
    code: str
    message: str
    details: dict = Field(default_factory=dict)


class HealthResponse(BaseModel):
    status: str
    version: str
    table_verified: bool


# ─── Helpers ─────────────────────────────────────────────────────────


def _get_inspector() -> ChecksumInspector:
    if _inspector is None:
        raise HTTPException(status_code=503, detail="Inspector not initialised")
    return _inspector


# ─── Endpoints ───────────────────────────────────────────────────────


@app.post(
    "/checksum",
    summary="Append the Damm check digit",
    tags=["Checksum"],
    responses={
        422: {"model": ErrorResponse, "description": "Number contains a non-digit"},
        503: {"description": "Inspector not yet initialised"},
    },
)
def create_checksum(request: NumberRequest) -> ChecksumResponse:
    """Compute the check digit and return the number with it appended.

    The empty string is accepted; its check digit is 0.
    """
    inspector = _get_inspector()
    try:
        with_check = inspector.generate(request.number)
    except MalformedInputError as exc:
        raise HTTPException(
            status_code=422,
            detail=ErrorResponse(
                code=exc.code, message=exc.message, details=exc.details
            ).model_dump(),
        )

    return ChecksumResponse(
        number=request.number,
        check_digit=int(with_check[-1]),
        number_with_check_digit=with_check,
    )


@app.post(
    "/validate",
    summary="Validate a number ending in its check digit",
    tags=["Validation"],
    responses={503: {"description": "Inspector not yet initialised"}},
)
def validate_number(request: NumberRequest) -> ChecksumReport:
    """Inspect a number. Always 200; problems are listed in **findings**.

    - **MALFORMED_INPUT**: a character is not '0'-'9'
    - **CHECKSUM_MISMATCH**: digits only, but the check digit is wrong
    """
    inspector = _get_inspector()
    return inspector.inspect(request.number)


@app.post(
    "/validate/batch",
    summary="Validate many numbers",
    tags=["Validation"],
    responses={503: {"description": "Inspector not yet initialised"}},
)
def validate_batch(request: BatchRequest) -> BatchResponse:
    inspector = _get_inspector()
    too_long = [n for n in request.numbers if len(n) > MAX_NUMBER_LENGTH]
    if too_long:
        raise HTTPException(
            status_code=422,
            detail=f"{len(too_long)} number(s) exceed {MAX_NUMBER_LENGTH} characters",
        )

    reports = inspector.inspect_many(request.numbers)
    valid_count = sum(1 for r in reports if r.is_valid)
    logger.info("Batch of %d: %d valid", len(reports), valid_count)
    return BatchResponse(
        valid_count=valid_count,
        invalid_count=len(reports) - valid_count,
        reports=reports,
    )


@app.get(
    "/health",
    summary="Health check",
    tags=["System"],
    responses={503: {"description": "Inspector not yet initialised"}},
)
def health_check() -> HealthResponse:
    inspector = _get_inspector()
    return HealthResponse(
        status="healthy",
        version=__version__,
        table_verified=inspector.table_verified,
    )
