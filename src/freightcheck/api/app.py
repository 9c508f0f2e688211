from __future__ import annotations

import logging
import os
from typing import Any, Dict, List

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError

from freightcheck.api.routes_compliance import router as compliance_router
from freightcheck.api.security import ENGINE_VERSION
from freightcheck.compliance.regulations import get_regulation_registry
from freightcheck.observability import log_event, redact_api_key, run_scope

# -----------------------------------------------------------------------------
# App setup
# -----------------------------------------------------------------------------
logger = logging.getLogger(__name__)

app = FastAPI(title="freightcheck API", version="v1")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(compliance_router)


@app.middleware("http")
async def attach_run_id(request: Request, call_next):
    with run_scope(request.headers.get("X-Run-ID")) as run_id:
        redacted_key = redact_api_key(request.headers.get("X-API-Key"))
        log_event("request.start", path=str(request.url.path), api_key=redacted_key)
        try:
            response = await call_next(request)
            response.headers["X-Run-ID"] = run_id
            return response
        finally:
            log_event("request.end", path=str(request.url.path), api_key=redacted_key)


def _redact_message(msg: str) -> str:
    if msg.lower().startswith("value error, "):
        msg = msg.split(", ", 1)[1]
    lowered = msg.lower()
    if "key" in lowered or "token" in lowered or "secret" in lowered:
        return "Invalid request payload"
    return msg


def _normalize_validation_errors(raw_errors: List[Dict[str, Any]]) -> Dict[str, Any]:
    fields: List[Dict[str, str]] = []
    for err in raw_errors:
        loc = err.get("loc", [])
        loc_parts = [str(part) for part in loc if part != "body"]
        path = ".".join(["request", *loc_parts]) if loc_parts else "request"
        message = _redact_message(err.get("msg", "Invalid request"))
        fields.append({"path": path, "message": message})
    return {"error": "VALIDATION_ERROR", "fields": fields}


@app.exception_handler(RequestValidationError)
async def handle_request_validation_error(request: Request, exc: RequestValidationError):
    content = _normalize_validation_errors(exc.errors())
    return JSONResponse(status_code=422, content=content)


@app.exception_handler(ValidationError)
async def handle_pydantic_validation_error(request: Request, exc: ValidationError):
    content = _normalize_validation_errors(exc.errors())
    return JSONResponse(status_code=422, content=content)


class VersionResp(BaseModel):
    engine_version: str
    build: str | None = None
    regulation_snapshot: str


@app.get("/health")
def health() -> Dict[str, Any]:
    registry = get_regulation_registry()
    return {"ok": len(registry) > 0, "status": "ok", "countries": len(registry)}


@app.get("/v1/version", response_model=VersionResp)
def version() -> VersionResp:
    return VersionResp(
        engine_version=ENGINE_VERSION,
        build=os.getenv("GIT_COMMIT"),
        regulation_snapshot=get_regulation_registry().snapshot,
    )
