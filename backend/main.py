"""FastAPI backend that wraps the spot_check sampler with NDJSON logging."""
from __future__ import annotations

import hashlib
import json
import logging
import os
import sys
import time
import uuid
from pathlib import Path
from typing import Any, Callable, Dict

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from spot_check import (  # noqa: E402
    DEFAULT_SAMPLE_COUNT,
    SpotChecker,
    SpotCheckError,
    compute_sample_offsets,
)

API_VERSION = "1.0.0"
API_ENV = os.getenv("SPOTCHECK_ENV", "dev")
API_COMPONENT = "api"
CHECK_MODES = {"soft", "strict", "micro", "meta", "hash"}

app = FastAPI(
    title="Spot Check API",
    description="REST API that exposes sampling-based duplicate file checks.",
    version=API_VERSION,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_checker = SpotChecker()
_api_logger = logging.getLogger("spot_check")


def _hash_payload(payload: Dict[str, Any]) -> str:
    try:
        encoded = json.dumps(payload, sort_keys=True, separators=(",", ":"), default=str)
    except TypeError:
        encoded = repr(payload)
    return hashlib.md5(encoded.encode("utf-8")).hexdigest()[:12]


def _log_api_event(event: str, message: str, *, level: int = logging.INFO, **fields: Any) -> None:
    log_payload = {
        "event": event,
        "message": message,
        "component": API_COMPONENT,
        "version": API_VERSION,
        "env": API_ENV,
    }
    log_payload.update(fields)
    _api_logger.log(level, message, extra={"log_payload": log_payload})


class CheckRequest(BaseModel):
    path_a: str
    path_b: str
    sample_count: int = DEFAULT_SAMPLE_COUNT
    mode: str = "soft"


class BatchRequest(BaseModel):
    path: str
    sample_count: int = DEFAULT_SAMPLE_COUNT
    max_workers: int = 1


def _handle(request: Request, label: str, params: Dict[str, Any], action: Callable[[], Dict[str, Any]]) -> Dict[str, Any]:
    """Run ``action`` with request/response logging and error to status mapping."""
    request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
    client_ip = request.client.host if request.client else "unknown"
    route = str(request.url.path)
    start = time.perf_counter()

    _log_api_event(
        "api_request",
        f"{label} request received",
        request_id=request_id,
        route=route,
        method=request.method,
        client_ip=client_ip,
        params_hash=_hash_payload(params),
    )

    try:
        try:
            payload = action()
        except FileNotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        except (SpotCheckError, ValueError) as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
    except HTTPException as exc:
        _log_api_event(
            "api_response",
            f"{label} request failed",
            level=logging.ERROR,
            request_id=request_id,
            route=route,
            method=request.method,
            status_code=exc.status_code,
            duration_ms=int((time.perf_counter() - start) * 1000),
            exception_type=exc.__class__.__name__,
            exception_msg=str(exc.detail),
        )
        raise
    except Exception as exc:
        _log_api_event(
            "api_response",
            f"{label} request failed",
            level=logging.ERROR,
            request_id=request_id,
            route=route,
            method=request.method,
            status_code=500,
            duration_ms=int((time.perf_counter() - start) * 1000),
            exception_type=exc.__class__.__name__,
            exception_msg=str(exc),
        )
        raise

    _log_api_event(
        "api_response",
        f"{label} request completed",
        request_id=request_id,
        route=route,
        method=request.method,
        status_code=200,
        duration_ms=int((time.perf_counter() - start) * 1000),
    )
    return payload


@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.post("/check")
def check_files(payload: CheckRequest, request: Request) -> Dict[str, Any]:
    def run() -> Dict[str, Any]:
        mode = payload.mode.lower()
        if mode not in CHECK_MODES:
            allowed = ", ".join(sorted(CHECK_MODES))
            raise HTTPException(
                status_code=400,
                detail=f"Unsupported mode '{payload.mode}'. Allowed: {allowed}",
            )

        path_a = Path(payload.path_a).expanduser()
        path_b = Path(payload.path_b).expanduser()
        if mode == "hash":
            return {
                "mode": mode,
                "matched": _checker.hash_check(path_a, path_b),
                "tier": "hash",
                "path_a": str(path_a),
                "path_b": str(path_b),
                "hash_method": _checker.hash_method,
            }

        if mode == "soft":
            result = _checker.check(path_a, path_b, payload.sample_count)
        elif mode == "strict":
            result = _checker.strict_check(path_a, path_b, payload.sample_count)
        elif mode == "micro":
            result = _checker.micro_check(path_a, path_b)
        else:
            result = _checker.meta_check(path_a, path_b)

        response_payload = result.to_dict()
        response_payload["mode"] = mode
        return response_payload

    return _handle(request, "Check", payload.model_dump(), run)


@app.post("/batch")
def batch_check(payload: BatchRequest, request: Request) -> Dict[str, Any]:
    def run() -> Dict[str, Any]:
        if payload.max_workers < 1:
            raise HTTPException(status_code=400, detail="max_workers must be at least 1")
        result = _checker.batch_check(
            Path(payload.path).expanduser(),
            payload.sample_count,
            max_workers=payload.max_workers,
        )
        return result.to_dict()

    return _handle(request, "Batch", payload.model_dump(), run)


@app.get("/offsets")
def sample_offsets(
    request: Request,
    length: int = Query(...),
    sample_count: int = Query(default=DEFAULT_SAMPLE_COUNT),
) -> Dict[str, Any]:
    def run() -> Dict[str, Any]:
        return {
            "length": length,
            "sample_count": sample_count,
            "offsets": compute_sample_offsets(length, sample_count),
        }

    return _handle(request, "Offsets", {"length": length, "sample_count": sample_count}, run)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("backend.main:app", host="0.0.0.0", port=8000, reload=True)
