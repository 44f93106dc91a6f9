"""FastAPI application exposing the HTML attribute filter.

Exports ``app`` for use with ``uvicorn main:app``.  The transform itself
lives in ``parsing.filtering`` and is usable as a plain library; this
service only lets report/diff tooling in other processes call it.
"""

import json
import logging
import os
import traceback
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

# Load .env from the project directory so ATTRFILTER_LOG_LEVEL is set
load_dotenv(Path(__file__).resolve().parent / ".env")

from models.matchers import compile_rules
from models.request import FilterRequest
from models.response import FilterResponse
from parsing.filtering import apply_rules


# ---------------------------------------------------------------------------
# Structured JSON logging
# ---------------------------------------------------------------------------

class StructuredFormatter(logging.Formatter):
    """JSON-lines formatter for structured log output."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        # Include optional extra fields when present
        for key in ("html_length", "rules", "removed"):
            val = getattr(record, key, None)
            if val is not None:
                log_data[key] = val
        if record.exc_info and record.exc_info[0] is not None:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data)


def _resolve_log_level(name: str) -> int:
    """Map a level name to its number, falling back to INFO if unknown."""
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.INFO


_handler = logging.StreamHandler()
_handler.setFormatter(StructuredFormatter())

logger = logging.getLogger("attrfilter")
logger.addHandler(_handler)
logger.setLevel(_resolve_log_level(os.getenv("ATTRFILTER_LOG_LEVEL", "INFO")))
# Prevent propagation to root logger to avoid duplicate output
logger.propagate = False


# ---------------------------------------------------------------------------
# FastAPI application
# ---------------------------------------------------------------------------

app = FastAPI(title="HTML Attribute Filter")


# ---------------------------------------------------------------------------
# Global exception handler
# ---------------------------------------------------------------------------

@app.exception_handler(Exception)
async def catch_all_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch all unhandled exceptions and return a JSON 500."""
    logger.error(
        "Unhandled exception: %s: %s\n%s",
        type(exc).__name__,
        exc,
        traceback.format_exc(),
    )
    return JSONResponse(status_code=500, content={"detail": "internal error"})


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@app.get("/health")
async def health() -> dict:
    """Health check."""
    return {"status": "healthy"}


@app.post("/filter", response_model=FilterResponse)
async def filter_html(request: FilterRequest) -> FilterResponse:
    """Remove the attributes matching ``filter_attrs`` from ``html``."""
    rules = compile_rules(request.filter_attrs)
    logger.info(
        "filter request",
        extra={"html_length": len(request.html), "rules": sorted(rules)},
    )

    try:
        html, removed = apply_rules(request.html, rules)
    except Exception:
        # Filtering is best-effort; hand the markup back untouched
        logger.exception("filtering failed, returning input unchanged")
        return FilterResponse(html=request.html, removed=0)

    logger.info("filter response", extra={"removed": removed})
    return FilterResponse(html=html, removed=removed)
