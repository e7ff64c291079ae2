"""
FastAPI server for the use case search API.

Exposes ``POST /use-cases`` for searches and ``GET /use-cases`` as a
status check.
"""

import asyncio
import threading
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger

from .config import configure_logging, load_settings
from .errors import UseCaseFinderError, ValidationError
from .models import parse_search_query
from .pipeline import UseCaseSearchPipeline, build_pipeline

app = FastAPI(
    title="Use Case Finder",
    description="Semantic search over partner use cases",
)

_pipeline: UseCaseSearchPipeline | None = None
_pipeline_lock = threading.Lock()


def get_pipeline() -> UseCaseSearchPipeline:
    """Return the process-wide pipeline, building it on first use."""
    global _pipeline
    with _pipeline_lock:
        if _pipeline is None:
            _pipeline = build_pipeline()
        return _pipeline


def set_pipeline(pipeline: UseCaseSearchPipeline | None) -> None:
    """Replace the process-wide pipeline (``None`` rebuilds it lazily)."""
    global _pipeline
    with _pipeline_lock:
        _pipeline = pipeline


def _error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


@app.get("/use-cases")
async def use_cases_status():
    """Report that the API is up."""
    return {
        "message": "Use Cases API is running",
        "method": "Use POST to search for use cases",
    }


@app.post("/use-cases")
async def search_use_cases(request: Request):
    """Return the use cases most similar to the submitted description."""
    body: Any
    try:
        body = await request.json()
    except ValueError:
        body = None

    try:
        query = parse_search_query(body)
        if not query.has_description():
            raise ValidationError("description is required")
    except ValidationError as exc:
        logger.debug("Rejected search request: {}", exc.message)
        message = exc.message[:1].upper() + exc.message[1:]
        return _error_response(message, exc.status_code)

    try:
        pipeline = get_pipeline()
        result = await asyncio.to_thread(pipeline.search, query)
    except UseCaseFinderError as exc:
        logger.error("Error searching use cases: {}", exc.message)
        return _error_response(exc.message, exc.status_code)
    except Exception as exc:
        logger.exception("Unexpected error searching use cases")
        return _error_response(str(exc) or "Failed to search use cases", 500)

    return result.to_payload()


def run_server(host: str = "127.0.0.1", port: int = 8000):
    """Run the FastAPI server."""
    import uvicorn

    configure_logging(load_settings().log_level)
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    run_server()
