"""
HTTP API for the catalog store.

Exposes record creation and search as JSON endpoints:

    POST /records          {"record": "<yaml>"}
    POST /records/search   {"joinMethod": "and", "searchTerms": [{"field", "query"}]}
    GET  /health
"""

import json
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from starlette.applications import Starlette
from starlette.concurrency import run_in_threadpool
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from ..core import get_logger, QueryShapeError, RecordValidationError, SearchTimeoutError
from ..store import CatalogStore

logger = get_logger(__name__)

CREATED_MESSAGE = "The record was added successfully."


async def _read_json_object(request: Request) -> Optional[dict]:
    """Decode the request body as a JSON object, or None if it is not one."""
    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None
    return payload if isinstance(payload, dict) else None


def _error(message: str, status_code: int, fields: list = None) -> JSONResponse:
    body = {"error": message}
    if fields:
        body["fields"] = fields
    return JSONResponse(body, status_code=status_code)


def create_app(store: CatalogStore = None) -> Starlette:
    """
    Build the Starlette application around a catalog store.

    Args:
        store: Store to serve. A new one is created from config if omitted.

    Returns:
        Configured Starlette application; the store is available as
        app.state.store.
    """
    store = store or CatalogStore()

    async def create_record(request: Request) -> JSONResponse:
        payload = await _read_json_object(request)
        if payload is None or not isinstance(payload.get("record"), str):
            return _error("request body must be a JSON object with a 'record' string", 400)

        try:
            await run_in_threadpool(store.append, payload["record"])
        except RecordValidationError as e:
            return _error(e.message, 400, e.fields)

        return JSONResponse({"message": CREATED_MESSAGE}, status_code=201)

    async def search_records(request: Request) -> JSONResponse:
        payload = await _read_json_object(request)
        if payload is None:
            return _error("request body must be a JSON object", 400)

        terms = payload.get("searchTerms")
        if terms is not None and not isinstance(terms, list):
            return _error("'searchTerms' must be a list", 400)

        try:
            records = await run_in_threadpool(
                store.search, payload.get("joinMethod"), terms or []
            )
        except QueryShapeError as e:
            return _error(e.message, 400, e.details.get("fields"))
        except SearchTimeoutError as e:
            return _error(e.message, 504)

        return JSONResponse({"records": [record.to_yaml() for record in records]})

    async def health(_: Request) -> JSONResponse:
        return JSONResponse({"status": "ok", "records": len(store)})

    routes = [
        Route("/records", endpoint=create_record, methods=["POST"]),
        Route("/records/search", endpoint=search_records, methods=["POST"]),
        Route("/health", endpoint=health, methods=["GET"]),
    ]

    @asynccontextmanager
    async def lifespan(_: Starlette) -> AsyncIterator[None]:
        yield
        store.close()

    app = Starlette(routes=routes, lifespan=lifespan)
    app.state.store = store

    logger.debug("API application created")
    return app
