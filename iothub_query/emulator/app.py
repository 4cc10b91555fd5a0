"""FastAPI emulator of the IoT Hub query endpoints."""

import logging
import re
from typing import Any, Dict, List, Optional, Tuple

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from ..config import Settings, get_settings
from ..models.query_type import QueryType
from ..pagination.headers import CONTINUATION_TOKEN_HEADER, ITEM_TYPE_HEADER, PAGE_SIZE_HEADER
from ..serializer import QueryRequest
from .handlers import register_exception_handlers
from .problems import BadRequestError, UnauthorizedError
from .store import DEVICE_JOBS, DEVICES, JOBS, QueryStore
from .tokens import ContinuationData, decode_token, encode_token

logger = logging.getLogger(__name__)

_FROM_PATTERN = re.compile(r"\bfrom\s+([\w.]+)", re.IGNORECASE)
_SELECT_ALL_PATTERN = re.compile(r"^\s*select\s+\*\s+from\b", re.IGNORECASE)


def classify_query(query: str) -> Tuple[str, QueryType]:
    """Pick the collection and item type a query reads.

    Args:
        query: SQL-like query text

    Returns:
        Tuple of (collection, item type)

    Raises:
        BadRequestError: If the query does not read a known collection
    """
    match = _FROM_PATTERN.search(query)
    if not match:
        raise BadRequestError("Query has no from clause")

    collection = match.group(1).lower()
    if collection == DEVICE_JOBS:
        return DEVICE_JOBS, QueryType.DEVICE_JOB
    if collection == DEVICES:
        if _SELECT_ALL_PATTERN.match(query):
            return DEVICES, QueryType.TWIN
        return DEVICES, QueryType.RAW

    raise BadRequestError(f"Unsupported collection: {collection}")


def create_app(store: Optional[QueryStore] = None, settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure the emulator application."""
    settings = settings or get_settings()
    store = store if store is not None else QueryStore()

    app = FastAPI(
        title="IoT Hub Query Emulator",
        description="Serves paginated twin and job queries from memory",
        version="1.0.0"
    )
    app.state.store = store
    app.state.settings = settings

    register_exception_handlers(app)

    def authorize(request: Request) -> None:
        if settings.emulator_token is None:
            return
        if request.headers.get("authorization") != settings.emulator_token:
            logger.warning(f"Rejected unauthorized query request to {request.url.path}")
            raise UnauthorizedError("Invalid or missing shared access signature")

    def page_size_of(request: Request) -> int:
        raw = request.headers.get(PAGE_SIZE_HEADER)
        if raw is None:
            return settings.default_page_size
        try:
            page_size = int(raw)
        except ValueError:
            raise BadRequestError(f"Invalid {PAGE_SIZE_HEADER} header: {raw!r}")
        if page_size < 1:
            raise BadRequestError(f"{PAGE_SIZE_HEADER} must be positive")
        return page_size

    def position_of(request: Request, collections: Tuple[str, ...]) -> Optional[ContinuationData]:
        token = request.headers.get(CONTINUATION_TOKEN_HEADER)
        if token is None:
            return None
        position = decode_token(token)
        if position.collection not in collections:
            raise BadRequestError("Continuation token does not belong to this endpoint")
        return position

    @app.post("/devices/query", tags=["Query"])
    async def query_devices(request: Request) -> JSONResponse:
        """Run a twin, device job or raw query."""
        authorize(request)
        page_size = page_size_of(request)

        position = position_of(request, (DEVICES, DEVICE_JOBS))
        if position is None:
            try:
                query_request = QueryRequest.model_validate_json(await request.body())
            except ValidationError as e:
                raise BadRequestError(f"Invalid query request body: {e}")

            collection, item_type = classify_query(query_request.query)
            position = ContinuationData(offset=0, collection=collection, item_type=item_type.value)

        rows = store.rows(position.collection)
        return _page_response(rows, position, page_size)

    @app.get("/jobs/v2/query", tags=["Query"])
    async def query_jobs(
        request: Request,
        jobType: Optional[str] = None,
        jobStatus: Optional[str] = None
    ) -> JSONResponse:
        """List job responses."""
        authorize(request)
        page_size = page_size_of(request)

        position = position_of(request, (JOBS,))
        if position is None:
            position = ContinuationData(
                offset=0,
                collection=JOBS,
                item_type=QueryType.JOB_RESPONSE.value,
                job_type=jobType,
                job_status=jobStatus
            )

        rows = store.rows(JOBS, position.job_type, position.job_status)
        return _page_response(rows, position, page_size)

    @app.get("/live", tags=["Health"])
    async def liveness_check() -> Dict[str, str]:
        """Liveness check endpoint."""
        return {
            "status": "alive",
            "service": "IoT Hub Query Emulator"
        }

    return app


def _page_response(rows: List[Dict[str, Any]], position: ContinuationData, page_size: int) -> JSONResponse:
    end = position.offset + page_size
    headers = {ITEM_TYPE_HEADER: position.item_type}
    if end < len(rows):
        headers[CONTINUATION_TOKEN_HEADER] = encode_token(position.model_copy(update={"offset": end}))

    logger.debug(
        f"Serving {position.item_type} rows {position.offset}-{min(end, len(rows))} of {len(rows)}"
    )
    return JSONResponse(content=rows[position.offset:end], headers=headers)
