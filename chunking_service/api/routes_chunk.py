from __future__ import annotations

from datetime import datetime
from datetime import timezone
from functools import lru_cache
import logging
import time
from typing import Any

from fastapi import APIRouter
from fastapi import Header
from fastapi import HTTPException
from fastapi import Request
from fastapi.concurrency import run_in_threadpool
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import pydantic
from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field

from chunking_service.api.body import parse_body
from chunking_service.api.body import to_request_fields
from chunking_service.core.config import Settings
from chunking_service.core.config import get_settings
from chunking_service.core.exceptions import ValidationError
from chunking_service.core.selector import StrategySelector
from chunking_service.core.splitters.simple import split_simple
from chunking_service.core.types import ChunkResult
from chunking_service.core.types import DegradationReason
from chunking_service.core.types import Strategy
from chunking_service.core.types import UsedStrategy

logger = logging.getLogger(__name__)

router = APIRouter()


class ChunkRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    content: str | None = Field(default=None, description="Document body to split")
    chunk_size: int | None = Field(
        default=None,
        ge=1,
        alias="chunkSize",
        description="Target chunk size in characters (default from settings)",
    )
    strategy: Strategy = Field(
        default=Strategy.INTELLIGENT, description='"simple" or "intelligent"'
    )


@lru_cache(maxsize=1)
def get_selector() -> StrategySelector:
    return StrategySelector(settings=get_settings())


def _require_api_key_if_configured(cfg: Settings, x_api_key: str | None) -> None:
    """Require x-api-key header if API auth key is configured.

    If no api_auth_key is set in configuration, this is a no-op.
    """
    if cfg.api_auth_key and x_api_key != cfg.api_auth_key:
        raise HTTPException(status_code=401, detail="Invalid or missing API key")


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def _chunk_response(
    result: ChunkResult, content_length: int, started: float
) -> dict[str, Any]:
    return {
        "success": True,
        "chunks": list(result.chunks),
        "chunkCount": result.chunk_count,
        "strategy": result.used_strategy.value,
        "degradationReason": result.degradation_reason.value,
        "contentLength": content_length,
        "processingTime": _elapsed_ms(started),
        "timestamp": _timestamp(),
    }


async def _read_chunk_request(request: Request) -> ChunkRequest:
    body = parse_body(await request.body(), request.headers.get("content-type"))
    try:
        return ChunkRequest.model_validate(to_request_fields(body))
    except pydantic.ValidationError as e:
        raise RequestValidationError(e.errors()) from e


@router.post("/chunk")
async def chunk(
    request: Request,
    x_api_key: str | None = Header(default=None, alias="x-api-key"),
) -> Any:
    started = time.perf_counter()
    cfg = get_settings()
    _require_api_key_if_configured(cfg, x_api_key)

    req = await _read_chunk_request(request)
    content_length = len(req.content or "")
    logger.info(
        "Chunking request: strategy=%s content_length=%d",
        req.strategy.value,
        content_length,
    )

    try:
        result = await run_in_threadpool(
            get_selector().select, req.content, req.chunk_size, req.strategy
        )
    except ValidationError as e:
        return JSONResponse(
            status_code=400,
            content={"success": False, "error": str(e), "chunks": [], "chunkCount": 0},
        )
    except Exception as e:
        # Last-resort net: answer with a paragraph split of the raw content
        logger.exception("Chunking failed unexpectedly")
        result = ChunkResult(
            chunks=tuple(split_simple(req.content or "", cfg.fallback_chunk_size)),
            used_strategy=UsedStrategy.FALLBACK,
            degradation_reason=DegradationReason.REQUEST_FAILED,
        )
        payload = _chunk_response(result, content_length, started)
        payload["error"] = str(e)
        return payload

    payload = _chunk_response(result, content_length, started)
    logger.info(
        "Chunking done: chunks=%d strategy=%s degradation=%s time=%dms",
        result.chunk_count,
        result.used_strategy.value,
        result.degradation_reason.value,
        payload["processingTime"],
    )
    return payload
