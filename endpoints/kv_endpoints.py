from __future__ import annotations

import json
import logging
from typing import Any

from fastapi import APIRouter, HTTPException, Query, Request
from fastapi.responses import JSONResponse

from persistence import repositories as persistence_repositories
from persistence.errors import ConflictError, InvalidDocumentError, InvalidKeyError, NotFoundError
from persistence.interfaces import KVEntry
from persistence.kv_store import KVStore
from settings import get_settings

router = APIRouter(tags=["kv"])
logger = logging.getLogger(__name__)

SETTINGS = get_settings()
DEBUG_LOG_REQUESTS = SETTINGS.debug_log_requests

# Hydrates from disk on import; a corrupt file aborts startup here.
KV_REPO = persistence_repositories.AsyncDiskKVRepository(
    KVStore(SETTINGS.data_file, key_length=SETTINGS.key_length)
)


async def _read_document(request: Request) -> Any:
    body = await request.body()
    if DEBUG_LOG_REQUESTS:
        logger.info("KV REQUEST: %s %s len=%d", request.method, request.url.path, len(body))
    try:
        return json.loads(body)
    except ValueError:
        raise HTTPException(status_code=400, detail="request body must be a JSON document")


def _key_response(key: str) -> dict[str, str]:
    return {"key": key}


@router.post("/kv")
async def create_key(request: Request) -> dict[str, str]:
    value = await _read_document(request)
    try:
        key = await KV_REPO.create(value)
    except InvalidDocumentError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return _key_response(key)


@router.post("/kv/{key}")
async def create_key_with_key(key: str, request: Request) -> dict[str, str]:
    value = await _read_document(request)
    try:
        await KV_REPO.create_with_key(key, value)
    except ConflictError:
        raise HTTPException(status_code=409, detail="Key already exists")
    except (InvalidDocumentError, InvalidKeyError) as e:
        raise HTTPException(status_code=422, detail=str(e))
    return _key_response(key)


@router.patch("/kv/{key}")
async def upsert_key(key: str, request: Request) -> dict[str, str]:
    value = await _read_document(request)
    try:
        await KV_REPO.upsert(key, value)
    except (InvalidDocumentError, InvalidKeyError) as e:
        raise HTTPException(status_code=422, detail=str(e))
    return _key_response(key)


@router.get("/kv/{key}")
async def get_key(key: str) -> JSONResponse:
    try:
        value = await KV_REPO.get(key)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Key not found")
    return JSONResponse(content=value)


@router.delete("/kv/{key}")
async def delete_key(key: str) -> dict[str, str]:
    try:
        await KV_REPO.delete(key)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Key not found")
    return _key_response(key)


@router.get("/kv")
async def list_keys(
    skip: int = Query(0, ge=0),
    limit: int | None = Query(None, ge=0),
) -> list[KVEntry]:
    window = SETTINGS.default_list_limit if limit is None else limit
    try:
        return await KV_REPO.list(skip, window)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="No keys found")


@router.get("/healthz")
async def healthz() -> dict[str, Any]:
    return {"status": "ok", "keys": await KV_REPO.count()}
