from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    load_dotenv("local.env")

    # Imported after load_dotenv so KV_* settings from local.env apply to the store.
    from endpoints.kv_endpoints import SETTINGS, router as kv_router

    app = FastAPI(title="flatkv")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(kv_router)

    logger.info("Serving key-value store backed by %s", SETTINGS.data_file)
    return app


app = create_app()
