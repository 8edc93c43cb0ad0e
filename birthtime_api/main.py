"""FastAPI backend for the birth time prediction form."""

from __future__ import annotations

import asyncio
import json
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.datastructures import UploadFile

from birthtime import config as core_config
from birthtime import reading
from birthtime.models import BirthDataError, BirthFormData, UploadedPhoto
from birthtime.openai_client import ChatClient
from birthtime_api import config

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # startup
    core_config.setup_logging()
    app.state.llm_client = ChatClient.from_env()
    if not app.state.llm_client.configured:
        logger.warning("OPENAI_API_KEY is not set; predictions will fail.")
    yield


app = FastAPI(title="Birth Time Predictor API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.get_allowed_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_llm_client(request: Request) -> ChatClient:
    """Process-wide chat client created at startup."""
    client = getattr(request.app.state, "llm_client", None)
    if client is None:
        client = ChatClient.from_env()
        request.app.state.llm_client = client
    return client


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.warning("Rejected request to %s: %s", request.url.path, exc.errors())
    return error_response(400, "Invalid birth data format")


async def read_photo(photo) -> Optional[UploadedPhoto]:
    """Uploaded image, or None when the field is absent, empty or not a file."""
    if not isinstance(photo, UploadFile):
        return None
    content = await photo.read()
    if not content:
        return None
    return UploadedPhoto(content=content, mime_type=photo.content_type or "")


@app.get("/api/health")
async def health():
    """Simple healthcheck."""
    return {"status": "ok"}


@app.get("/api/debug/info")
async def debug_info(client: ChatClient = Depends(get_llm_client)):
    """Lightweight diagnostics (no secrets)."""
    return {
        "ok": True,
        "debug": {
            "openai_configured": client.configured,
            "model": client.model,
        },
    }


@app.post("/api/generate-reading")
async def generate_reading(request: Request, client: ChatClient = Depends(get_llm_client)):
    """Predict a birth time from the submitted form."""
    try:
        form = await request.form()
    except Exception:  # pylint: disable=broad-except
        logger.warning("Unreadable form body on generate-reading")
        return error_response(400, "Invalid birth data format")

    birth_data = form.get("birthData")
    photo = form.get("photo")
    if birth_data is None:
        return error_response(400, "Birth data is required")
    if not isinstance(birth_data, str):
        return error_response(400, "Invalid birth data format")
    try:
        payload = json.loads(birth_data)
    except ValueError:
        return error_response(400, "Invalid birth data format")
    if payload is None:
        return error_response(400, "Birth data is required")
    try:
        birth = BirthFormData.from_dict(payload)
    except BirthDataError:
        return error_response(400, "Invalid birth data format")

    try:
        uploaded = await read_photo(photo)
        result = await asyncio.to_thread(reading.generate_reading, client, birth, uploaded)
    except Exception:  # pylint: disable=broad-except
        logger.exception("Error generating birth time reading")
        return error_response(500, "Failed to generate reading")

    return {"prediction": result.prediction}
