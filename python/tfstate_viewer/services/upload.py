"""
tfstate_viewer/services/upload.py

An aiohttp application accepting Terraform state uploads:

  POST /upload     multipart form with a "file" field. Responds with the
                   normalized state as camelCase JSON, or {"error": ...}.
  OPTIONS /upload  CORS preflight.

Every response, errors included, carries the configured CORS headers.
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, MutableMapping, Optional

from aiohttp import BodyPartReader, web

from tfstate_viewer.models.server_settings import ServerSettings
from tfstate_viewer.state.parse import StateDecodeError, parse_state

logger = logging.getLogger(__name__)

SETTINGS_KEY = web.AppKey("settings", ServerSettings)

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]


class UploadError(Exception):
    """A rejected upload, mapped to an HTTP status and a JSON error body.

    Attributes:
        status (int): HTTP status code.
    """

    def __init__(self, message: str, status: int = 400) -> None:
        super().__init__(message)
        self.status = status


def _apply_cors(headers: MutableMapping[str, str], settings: ServerSettings) -> None:
    headers["Access-Control-Allow-Origin"] = settings.allow_origin
    headers["Access-Control-Allow-Methods"] = "POST, OPTIONS"
    headers["Access-Control-Allow-Headers"] = "Content-Type"


@web.middleware
async def cors_middleware(request: web.Request, handler: Handler) -> web.StreamResponse:
    settings = request.app[SETTINGS_KEY]
    try:
        response = await handler(request)
    except web.HTTPException as exc:
        _apply_cors(exc.headers, settings)
        raise
    _apply_cors(response.headers, settings)
    return response


async def handle_preflight(request: web.Request) -> web.Response:
    return web.Response(status=204)


async def _read_upload(request: web.Request, limit: int) -> bytes:
    """Read the "file" part of a multipart upload, enforcing `limit` bytes.

    Raises:
        UploadError: If the request is not multipart, lacks a file part, or the
            file exceeds the limit.
    """
    if not request.content_type.startswith("multipart/"):
        raise UploadError(
            f"Failed to read the file: expected multipart/form-data, got {request.content_type}"
        )

    reader = await request.multipart()
    while True:
        part = await reader.next()
        if part is None:
            break
        if not isinstance(part, BodyPartReader) or part.name != "file":
            continue

        chunks = []
        size = 0
        while True:
            chunk = await part.read_chunk()
            if not chunk:
                break
            size += len(chunk)
            if size > limit:
                raise UploadError(
                    f"File exceeds the maximum upload size of {limit} bytes", status=413
                )
            chunks.append(chunk)
        return b"".join(chunks)

    raise UploadError('Failed to read the file: no "file" field in upload')


async def handle_upload(request: web.Request) -> web.Response:
    """Normalize an uploaded state file and return it as JSON."""
    settings = request.app[SETTINGS_KEY]
    try:
        data = await _read_upload(request, settings.max_upload_bytes)
    except UploadError as exc:
        logger.warning("Error while retrieving file: %s", exc)
        return web.json_response({"error": str(exc)}, status=exc.status)

    logger.info("Received file with size: %d bytes", len(data))
    logger.info(
        "File content preview (first 100 characters): %s",
        data[:100].decode("utf-8", errors="replace"),
    )

    try:
        state = parse_state(data)
    except StateDecodeError as exc:
        logger.warning("Error while parsing file content: %s", exc)
        return web.json_response({"error": f"Failed to parse JSON: {exc}"}, status=400)

    try:
        body = state.model_dump(mode="json", by_alias=True)
        return web.json_response(body)
    except (ValueError, RecursionError) as exc:
        logger.warning("Error while serializing normalized state: %s", exc)
        return web.json_response(
            {"error": f"Failed to serialize state: {exc}"}, status=422
        )


def create_app(settings: Optional[ServerSettings] = None) -> web.Application:
    """Build the upload application.

    Args:
        settings (Optional[ServerSettings]): Defaults to ServerSettings() (env-driven).

    Returns:
        web.Application: Ready for `web.run_app` or an aiohttp test client.
    """
    if settings is None:
        settings = ServerSettings()
    app = web.Application(middlewares=[cors_middleware])
    app[SETTINGS_KEY] = settings
    app.router.add_post("/upload", handle_upload)
    app.router.add_route("OPTIONS", "/upload", handle_preflight)
    return app


def run(settings: Optional[ServerSettings] = None) -> None:
    """Serve the upload application until interrupted."""
    if settings is None:
        settings = ServerSettings()
    logger.info("Starting server on %s:%d...", settings.host, settings.port)
    web.run_app(create_app(settings), host=settings.host, port=settings.port)
