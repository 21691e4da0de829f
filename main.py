import logging
import os
from contextlib import asynccontextmanager

import httpx
from fastapi import Depends, FastAPI, Query, Request
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from edge_cache import EdgeCache, TTLCache
from errors import StatusProxyError
from origin import cors_headers, preflight_headers, resolve_origin
from settings import Settings, get_settings
from status import get_status

log = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.settings = get_settings()
    yield


app = FastAPI(title="uptime-status-proxy", lifespan=lifespan)

edge_cache = TTLCache()


def current_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_cache() -> EdgeCache:
    return edge_cache


async def get_http_client():
    async with httpx.AsyncClient(timeout=None, follow_redirects=True) as client:
        yield client


def json_response(data, status_code: int, allowed_origin: str) -> Response:
    return JSONResponse(data, status_code=status_code, headers=cors_headers(allowed_origin))


def _allowed_origin(request: Request) -> str:
    return getattr(request.state, "allowed_origin", "*")


@app.middleware("http")
async def cors(request: Request, call_next):
    settings = current_settings(request)
    allowed_origin = resolve_origin(settings.allowed_origin, request.headers.get("origin"))
    request.state.allowed_origin = allowed_origin

    # preflight for any path
    if request.method == "OPTIONS":
        return Response(status_code=204, headers=preflight_headers(allowed_origin))
    return await call_next(request)


@app.exception_handler(StatusProxyError)
async def status_proxy_error_handler(request: Request, exc: StatusProxyError):
    return json_response({"message": exc.message}, exc.status_code, _allowed_origin(request))


@app.exception_handler(StarletteHTTPException)
async def http_exc_handler(request: Request, exc: StarletteHTTPException):
    response = json_response({"message": exc.detail}, exc.status_code, _allowed_origin(request))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


@app.get("/healthz")
async def healthz(request: Request):
    return json_response({"ok": True}, 200, _allowed_origin(request))


@app.get("/api/get-status")
async def api_get_status(
    request: Request,
    monitor: str | None = Query(default=None),
    settings: Settings = Depends(current_settings),
    cache: EdgeCache = Depends(get_cache),
    client: httpx.AsyncClient = Depends(get_http_client),
):
    body, cache_state = await get_status(monitor, settings, cache, client)
    headers = cors_headers(_allowed_origin(request))
    headers["X-Cache"] = cache_state
    return Response(content=body, status_code=200, media_type="application/json", headers=headers)


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    settings = get_settings()
    log.info("server_start host=%s port=%d", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)
