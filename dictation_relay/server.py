"""FastAPI server relaying dictation audio to Deepgram over WebSocket sessions."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from collections.abc import Callable, Awaitable

from fastapi import FastAPI, WebSocket
from fastapi.responses import ORJSONResponse

from dictation_relay.state.runtime import RuntimeDeps
from dictation_relay.runtime.logging import configure_logging
from dictation_relay.config.websocket import WS_ALT_ENDPOINT_PATH
from dictation_relay.runtime.settings_loader import load_websocket_settings
from dictation_relay.runtime.dependencies import build_runtime_deps
from dictation_relay.handlers.websocket.manager import handle_websocket_connection

logger = logging.getLogger(__name__)

configure_logging()

DepsFactory = Callable[[], Awaitable[RuntimeDeps]]


def _runtime_deps(app: FastAPI) -> RuntimeDeps:
    runtime_deps = getattr(app.state, "runtime_deps", None)
    if runtime_deps is None:
        raise RuntimeError("Runtime dependencies are not initialized")
    return runtime_deps


def create_app(deps_factory: DepsFactory = build_runtime_deps, *, ws_path: str | None = None) -> FastAPI:
    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        app.state.runtime_deps = await deps_factory()
        logger.info("runtime: ready")
        try:
            yield
        finally:
            deps = getattr(app.state, "runtime_deps", None)
            if deps is not None:
                await deps.shutdown()

    app = FastAPI(default_response_class=ORJSONResponse, lifespan=_lifespan)

    @app.get("/")
    async def root() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/health")
    async def health() -> dict[str, object]:
        return {"status": "ok", "sessions": len(_runtime_deps(app).sessions)}

    @app.get("/healthz")
    async def healthz() -> dict[str, object]:
        return {"status": "ok", "sessions": len(_runtime_deps(app).sessions)}

    @app.get("/health/provider")
    async def provider_health() -> dict[str, object]:
        status = await _runtime_deps(app).broker.check()
        return {
            "provider": "deepgram",
            "configured": status.configured,
            "reachable": status.reachable,
            "detail": status.detail,
        }

    async def websocket_endpoint(websocket: WebSocket) -> None:
        await handle_websocket_connection(websocket, _runtime_deps(app))

    for path in {ws_path or load_websocket_settings().endpoint_path, WS_ALT_ENDPOINT_PATH}:
        app.add_api_websocket_route(path, websocket_endpoint)

    return app


app = create_app()

__all__ = ["app", "create_app"]
