"""HTTP transport exposing the timer to touch bar and status bar widgets."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response

import tomato
from tomato.core.timer import Timer
from tomato.server.ticker import Ticker

logger = logging.getLogger(__name__)


def create_app(timer: Timer, ticker: Optional[Ticker] = None) -> FastAPI:
    """Build the FastAPI app serving *timer*.

    When *ticker* is given it is started and stopped with the app lifespan.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if ticker is not None:
            ticker.start()
        try:
            yield
        finally:
            if ticker is not None:
                ticker.stop()

    app = FastAPI(title="tomato", version=tomato.__version__, lifespan=lifespan)
    app.state.timer = timer

    @app.get("/", response_class=PlainTextResponse)
    def index() -> str:
        return f"Tomato v{tomato.__version__}\n"

    @app.get("/status")
    def status(request: Request) -> Response:
        current = timer.status()
        logger.info("%s", current.line)
        if request.headers.get("accept") == "application/json":
            return JSONResponse(current.record)
        return PlainTextResponse(current.timer)

    @app.get("/time", response_class=PlainTextResponse)
    def time_left() -> str:
        current = timer.status()
        logger.info("%s", current.line)
        return current.timer

    @app.post("/action/start", response_class=PlainTextResponse)
    def action_start() -> str:
        return timer.toggle().timer

    @app.post("/action/stop", response_class=PlainTextResponse)
    def action_stop() -> str:
        return timer.stop().timer

    return app
