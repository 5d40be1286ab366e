"""
FastAPI Application Entry Point

WhatsApp → Camunda relay (Basic auth to Camunda Webhook Start)
  - GET  /wa/webhook : Meta verification (hub.challenge)
  - POST /wa/webhook : Verify X-Hub-Signature-256, normalize payload, forward to Camunda
  - GET  /healthz    : Liveness probe

Run: python main.py
"""

import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from config import ConfigurationError, RelayConfig, get_config
from transport.camunda.forwarder import CamundaForwarder
from transport.whatsapp.webhook import router as whatsapp_router

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(config: RelayConfig) -> None:
    """Configure root logging from LOG_LEVEL (silent/info/debug)."""
    logging.basicConfig(
        level=config.logging_level,
        format=LOG_FORMAT,
        force=True,
    )


def create_app(config: RelayConfig) -> FastAPI:
    """
    Build the relay application around an already validated config.

    The config and the Camunda forwarder live on app.state and reach the
    routes through dependencies; nothing reads the environment per request.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"WA→Camunda relay listening on :{config.port}")
        yield
        logger.info("WA→Camunda relay shutting down...")

    app = FastAPI(
        title="WA→Camunda Relay",
        description="Relays WhatsApp Cloud API webhooks to a Camunda webhook start event",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.forwarder = CamundaForwarder(config)

    # Middleware for logging
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log all requests."""
        logger.debug(f"{request.method} {request.url.path}")
        try:
            return await call_next(request)
        except Exception as e:
            logger.error(f"Request error: {str(e)}", exc_info=True)
            return JSONResponse(
                status_code=500,
                content={"detail": "Internal server error"},
            )

    app.include_router(whatsapp_router)

    @app.get("/healthz", response_class=PlainTextResponse)
    async def healthz():
        """Liveness probe."""
        return "ok"

    return app


def main() -> int:
    # stderr, until LOG_LEVEL is known
    logging.basicConfig(format=LOG_FORMAT)

    try:
        config = get_config()
    except ConfigurationError as e:
        logger.error(str(e))
        return 1

    setup_logging(config)

    import uvicorn

    uvicorn.run(
        create_app(config),
        host=config.host,
        port=config.port,
        log_level=logging.getLevelName(config.logging_level).lower(),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
