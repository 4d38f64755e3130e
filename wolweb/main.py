"""wolweb FastAPI application factory."""

from __future__ import annotations

import argparse
import logging
import secrets
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from wolweb import __version__
from wolweb.config import AppConfig, ConfigError, Settings, get_settings, load_config

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _lifespan(app: FastAPI):
    """Startup / shutdown lifecycle."""
    config: AppConfig = app.state.config
    logger.info(
        "wolweb v%s started — %d machine(s), broadcast %s",
        __version__, len(config.machines), config.broadcast,
    )
    try:
        yield
    finally:
        logger.info("wolweb shutting down")


def _setup_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


async def _request_logging(request: Request, call_next):
    """Tag each request with a random id and log its timing."""
    start = time.perf_counter()
    request_id = secrets.token_hex(6)
    request.state.request_id = request_id
    logger.debug(
        "Received request id=%s method=%s path=%s agent=%s",
        request_id, request.method, request.url.path, request.headers.get("user-agent", ""),
    )
    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    logger.debug(
        "Response sent id=%s status=%d took=%.1fms",
        request_id, response.status_code, (time.perf_counter() - start) * 1000,
    )
    return response


def create_app(config: AppConfig | None = None, settings: Settings | None = None) -> FastAPI:
    """Application factory. Loads ``settings.config_path`` unless ``config`` is given."""
    from wolweb.api.routes import api_router
    from wolweb.api.routes.pages import router as pages_router

    settings = settings or get_settings()
    if config is None:
        config = load_config(settings.config_path)

    app = FastAPI(
        title=settings.app_name,
        version=__version__,
        debug=settings.debug,
        lifespan=_lifespan,
    )
    app.state.config = config

    app.middleware("http")(_request_logging)

    app.include_router(api_router, prefix="/api")
    app.include_router(pages_router)

    return app


def main(argv: list[str] | None = None) -> int:
    import uvicorn

    parser = argparse.ArgumentParser(prog="wolweb", description="Wake-on-LAN web form")
    parser.add_argument("--config", help="Path to the JSON machine configuration file")
    args = parser.parse_args(argv)

    settings = get_settings()
    if args.config:
        settings = settings.model_copy(update={"config_path": args.config})
    _setup_logging(settings)

    try:
        config = load_config(settings.config_path)
    except ConfigError as e:
        logger.error("%s", e)
        return 1

    logger.info("Starting service on http://%s", config.address)
    uvicorn.run(
        create_app(config, settings),
        host=config.host,
        port=config.port,
        log_level=settings.log_level.lower(),
    )
    logger.info("Exiting")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
