from datetime import date
from typing import Callable, Optional

import httpx
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.config import get_settings, Settings
from .core.logging import init_logging, request_context_middleware
from .core import errors
from .routers import health, rates, ui
from .services.board import BoardController
from .services.rates.providers import make_rate_selector


def create_app(
    settings_override: Settings | None = None,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    today: Callable[[], date] = date.today,
) -> FastAPI:
    """Application factory.

    settings_override: pass an already constructed Settings instance for tests
    to isolate environment. Falls back to cached get_settings().
    transport / today: stand-ins for the upstream HTTP services and the clock.
    """
    settings = settings_override or get_settings()
    # Initialize logging early
    init_logging(debug=settings.debug)

    app = FastAPI(
        title=settings.app_name, debug=settings.debug, version=settings.version
    )

    # One selector for the stateless API, one board controller for the UI
    selector = make_rate_selector(settings, transport=transport, today=today)
    app.state.settings = settings
    app.state.rate_selector = selector
    app.state.board = BoardController(
        selector, base_currency=settings.default_base_currency
    )

    # Middleware (request id / structured logging)
    app.middleware("http")(request_context_middleware)

    # Error handlers
    app.add_exception_handler(StarletteHTTPException, errors.http_error_handler)
    app.add_exception_handler(RequestValidationError, errors.validation_error_handler)
    app.add_exception_handler(errors.UnsupportedCurrencyError, errors.bad_input_handler)
    app.add_exception_handler(errors.FutureDateError, errors.bad_input_handler)
    app.add_exception_handler(errors.RateFetchError, errors.rate_fetch_error_handler)
    app.add_exception_handler(Exception, errors.server_error_handler)

    # Routers
    app.include_router(health.router)
    app.include_router(rates.router)
    app.include_router(ui.router)

    return app


app = create_app()
