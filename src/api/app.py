"""
FastAPI application factory.

* Registers the distance-matrix proxy and admin routes.
* Installs the centralised error handlers (``success: false`` bodies).
* Applies rate-limiting middleware.
* Swagger / OpenAPI UI available at ``/docs``.
"""

import logging

from fastapi import FastAPI
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from src.api import errors
from src.api.middleware import limiter
from src.api.routes import admin, distance
from src.config import settings

logging.basicConfig(level=settings.log_level)


def create_app() -> FastAPI:
    app = FastAPI(
        title="Delivery Admin API",
        description=(
            "Backend of the delivery admin dashboard.  Proxies the Google "
            "Distance Matrix API so the provider key never reaches the "
            "browser."
        ),
        version="1.0.0",
    )
    app.state.settings = settings

    # Rate limiter
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    errors.install(app)

    # Routers
    app.include_router(distance.router, prefix="/api/v1")
    app.include_router(admin.router, prefix="/api/v1")

    return app
