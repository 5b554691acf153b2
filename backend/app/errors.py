import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

GENERIC_DB_ERROR_MESSAGE = "Database error. Please try again later."

logger = logging.getLogger(__name__)


class InvalidArgument(ValueError):
    """A save was attempted without the key it needs (e.g. a dependent with no plant_id)."""


class ConnectivityFailure(Exception):
    """The store could not be reached or rejected a statement.

    Wraps any PyMySQL error; ``str(exc)`` is the driver's message.
    """


def register_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers.

    - Map store failures to HTTP 500 with a generic message.
    - Map InvalidArgument to HTTP 400 with its message.
    - Do NOT override HTTPException handling provided by FastAPI.
    """

    @app.exception_handler(ConnectivityFailure)
    async def connectivity_failure_handler(request: Request, exc: Exception) -> JSONResponse:  # noqa: ANN001
        logger.error("Store failure on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=500, content={"detail": GENERIC_DB_ERROR_MESSAGE})

    @app.exception_handler(InvalidArgument)
    async def invalid_argument_handler(request: Request, exc: Exception) -> JSONResponse:  # noqa: ANN001
        return JSONResponse(status_code=400, content={"detail": str(exc)})
