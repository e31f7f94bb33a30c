"""
Product Catalog Backend — Error Translation
=============================================

What:  Maps every error that escapes a route handler to a JSON response.
How:   One ordered table, ERROR_TRANSLATIONS. `translate_error` walks it
       top to bottom and the first entry whose kinds match the exception
       produces the response. More specific kinds sit above the catch-all.
Who:   Registered on the app by `register_exception_handlers` (main.py);
       exceptions no handler claims reach `translate_error` through
       catalog.middleware.errors.UnhandledErrorMiddleware.

Resolution order:
    1. validation   ValidationError, RequestValidationError  → 400
    2. not_found    NotFoundError                            → 404
    3. http         Starlette HTTPException (unknown route,  → exc.status_code
                    method not allowed, ...)
    4. generic      anything else                            → 500 "Generic error"

Every body has the shape {"message": "..."}. Internal details (stack
traces, SQL, error context) only go to the server log.
"""

import logging
from typing import Any, Callable, Mapping, NamedTuple, Sequence, Tuple, Type

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from catalog.exceptions import CatalogError, NotFoundError, ValidationError
from catalog.middleware.request_id import request_id_var

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Generic error"


def summarize_validation_errors(errors: Sequence[Mapping[str, Any]]) -> str:
    """
    Collapse Pydantic error entries into one readable message.

    Example:
        [{"loc": ("body", "name"), "msg": "Field required"}]
        → "Product validation failed: name: Field required"
    """
    parts = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        field = ".".join(loc) or "body"
        parts.append(f"{field}: {error.get('msg', 'invalid value')}")
    return "Product validation failed: " + "; ".join(parts)


def _validation_message(exc: Exception) -> str:
    if isinstance(exc, RequestValidationError):
        return summarize_validation_errors(exc.errors())
    return exc.message


class ErrorTranslation(NamedTuple):
    """One row of the translation table."""
    name: str
    kinds: Tuple[Type[BaseException], ...]
    status_code: Callable[[Exception], int]
    message: Callable[[Exception], str]
    log_level: int


ERROR_TRANSLATIONS: Tuple[ErrorTranslation, ...] = (
    ErrorTranslation(
        name="validation",
        kinds=(ValidationError, RequestValidationError),
        status_code=lambda exc: 400,
        message=_validation_message,
        log_level=logging.WARNING,
    ),
    ErrorTranslation(
        name="not_found",
        kinds=(NotFoundError,),
        status_code=lambda exc: 404,
        message=lambda exc: exc.message,
        log_level=logging.INFO,
    ),
    ErrorTranslation(
        name="http",
        kinds=(StarletteHTTPException,),
        status_code=lambda exc: exc.status_code,
        message=lambda exc: str(exc.detail),
        log_level=logging.INFO,
    ),
    ErrorTranslation(
        name="generic",
        kinds=(Exception,),
        status_code=lambda exc: 500,
        message=lambda exc: GENERIC_ERROR_MESSAGE,
        log_level=logging.ERROR,
    ),
)


def translate_error(exc: Exception) -> JSONResponse:
    """
    Build the response for `exc` from the first matching table entry.

    The generic entry matches every Exception, so this always returns.
    """
    rid = request_id_var.get("")
    for translation in ERROR_TRANSLATIONS:
        if not isinstance(exc, translation.kinds):
            continue

        status_code = translation.status_code(exc)
        message = translation.message(exc)

        if translation.name == "generic":
            context = exc.context if isinstance(exc, CatalogError) else {}
            logger.error(
                "[%s] Unhandled %s: %s | Context: %s",
                rid,
                type(exc).__name__,
                str(exc),
                context,
                # Our own errors were already logged where they were raised
                exc_info=not isinstance(exc, CatalogError),
            )
        else:
            logger.log(
                translation.log_level,
                "[%s] %s (%d): %s",
                rid,
                translation.name,
                status_code,
                message,
            )

        headers = getattr(exc, "headers", None) if translation.name == "http" else None
        return JSONResponse(
            status_code=status_code,
            content={"message": message},
            headers=headers,
        )

    raise RuntimeError("ERROR_TRANSLATIONS has no catch-all entry")  # pragma: no cover


def register_exception_handlers(app: FastAPI) -> None:
    """
    Route every error kind in the table through `translate_error`.

    FastAPI dispatches on exception type; registering all kinds on the
    same function keeps the table the single source of the ordering.
    """

    async def handle_error(request: Request, exc: Exception) -> JSONResponse:
        return translate_error(exc)

    app.add_exception_handler(RequestValidationError, handle_error)
    app.add_exception_handler(StarletteHTTPException, handle_error)
    app.add_exception_handler(CatalogError, handle_error)
    app.add_exception_handler(Exception, handle_error)
