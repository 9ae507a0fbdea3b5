"""Global exception handlers for standardized error responses.

Implements RFC 7807 Problem Details for HTTP APIs.
Certificate authority errors raised by the services are rendered here,
so routers never translate them by hand.
"""

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from simpleca.core.logging import logger
from simpleca.domain.errors import CAError
from simpleca.models.errors import ProblemDetail, ValidationErrorDetail

GENERIC_SERVER_ERROR = "An unexpected error occurred. Please try again later."


async def ca_error_handler(request: Request, exc: CAError) -> JSONResponse:  # noqa: ASYNC100
    """Handle certificate authority errors.

    Client errors (4xx) keep their message as ``detail``. Server errors are
    logged in full and answered with a generic ``detail``; the short
    ``error`` message and the ``details`` payload are kept for both.

    Args:
        request: The FastAPI request object.
        exc: The CAError that was raised.

    Returns:
        JSONResponse with ProblemDetail body.
    """
    if exc.status_code >= 500:
        logger.opt(exception=exc.__cause__ or exc).error(
            f"{type(exc).__name__}: {exc.message} "
            f"({request.method} {request.url.path})"
        )
        detail = GENERIC_SERVER_ERROR
    else:
        logger.warning(
            f"{type(exc).__name__}: {exc.message} "
            f"({request.method} {request.url.path})"
        )
        detail = exc.message

    problem_detail = ProblemDetail(
        title=exc.title,
        status=exc.status_code,
        detail=detail,
        instance=str(request.url.path),
    )
    problem_detail.add_extension("error", exc.message)
    if exc.details is not None:
        problem_detail.add_extension("details", exc.details)

    return JSONResponse(
        status_code=exc.status_code,
        content=problem_detail.model_dump(exclude_none=True),
    )


async def http_exception_handler(
    request: Request, exc: HTTPException
) -> JSONResponse:  # noqa: ASYNC100
    """Handle HTTPException with RFC 7807 ProblemDetail response.

    Args:
        request: The FastAPI request object.
        exc: The HTTPException that was raised.

    Returns:
        JSONResponse with ProblemDetail body.
    """
    logger.error(
        f"HTTPException: {exc.status_code} - {exc.detail}",
        extra={
            "status_code": exc.status_code,
            "path": str(request.url.path),
            "method": request.method,
        },
    )

    problem_detail = ProblemDetail(
        title="An error occurred",
        status=exc.status_code,
        detail=str(exc.detail),
        instance=str(request.url.path),
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=problem_detail.model_dump(exclude_none=True),
        headers=getattr(exc, "headers", None),
    )


async def general_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:  # noqa: ASYNC100
    """Handle unexpected exceptions with 500 Internal Server Error.

    Args:
        request: The FastAPI request object.
        exc: The exception that was raised.

    Returns:
        JSONResponse with ProblemDetail body.
    """
    logger.exception(
        f"Unexpected error: {type(exc).__name__}",
        extra={
            "exception_type": type(exc).__name__,
            "path": str(request.url.path),
            "method": request.method,
        },
    )

    problem_detail = ProblemDetail(
        title="Internal Server Error",
        status=500,
        detail=GENERIC_SERVER_ERROR,
        instance=str(request.url.path),
    )

    return JSONResponse(
        status_code=500,
        content=problem_detail.model_dump(exclude_none=True),
    )


async def validation_exception_handler(  # noqa: ASYNC100
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle request validation errors with field-level information.

    Args:
        request: The FastAPI request object.
        exc: The RequestValidationError from Pydantic validation.

    Returns:
        JSONResponse with ProblemDetail body including validation errors.
    """
    logger.warning(
        f"Validation error: {len(exc.errors())} errors on "
        f"{request.method} {request.url.path}"
    )

    errors = [
        ValidationErrorDetail(
            type=error["type"],
            loc=tuple(str(loc) for loc in error["loc"]),
            msg=error["msg"],
            input=error.get("input"),
            ctx=(
                {k: str(v) for k, v in error.get("ctx", {}).items()}
                if error.get("ctx")
                else None
            ),
            url=error.get("url"),
        )
        for error in exc.errors()
    ]

    problem_detail = ProblemDetail(
        title="Validation Error",
        status=422,
        detail=f"One or more validation errors occurred ({len(errors)} errors).",
        instance=str(request.url.path),
        errors=errors,
    )

    return JSONResponse(
        status_code=422,
        content=problem_detail.model_dump(mode="json", exclude_none=True),
    )
