"""
Unit tests for TraceIDMiddleware.
"""

from unittest.mock import AsyncMock

import pytest
from fastapi import Request, Response

from simpleca.core.trace_context import trace_id_context
from simpleca.middleware import TraceIDMiddleware


@pytest.fixture
def middleware():
    """Create middleware instance."""
    return TraceIDMiddleware(app=AsyncMock())


@pytest.fixture
def request_mock():
    request = AsyncMock(spec=Request)
    request.method = "POST"
    request.url.path = "/api/leaf/generate"
    return request


@pytest.mark.asyncio
async def test_trace_id_middleware_adds_header(middleware, request_mock):
    """Test middleware adds X-Trace-ID header."""
    call_next = AsyncMock(return_value=Response(content="ok", status_code=200))

    result = await middleware.dispatch(request_mock, call_next)

    assert len(result.headers["X-Trace-ID"]) > 0


@pytest.mark.asyncio
async def test_trace_id_visible_during_request_and_reset_after(middleware, request_mock):
    """The trace_id is set while handling and cleared afterwards."""
    seen = {}

    async def call_next(req):  # noqa: ASYNC100
        seen["trace_id"] = trace_id_context.get()
        return Response()

    result = await middleware.dispatch(request_mock, call_next)

    assert seen["trace_id"] == result.headers["X-Trace-ID"]
    assert trace_id_context.get() is None


@pytest.mark.asyncio
async def test_trace_id_middleware_reraises(middleware, request_mock):
    call_next = AsyncMock(side_effect=RuntimeError("boom"))

    with pytest.raises(RuntimeError):
        await middleware.dispatch(request_mock, call_next)

    assert trace_id_context.get() is None
