import json
from typing import Callable
from starlette.middleware.base import BaseHTTPMiddleware
from fastapi.responses import JSONResponse, Response
from fastapi import Request
from shared.core.schemas import JsonOutResult
from shared.utils.app_status_code import AppStatusCode


class JsonResponseMiddleware(BaseHTTPMiddleware):
    """Wrap successful JSON bodies in the JsonOutResult envelope.

    Error bodies are already enveloped by the exception handlers, and bodies
    built with success_response() are passed through untouched.
    """

    async def dispatch(self, request: Request, call_next: Callable):
        # Skip docs/openapi endpoints
        if request.url.path.startswith(("/openapi", "/docs", "/redoc")):
            return await call_next(request)

        response = await call_next(request)

        content_type = response.headers.get("content-type", "")
        if not (200 <= response.status_code < 400) or "application/json" not in content_type:
            return response

        # Read the full body
        body_bytes = b""
        async for chunk in response.body_iterator:
            body_bytes += chunk

        headers = {k: v for k, v in response.headers.items()
                   if k.lower() != "content-length"}

        try:
            data = json.loads(body_bytes.decode("utf-8")) if body_bytes else None
        except ValueError:
            return Response(content=body_bytes, status_code=response.status_code, headers=headers)

        # Skip wrapping if already wrapped
        if isinstance(data, dict) and {"status", "status_code", "message"}.issubset(data.keys()):
            return JSONResponse(content=data, status_code=response.status_code, headers=headers)

        wrapped = JsonOutResult(
            data=data,
            status="Success",
            status_code=str(AppStatusCode.DATA_RETRIEVED_SUCCESSFULLY),
            message="Data retrieved successfully"
        ).model_dump()

        return JSONResponse(content=wrapped, status_code=response.status_code, headers=headers)
