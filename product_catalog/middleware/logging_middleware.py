import re
import time
import json
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp
import structlog
from uuid import uuid4
from typing import Optional

logger = structlog.get_logger()

# Client-supplied request ids are echoed and logged; anything else is replaced
REQUEST_ID_PATTERN = re.compile(r"^[A-Za-z0-9._-]{1,64}$")


def resolve_request_id(raw: Optional[str]) -> str:
    if raw and REQUEST_ID_PATTERN.match(raw):
        return raw
    return str(uuid4())


class LoggingMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: ASGIApp):
        super().__init__(app)

    async def dispatch(self, request: Request, call_next):
        request_id = resolve_request_id(request.headers.get("X-Request-ID"))
        start_time = time.time()

        # Everything logged while handling this request carries these keys
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            path=request.url.path,
            method=request.method
        )

        log_data = {
            "client_ip": request.client.host if request.client else None,
            "user_agent": request.headers.get("user-agent", "")[:100],
        }

        if request.query_params:
            log_data["query_params"] = dict(request.query_params)

        if request.method in ["POST", "PUT", "PATCH"]:
            body = await request.body()
            if body:
                content_type = request.headers.get("content-type", "")
                if "application/json" in content_type:
                    try:
                        body_data = json.loads(body.decode())
                        if isinstance(body_data, dict):
                            for key, value in body_data.items():
                                if isinstance(value, (str, int, float, bool)):
                                    log_data[f"body_{key}"] = value
                                else:
                                    log_data[f"body_{key}"] = str(value)[:100]
                        else:
                            log_data["body"] = str(body_data)[:200]
                    except (json.JSONDecodeError, UnicodeDecodeError):
                        log_data["body"] = body[:200].decode(errors="replace")
                else:
                    log_data["body"] = body[:200].decode(errors="replace")

        logger.info("API Request Started", **log_data)

        request.state.request_id = request_id
        request.state.start_time = start_time

        try:
            response = await call_next(request)
        except Exception as e:
            process_time = time.time() - start_time
            logger.error(
                "API Request Failed",
                error=str(e),
                process_time=round(process_time, 4)
            )
            raise

        process_time = time.time() - start_time

        if response.status_code >= 400:
            logger.warning(
                "API Request Completed with Error",
                status_code=response.status_code,
                process_time=round(process_time, 4),
            )
        else:
            logger.info(
                "API Request Completed Successfully",
                status_code=response.status_code,
                process_time=round(process_time, 4),
            )

        response.headers["X-Request-ID"] = request_id
        structlog.contextvars.clear_contextvars()
        return response
